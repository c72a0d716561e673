"""Review and interview use cases on a row-locked application."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from backoffice.application.interfaces.repositories import (
    IApplicationRepository,
    IReviewBoardRepository,
)
from backoffice.application.services.permission_engine import can_review_applications
from backoffice.domain.entities import ApplicationEntity
from backoffice.domain.enums import ReviewAction
from backoffice.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    StateTransitionException,
)
from backoffice.domain.value_objects import Actor
from backoffice.shared.telemetry import get_logger, traced
from backoffice.shared.utils import utc_now

logger = get_logger(__name__)


async def load_reviewable(
    application_repo: IApplicationRepository,
    review_board_repo: IReviewBoardRepository,
    application_id: int,
    actor: Actor,
    action: str,
) -> ApplicationEntity:
    """Lock the application row and check the actor may review it.

    Raises:
        ResourceNotFoundException: If the application does not exist.
        AuthorizationException: If the actor may not review this template.
    """
    application = await application_repo.get_by_id(application_id, for_update=True)
    if application is None:
        raise ResourceNotFoundException("application", application_id)
    on_board = await review_board_repo.is_member(actor.user_id, application.template_id)
    if not can_review_applications(actor.role, actor.has_override, on_board):
        raise AuthorizationException(resource="application", action=action)
    return application


class ReviewApplicationUseCase:
    """Accepts or denies a PENDING application."""

    def __init__(
        self,
        application_repo: IApplicationRepository,
        review_board_repo: IReviewBoardRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._application_repo = application_repo
        self._review_board_repo = review_board_repo
        self._clock = clock

    @traced("application.review")
    async def execute(
        self,
        application_id: int,
        actor: Actor,
        action: ReviewAction | str,
        note: str | None = None,
    ) -> ApplicationEntity:
        """Apply a review decision.

        Raises:
            ResourceNotFoundException: Unknown application.
            AuthorizationException: Actor may not review.
            StateTransitionException: Application is not PENDING.
        """
        action = ReviewAction(action)
        application = await load_reviewable(
            self._application_repo,
            self._review_board_repo,
            application_id,
            actor,
            "review",
        )
        try:
            application.review(action, actor.user_id, self._clock(), note=note)
        except StateTransitionException as e:
            logger.warning(
                "Rejected %s on application %s: %s", action.value, application_id, e.details
            )
            raise
        saved = await self._application_repo.save_application(application)
        logger.info(
            "Application %s %s by user %s (denials=%s)",
            application_id,
            saved.status.value,
            actor.user_id,
            saved.denial_count,
        )
        return saved
