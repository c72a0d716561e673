"""Record interview use case."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from backoffice.application.interfaces.repositories import (
    IApplicationRepository,
    IReviewBoardRepository,
)
from backoffice.application.use_cases.applications.review_application import load_reviewable
from backoffice.domain.entities import ApplicationEntity
from backoffice.domain.enums import InterviewResult
from backoffice.domain.exceptions import StateTransitionException
from backoffice.domain.value_objects import Actor
from backoffice.shared.telemetry import get_logger, traced
from backoffice.shared.utils import utc_now

logger = get_logger(__name__)


class RecordInterviewUseCase:
    """Records an interview outcome on an ACCEPTED application."""

    def __init__(
        self,
        application_repo: IApplicationRepository,
        review_board_repo: IReviewBoardRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._application_repo = application_repo
        self._review_board_repo = review_board_repo
        self._clock = clock

    @traced("application.record_interview")
    async def execute(
        self,
        application_id: int,
        actor: Actor,
        result: InterviewResult | str,
        note: str | None = None,
    ) -> ApplicationEntity:
        result = InterviewResult(result)
        application = await load_reviewable(
            self._application_repo,
            self._review_board_repo,
            application_id,
            actor,
            "record_interview",
        )
        try:
            application.record_interview(result, actor.user_id, self._clock(), note=note)
        except StateTransitionException as e:
            logger.warning(
                "Rejected interview %s on application %s: %s",
                result.value,
                application_id,
                e.message,
            )
            raise
        saved = await self._application_repo.save_application(application)
        logger.info(
            "Interview %s recorded on application %s (status=%s)",
            result.value,
            application_id,
            saved.status.value,
        )
        return saved
