"""Submit application use case: eligibility, cooldown, and per-department lock."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime

from backoffice.application.interfaces.repositories import (
    IApplicationRepository,
    IApplicationTemplateRepository,
    IUserRepository,
)
from backoffice.application.services.eligibility_gate import (
    check_submission,
    prior_denial_count,
)
from backoffice.domain.entities import ApplicationEntity
from backoffice.domain.enums import EligibilityReason
from backoffice.domain.exceptions import (
    AuthorizationException,
    EligibilityException,
    ResourceNotFoundException,
)
from backoffice.domain.value_objects import ApplicationResponse
from backoffice.shared.telemetry import get_logger, traced
from backoffice.shared.utils import utc_now

logger = get_logger(__name__)


def _to_responses(
    responses: Mapping[int, str] | list[ApplicationResponse],
) -> list[ApplicationResponse]:
    if isinstance(responses, Mapping):
        return [ApplicationResponse(question_id=int(q), response=a) for q, a in responses.items()]
    return list(responses)


class SubmitApplicationUseCase:
    """Creates a PENDING application when the user is eligible for the department.

    Must run inside one transaction: the per-(user, department) lock is held
    from the history read until commit, so concurrent submissions serialize.
    """

    def __init__(
        self,
        application_repo: IApplicationRepository,
        template_repo: IApplicationTemplateRepository,
        user_repo: IUserRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._application_repo = application_repo
        self._template_repo = template_repo
        self._user_repo = user_repo
        self._clock = clock

    @traced("application.submit")
    async def execute(
        self,
        user_id: int,
        template_id: int,
        responses: Mapping[int, str] | list[ApplicationResponse],
    ) -> ApplicationEntity:
        """Submit an application for template on behalf of user_id.

        Args:
            user_id: Applicant (the authenticated user).
            template_id: Template being answered.
            responses: question id -> answer, or ApplicationResponse list.

        Returns:
            The created application.

        Raises:
            ResourceNotFoundException: If template or user does not exist.
            EligibilityException: Template inactive, role ineligible, pending
                application exists, or cooldown active.
            AuthorizationException: If the user is banned.
        """
        template = await self._template_repo.get_by_id(template_id)
        if template is None:
            raise ResourceNotFoundException("application_template", template_id)
        if not template.active:
            raise EligibilityException(
                EligibilityReason.TEMPLATE_INACTIVE.value,
                "This application is not currently accepting submissions",
                department=template.department.value,
            )

        user = await self._user_repo.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        if user.is_banned:
            raise AuthorizationException(resource="application", action="submit")

        await self._application_repo.lock_applicant_department(user_id, template.department)
        history = await self._application_repo.get_for_user_and_department(
            user_id, template.department
        )
        now = self._clock()
        check_submission(user.role, template.department, history, now)

        application = ApplicationEntity.submit(
            user_id=user_id,
            template_id=template.id,
            department=template.department,
            responses=_to_responses(responses),
            now=now,
            prior_denial_count=prior_denial_count(history),
        )
        created = await self._application_repo.create_application(application)
        logger.info(
            "Application %s submitted by user %s to %s",
            created.id,
            user_id,
            template.department.value,
        )
        return created
