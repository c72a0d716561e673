"""List the application templates a user may currently apply to."""

from backoffice.application.dtos.template import ApplicationTemplateResult
from backoffice.application.interfaces.repositories import (
    IApplicationTemplateRepository,
    IUserRepository,
)
from backoffice.application.services.eligibility_gate import filter_available_templates
from backoffice.domain.exceptions import ResourceNotFoundException


class ListAvailableTemplatesUseCase:
    def __init__(
        self,
        template_repo: IApplicationTemplateRepository,
        user_repo: IUserRepository,
    ) -> None:
        self._template_repo = template_repo
        self._user_repo = user_repo

    async def execute(self, user_id: int) -> list[ApplicationTemplateResult]:
        user = await self._user_repo.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        templates = await self._template_repo.list_active()
        return filter_available_templates(user.role, templates)
