"""Application template repository (read side)."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.application.dtos.template import ApplicationTemplateResult
from backoffice.domain.enums import Department
from backoffice.infrastructure.persistence.models.application_template import (
    ApplicationTemplate,
)
from backoffice.infrastructure.persistence.repositories.base import BaseRepository


def _template_to_result(t: ApplicationTemplate) -> ApplicationTemplateResult:
    return ApplicationTemplateResult(
        id=t.id,
        name=t.name,
        description=t.description,
        department=Department(t.department),
        active=t.active,
    )


class ApplicationTemplateRepository(BaseRepository[ApplicationTemplate]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, ApplicationTemplate)

    async def get_by_id(self, template_id: int) -> ApplicationTemplateResult | None:
        template = await super().get_by_id(template_id)
        return _template_to_result(template) if template else None

    async def list_active(self) -> list[ApplicationTemplateResult]:
        result = await self.db.execute(
            select(ApplicationTemplate)
            .where(ApplicationTemplate.active.is_(True))
            .order_by(ApplicationTemplate.name)
        )
        return [_template_to_result(t) for t in result.scalars().all()]
