"""DTOs for application templates (no dependency on ORM)."""

from dataclasses import dataclass

from backoffice.domain.enums import Department


@dataclass(frozen=True)
class ApplicationTemplateResult:
    """Template read-model. Inactive templates accept no new submissions."""

    id: int
    name: str
    description: str | None
    department: Department
    active: bool
