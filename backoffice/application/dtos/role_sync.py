"""DTOs for role and department sync use cases."""

from dataclasses import dataclass, field
from enum import Enum

from backoffice.domain.enums import Department, Role


class RoleSyncStatus(str, Enum):
    """What happened to the stored role."""

    UPDATED = "updated"
    UNCHANGED = "unchanged"
    PROTECTED = "protected"
    NO_MAPPED_ROLE = "no_mapped_role"
    NO_EXTERNAL_IDENTITY = "no_external_identity"
    EXTERNAL_SYNC_FAILED = "external_sync_failed"


@dataclass(frozen=True)
class RoleSyncOutcome:
    """Result of syncing one user. role is the stored role after the sync."""

    user_id: int
    status: RoleSyncStatus
    previous_role: Role | None
    role: Role | None
    synced_role: Role | None = None

    @property
    def changed(self) -> bool:
        return self.status == RoleSyncStatus.UPDATED


@dataclass(frozen=True)
class BulkRoleSyncResult:
    """Counts from syncing every linked user."""

    processed: int
    updated: int
    failed: int


class DepartmentSyncStatus(str, Enum):
    """What happened to the stored department."""

    UPDATED = "updated"
    UNCHANGED = "unchanged"
    MULTIPLE_DEPARTMENTS = "multiple_departments"
    PROTECTED = "protected"
    NO_MAPPED_DEPARTMENT = "no_mapped_department"
    NO_EXTERNAL_IDENTITY = "no_external_identity"
    EXTERNAL_SYNC_FAILED = "external_sync_failed"


@dataclass(frozen=True)
class DepartmentSyncOutcome:
    """Result of syncing one user's department.

    With MULTIPLE_DEPARTMENTS nothing is stored; candidates lists the
    departments the user may choose from as their primary one.
    """

    user_id: int
    status: DepartmentSyncStatus
    previous_department: Department
    department: Department
    candidates: list[Department] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.status == DepartmentSyncStatus.UPDATED
