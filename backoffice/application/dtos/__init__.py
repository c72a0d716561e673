"""Application DTOs (read-models and results, no ORM dependency)."""

from backoffice.application.dtos.community import (
    LookupFailed,
    MemberNotFound,
    MemberRolesFound,
    MemberRolesLookup,
    RateLimited,
)
from backoffice.application.dtos.role_sync import (
    BulkRoleSyncResult,
    RoleSyncOutcome,
    RoleSyncStatus,
)
from backoffice.application.dtos.template import ApplicationTemplateResult

__all__ = [
    "ApplicationTemplateResult",
    "BulkRoleSyncResult",
    "LookupFailed",
    "MemberNotFound",
    "MemberRolesFound",
    "MemberRolesLookup",
    "RateLimited",
    "RoleSyncOutcome",
    "RoleSyncStatus",
]
