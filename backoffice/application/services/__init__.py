"""Application services: permission guards, eligibility gate, role synchronizer."""

from backoffice.application.services import eligibility_gate, permission_engine
from backoffice.application.services.role_synchronizer import (
    ExternalDepartmentMap,
    ExternalRoleMap,
    RoleSynchronizer,
    is_sync_protected,
    resolve_synced_role,
)

__all__ = [
    "ExternalDepartmentMap",
    "ExternalRoleMap",
    "RoleSynchronizer",
    "eligibility_gate",
    "is_sync_protected",
    "permission_engine",
    "resolve_synced_role",
]
