"""User, role sync and department sync API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from backoffice.application.dtos.role_sync import DepartmentSyncStatus, RoleSyncStatus
from backoffice.domain.enums import Department, Role


class UserUpdate(BaseModel):
    """Request body for updating a user (partial). Omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    role: Role | None = None
    department: Department | None = None
    is_banned: bool | None = None
    has_override: bool | None = None


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str | None
    role: Role
    department: Department
    is_banned: bool
    has_override: bool
    external_id: str | None


class ExternalIdentityLink(BaseModel):
    """Request body sent by the sign-in flow after an external sign-in."""

    external_id: str = Field(..., min_length=1, max_length=64)


class RoleSyncResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    status: RoleSyncStatus
    previous_role: Role | None
    role: Role | None
    synced_role: Role | None


class DepartmentSyncResponse(BaseModel):
    """Department sync result; candidates is set when several departments matched."""

    model_config = ConfigDict(from_attributes=True)

    user_id: int
    status: DepartmentSyncStatus
    previous_department: Department
    department: Department
    candidates: list[Department]


class BulkRoleSyncResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    processed: int
    updated: int
    failed: int
