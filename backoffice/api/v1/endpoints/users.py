"""Users API: guarded updates, deletion, identity link, role and department sync."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from backoffice.api.v1.dependencies import (
    CurrentActor,
    get_delete_user_use_case,
    get_sync_user_role_use_case,
    get_update_user_use_case,
)
from backoffice.application.use_cases.users import (
    DeleteUserUseCase,
    SyncUserRoleUseCase,
    UpdateUserUseCase,
)
from backoffice.core.limiter import limit_bulk_sync, limit_writes
from backoffice.schemas.user import (
    BulkRoleSyncResponse,
    DepartmentSyncResponse,
    ExternalIdentityLink,
    RoleSyncResponse,
    UserResponse,
    UserUpdate,
)

router = APIRouter()


@router.post("/me/external-identity", response_model=RoleSyncResponse)
@limit_writes
async def link_external_identity(
    request: Request,
    body: ExternalIdentityLink,
    actor: CurrentActor,
    use_case: Annotated[SyncUserRoleUseCase, Depends(get_sync_user_role_use_case)],
):
    """Called by the sign-in flow: link the Discord identity once, then sync the role."""
    return await use_case.handle_sign_in(actor.user_id, body.external_id)


@router.post("/sync-roles", response_model=BulkRoleSyncResponse)
@limit_bulk_sync
async def sync_all_roles(
    request: Request,
    actor: CurrentActor,
    use_case: Annotated[SyncUserRoleUseCase, Depends(get_sync_user_role_use_case)],
):
    """Sync every linked, unprotected user from the Discord guild."""
    return await use_case.sync_all(actor)


@router.post("/{user_id}/sync-role", response_model=RoleSyncResponse)
@limit_writes
async def sync_user_role(
    request: Request,
    user_id: int,
    actor: CurrentActor,
    use_case: Annotated[SyncUserRoleUseCase, Depends(get_sync_user_role_use_case)],
):
    """Sync one user's role from the Discord guild."""
    return await use_case.sync_user(actor, user_id)


@router.post("/{user_id}/sync-department", response_model=DepartmentSyncResponse)
@limit_writes
async def sync_user_department(
    request: Request,
    user_id: int,
    actor: CurrentActor,
    use_case: Annotated[SyncUserRoleUseCase, Depends(get_sync_user_role_use_case)],
):
    """Set the department from Discord roles, or list the candidates to choose from."""
    return await use_case.sync_department(actor, user_id)


@router.patch("/{user_id}", response_model=UserResponse)
@limit_writes
async def update_user(
    request: Request,
    user_id: int,
    body: UserUpdate,
    actor: CurrentActor,
    use_case: Annotated[UpdateUserUseCase, Depends(get_update_user_use_case)],
):
    """Update name, role, department, ban status or override (each guarded)."""
    return await use_case.execute(actor, user_id, **body.model_dump(exclude_unset=True))


@router.delete("/{user_id}", status_code=204)
@limit_writes
async def delete_user(
    request: Request,
    user_id: int,
    actor: CurrentActor,
    use_case: Annotated[DeleteUserUseCase, Depends(get_delete_user_use_case)],
) -> Response:
    await use_case.execute(actor, user_id)
    return Response(status_code=204)
