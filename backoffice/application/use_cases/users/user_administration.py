"""Administrative changes to users: role, department, ban, override, delete."""

from __future__ import annotations

from backoffice.application.interfaces.repositories import IUserRepository
from backoffice.application.services.permission_engine import (
    can_change_ban_status,
    can_change_department,
    can_change_override,
    can_change_role,
    can_delete_user,
    can_edit_user,
)
from backoffice.domain.entities import UserEntity
from backoffice.domain.enums import Department, Role
from backoffice.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from backoffice.domain.value_objects import Actor
from backoffice.shared.telemetry import get_logger, traced

logger = get_logger(__name__)


class UpdateUserUseCase:
    """Applies a partial update to a user after checking every guard involved.

    All guards are checked before anything is changed, so a refused field
    leaves the whole update unapplied.
    """

    def __init__(self, user_repo: IUserRepository) -> None:
        self._user_repo = user_repo

    @traced("user.update")
    async def execute(
        self,
        actor: Actor,
        user_id: int,
        *,
        name: str | None = None,
        role: Role | str | None = None,
        department: Department | str | None = None,
        is_banned: bool | None = None,
        has_override: bool | None = None,
    ) -> UserEntity:
        """Update the given fields; None means leave unchanged.

        Raises:
            ResourceNotFoundException: Unknown user.
            ValidationException: Unknown role or department value.
            AuthorizationException: Any guard refuses the change.
        """
        user = await self._user_repo.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        if not can_edit_user(actor.user_id, actor.role, actor.has_override, user_id):
            raise AuthorizationException(resource="user", action="update")

        new_role = _parse(Role, role, "role")
        new_department = _parse(Department, department, "department")

        if new_role is not None and new_role != user.role:
            if not can_change_role(actor.role, actor.has_override, user.role, new_role):
                raise AuthorizationException(resource="user", action="change_role")
        if new_department is not None and new_department != user.department:
            if not can_change_department(
                actor.role, actor.has_override, user.department, new_department
            ):
                raise AuthorizationException(resource="user", action="change_department")
        if is_banned is not None and is_banned != user.is_banned:
            if not can_change_ban_status(actor.role, actor.has_override):
                raise AuthorizationException(resource="user", action="change_ban_status")
        if has_override is not None and has_override != user.has_override:
            if not can_change_override(actor.has_override):
                raise AuthorizationException(resource="user", action="change_override")

        if name is not None:
            user.name = name
        if new_role is not None:
            user.role = new_role
        if new_department is not None:
            user.department = new_department
        if is_banned is not None:
            user.is_banned = is_banned
        if has_override is not None:
            user.has_override = has_override

        saved = await self._user_repo.update_user(user)
        logger.info(
            "User %s updated by %s (role=%s, department=%s, banned=%s)",
            user_id,
            actor.user_id,
            saved.role.value,
            saved.department.value,
            saved.is_banned,
        )
        return saved


class DeleteUserUseCase:
    def __init__(self, user_repo: IUserRepository) -> None:
        self._user_repo = user_repo

    @traced("user.delete")
    async def execute(self, actor: Actor, user_id: int) -> None:
        user = await self._user_repo.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        if not can_delete_user(actor.role, actor.has_override, user.role, user.has_override):
            raise AuthorizationException(resource="user", action="delete")
        await self._user_repo.delete_user(user_id)
        logger.info("User %s deleted by %s", user_id, actor.user_id)


def _parse(enum_cls, value, field: str):
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError as e:
        raise ValidationException(f"Invalid {field}: {value}", field=field) from e
