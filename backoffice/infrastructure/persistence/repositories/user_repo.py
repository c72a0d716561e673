"""User repository. Interface methods return domain UserEntity objects."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.domain.entities import UserEntity
from backoffice.domain.enums import Department, Role
from backoffice.domain.exceptions import ResourceNotFoundException, ValidationException
from backoffice.infrastructure.persistence.models.user import User
from backoffice.infrastructure.persistence.repositories.base import BaseRepository


def _user_to_entity(u: User) -> UserEntity:
    """Map ORM User to domain UserEntity."""
    return UserEntity(
        id=u.id,
        name=u.name,
        role=Role(u.role),
        department=Department(u.department),
        is_banned=u.is_banned,
        has_override=u.has_override,
        external_id=u.external_id,
    )


class UserRepository(BaseRepository[User]):
    """Identity store on app_user."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_by_id(self, user_id: int) -> UserEntity | None:
        user = await super().get_by_id(user_id)
        return _user_to_entity(user) if user else None

    async def get_by_external_id(self, external_id: str) -> UserEntity | None:
        result = await self.db.execute(select(User).where(User.external_id == external_id))
        user = result.scalar_one_or_none()
        return _user_to_entity(user) if user else None

    async def update_user(self, user: UserEntity) -> UserEntity:
        """Persist mutable fields; raise ValidationException if external_id is taken."""
        row = await super().get_by_id(user.id)
        if row is None:
            raise ResourceNotFoundException("user", user.id)
        row.name = user.name
        row.role = user.role.value
        row.department = user.department.value
        row.is_banned = user.is_banned
        row.has_override = user.has_override
        row.external_id = user.external_id
        try:
            updated = await self.update(row)
        except IntegrityError as e:
            raise ValidationException(
                "External identity is already linked to another user",
                field="external_id",
            ) from e
        return _user_to_entity(updated)

    async def delete_user(self, user_id: int) -> bool:
        row = await super().get_by_id(user_id)
        if row is None:
            return False
        await self.delete(row)
        return True

    async def list_syncable(self, excluded_roles: Iterable[Role]) -> list[UserEntity]:
        excluded = [r.value for r in excluded_roles]
        stmt = select(User).where(User.external_id.is_not(None)).order_by(User.id)
        if excluded:
            stmt = stmt.where(User.role.not_in(excluded))
        result = await self.db.execute(stmt)
        return [_user_to_entity(u) for u in result.scalars().all()]
