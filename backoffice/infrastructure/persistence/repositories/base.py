"""Shared persistence helpers for the repositories."""

from typing import Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Primary-key lookup and add/flush/delete for one ORM model.

    Subclasses expose domain entities or DTOs; the ORM rows stay here.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: int) -> ModelType | None:
        return await self.db.get(self.model, entity_id)

    async def create(self, obj: ModelType) -> ModelType:
        """Insert and reload so server defaults (id, timestamps) are populated."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def update(self, obj: ModelType) -> ModelType:
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        await self.db.delete(obj)
        await self.db.flush()
