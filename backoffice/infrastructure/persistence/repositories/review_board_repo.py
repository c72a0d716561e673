"""Review board membership lookups."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.infrastructure.persistence.models.review_board import (
    ReviewBoard,
    ReviewBoardMember,
)


class ReviewBoardRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def is_member(self, user_id: int, template_id: int) -> bool:
        result = await self.db.execute(
            select(ReviewBoardMember.user_id)
            .join(ReviewBoard, ReviewBoard.id == ReviewBoardMember.review_board_id)
            .where(
                ReviewBoard.template_id == template_id,
                ReviewBoardMember.user_id == user_id,
            )
            .limit(1)
        )
        return result.scalar_one_or_none() is not None
