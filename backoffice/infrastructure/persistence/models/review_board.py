"""ReviewBoard and ReviewBoardMember ORM models."""

from sqlalchemy import ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.infrastructure.persistence.database import Base
from backoffice.infrastructure.persistence.models.mixins import BaseModel


class ReviewBoard(BaseModel, Base):
    """Review board attached to one template. Table: review_board."""

    __tablename__ = "review_board"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    template_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("application_template.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )


class ReviewBoardMember(Base):
    """Junction: user sits on a review board. Table: review_board_member."""

    __tablename__ = "review_board_member"

    review_board_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("review_board.id", ondelete="CASCADE"),
        primary_key=True,
        nullable=False,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        primary_key=True,
        nullable=False,
    )

    __table_args__ = (
        Index("ix_review_board_member_user_id", "user_id"),
        UniqueConstraint("review_board_id", "user_id", name="uq_review_board_member"),
    )
