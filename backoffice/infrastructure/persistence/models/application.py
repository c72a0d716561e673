"""Application, ApplicationResponse and ApplicationNote ORM models."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.infrastructure.persistence.database import Base
from backoffice.infrastructure.persistence.models.mixins import BaseModel


class Application(BaseModel, Base):
    """Submitted application. Table: application.

    department is copied from the template so pending uniqueness and the
    submission lock can key on (user_id, department).
    """

    __tablename__ = "application"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False
    )
    template_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("application_template.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    department: Mapped[str] = mapped_column(String(32), nullable=False)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, server_default=text("'PENDING'")
    )
    interview_status: Mapped[str | None] = mapped_column(String(32), nullable=True)
    denial_count: Mapped[int] = mapped_column(
        Integer, nullable=False, server_default=text("0")
    )
    last_denied_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    cooldown_until: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    interview_failed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    interview_completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    reviewer_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
    )

    __table_args__ = (
        Index("ix_application_user_department", "user_id", "department"),
        Index(
            "uq_application_pending_user_department",
            "user_id",
            "department",
            unique=True,
            postgresql_where=text("status = 'PENDING'"),
        ),
    )


class ApplicationResponse(Base):
    """Answer to one template question. Table: application_response."""

    __tablename__ = "application_response"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    application_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("application.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    question_id: Mapped[int] = mapped_column(Integer, nullable=False)
    response: Mapped[str] = mapped_column(Text, nullable=False)


class ApplicationNote(Base):
    """Reviewer note; append-only. Table: application_note."""

    __tablename__ = "application_note"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    application_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("application.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
