"""User ORM model. Identity store for roles, departments and the external link."""

from sqlalchemy import Boolean, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.infrastructure.persistence.database import Base
from backoffice.infrastructure.persistence.models.mixins import BaseModel


class User(BaseModel, Base):
    """User model. Table: app_user. external_id (Discord user id) is unique when set."""

    __tablename__ = "app_user"

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True, unique=True)
    external_id: Mapped[str | None] = mapped_column(String(64), nullable=True, unique=True)
    role: Mapped[str] = mapped_column(
        String(32), nullable=False, server_default=text("'APPLICANT'")
    )
    department: Mapped[str] = mapped_column(
        String(32), nullable=False, server_default=text("'N_A'")
    )
    is_banned: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )
    has_override: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )

    __table_args__ = (Index("ix_app_user_role", "role"),)
