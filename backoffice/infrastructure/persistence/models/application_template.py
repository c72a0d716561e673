"""ApplicationTemplate and TemplateQuestion ORM models."""

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.infrastructure.persistence.database import Base
from backoffice.infrastructure.persistence.models.mixins import BaseModel


class ApplicationTemplate(BaseModel, Base):
    """Application form for one department. Table: application_template."""

    __tablename__ = "application_template"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    department: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true")
    )


class TemplateQuestion(BaseModel, Base):
    """Question on a template. Table: template_question."""

    __tablename__ = "template_question"

    template_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("application_template.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    question: Mapped[str] = mapped_column(Text, nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
