"""ORM models. Importing this package registers every table on Base.metadata."""

from backoffice.infrastructure.persistence.models.application import (
    Application,
    ApplicationNote,
    ApplicationResponse,
)
from backoffice.infrastructure.persistence.models.application_template import (
    ApplicationTemplate,
    TemplateQuestion,
)
from backoffice.infrastructure.persistence.models.review_board import (
    ReviewBoard,
    ReviewBoardMember,
)
from backoffice.infrastructure.persistence.models.user import User

__all__ = [
    "Application",
    "ApplicationNote",
    "ApplicationResponse",
    "ApplicationTemplate",
    "ReviewBoard",
    "ReviewBoardMember",
    "TemplateQuestion",
    "User",
]
