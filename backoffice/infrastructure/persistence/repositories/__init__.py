"""SQLAlchemy implementations of the application repository ports."""

from backoffice.infrastructure.persistence.repositories.application_repo import (
    ApplicationRepository,
)
from backoffice.infrastructure.persistence.repositories.application_template_repo import (
    ApplicationTemplateRepository,
)
from backoffice.infrastructure.persistence.repositories.review_board_repo import (
    ReviewBoardRepository,
)
from backoffice.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "ApplicationRepository",
    "ApplicationTemplateRepository",
    "ReviewBoardRepository",
    "UserRepository",
]
