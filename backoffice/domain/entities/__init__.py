"""Domain entities: business concepts independent of persistence."""

from backoffice.domain.entities.application import ApplicationEntity, ApplicationNote
from backoffice.domain.entities.user import UserEntity

__all__ = ["ApplicationEntity", "ApplicationNote", "UserEntity"]
