"""Application ports: repository and service protocols."""

from backoffice.application.interfaces.repositories import (
    IApplicationRepository,
    IApplicationTemplateRepository,
    IReviewBoardRepository,
    IUserRepository,
    UserStoreScope,
)
from backoffice.application.interfaces.services import ICommunityPlatformClient

__all__ = [
    "IApplicationRepository",
    "IApplicationTemplateRepository",
    "ICommunityPlatformClient",
    "IReviewBoardRepository",
    "IUserRepository",
    "UserStoreScope",
]
