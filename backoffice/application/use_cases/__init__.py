"""Application use cases: one entry point per workflow."""

from backoffice.application.use_cases.applications import (
    ListAvailableTemplatesUseCase,
    RecordInterviewUseCase,
    ReviewApplicationUseCase,
    SubmitApplicationUseCase,
)
from backoffice.application.use_cases.users import (
    DeleteUserUseCase,
    SyncUserRoleUseCase,
    UpdateUserUseCase,
)

__all__ = [
    "DeleteUserUseCase",
    "ListAvailableTemplatesUseCase",
    "RecordInterviewUseCase",
    "ReviewApplicationUseCase",
    "SubmitApplicationUseCase",
    "SyncUserRoleUseCase",
    "UpdateUserUseCase",
]
