"""User administration and role sync use cases."""

from backoffice.application.use_cases.users.sync_user_role import SyncUserRoleUseCase
from backoffice.application.use_cases.users.user_administration import (
    DeleteUserUseCase,
    UpdateUserUseCase,
)

__all__ = [
    "DeleteUserUseCase",
    "SyncUserRoleUseCase",
    "UpdateUserUseCase",
]
