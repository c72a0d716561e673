"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference domain entities or application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from backoffice.application.dtos.template import ApplicationTemplateResult
    from backoffice.domain.entities import ApplicationEntity, UserEntity
    from backoffice.domain.enums import Department, Role


# Identity store
class IUserRepository(Protocol):
    """Protocol for the identity store (DIP)."""

    async def get_by_id(self, user_id: int) -> UserEntity | None:
        """Return user by internal id."""

    async def get_by_external_id(self, external_id: str) -> UserEntity | None:
        """Return the user linked to an external (Discord) identity."""

    async def update_user(self, user: UserEntity) -> UserEntity:
        """Persist role, department, ban flag and external id; return stored user."""

    async def delete_user(self, user_id: int) -> bool:
        """Delete user; return True if deleted, False if not found."""

    async def list_syncable(self, excluded_roles: Iterable[Role]) -> list[UserEntity]:
        """Return users with an external identity whose role is not excluded."""


# Application store
class IApplicationRepository(Protocol):
    """Protocol for the application store (DIP).

    Writes must run in the caller's transaction; lock_applicant_department
    serializes submissions per (user, department) until that transaction ends.
    """

    async def lock_applicant_department(self, user_id: int, department: Department) -> None:
        """Take a transaction-scoped mutual-exclusion key for (user, department)."""

    async def get_by_id(
        self, application_id: int, *, for_update: bool = False
    ) -> ApplicationEntity | None:
        """Return application with responses and notes; optionally row-locked."""

    async def get_for_user_and_department(
        self, user_id: int, department: Department
    ) -> list[ApplicationEntity]:
        """Return the user's applications to department, newest first."""

    async def create_application(self, application: ApplicationEntity) -> ApplicationEntity:
        """Insert a new application with its responses; return it with id set."""

    async def save_application(self, application: ApplicationEntity) -> ApplicationEntity:
        """Persist lifecycle fields and append new notes; return stored application."""


# Application template store
class IApplicationTemplateRepository(Protocol):
    """Protocol for application template reads (DIP)."""

    async def get_by_id(self, template_id: int) -> ApplicationTemplateResult | None:
        """Return template by id."""

    async def list_active(self) -> list[ApplicationTemplateResult]:
        """Return active templates ordered by name."""


# Review board membership
class IReviewBoardRepository(Protocol):
    """Protocol for review board membership lookups (DIP)."""

    async def is_member(self, user_id: int, template_id: int) -> bool:
        """Return True if user sits on the review board for template."""


# Opens a short transaction around an identity store; used where a network
# call must happen between the read and the write.
UserStoreScope = Callable[[], AbstractAsyncContextManager["IUserRepository"]]
