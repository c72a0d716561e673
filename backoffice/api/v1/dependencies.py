"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, the current actor, and
application use cases. Routes depend only on these dependencies, not on
infrastructure directly.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.application.services.role_synchronizer import (
    ExternalDepartmentMap,
    ExternalRoleMap,
    RoleSynchronizer,
)
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
from backoffice.core.config import get_settings
from backoffice.domain.exceptions import AuthenticationException, AuthorizationException
from backoffice.domain.value_objects import Actor
from backoffice.infrastructure.external.discord import DiscordGuildClient
from backoffice.infrastructure.persistence.database import (
    get_db,
    get_db_transactional,
    transactional_session,
)
from backoffice.infrastructure.persistence.repositories import (
    ApplicationRepository,
    ApplicationTemplateRepository,
    ReviewBoardRepository,
    UserRepository,
)
from backoffice.infrastructure.security.jwt import verify_token

_http_bearer = HTTPBearer(auto_error=False)


# ---- Current actor ----


async def _token_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> int:
    """Bearer token subject as a user id. Checked before any DB session is opened."""
    if not credentials:
        raise AuthenticationException("Not authenticated")
    try:
        payload = verify_token(credentials.credentials)
        return int(payload["sub"])
    except (ValueError, KeyError, TypeError) as e:
        raise AuthenticationException("Invalid or expired token") from e


async def get_current_actor(
    user_id: Annotated[int, Depends(_token_user_id)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Actor:
    """Resolve the bearer token to the acting user; banned users are refused."""
    user = await UserRepository(db).get_by_id(user_id)
    if user is None:
        raise AuthenticationException("Unknown user")
    if user.is_banned:
        raise AuthorizationException(message="Account is banned")
    return user.as_actor()


CurrentActor = Annotated[Actor, Depends(get_current_actor)]


# ---- Applications ----


async def get_submit_application_use_case(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> SubmitApplicationUseCase:
    return SubmitApplicationUseCase(
        application_repo=ApplicationRepository(db),
        template_repo=ApplicationTemplateRepository(db),
        user_repo=UserRepository(db),
    )


async def get_review_application_use_case(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> ReviewApplicationUseCase:
    return ReviewApplicationUseCase(
        application_repo=ApplicationRepository(db),
        review_board_repo=ReviewBoardRepository(db),
    )


async def get_record_interview_use_case(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> RecordInterviewUseCase:
    return RecordInterviewUseCase(
        application_repo=ApplicationRepository(db),
        review_board_repo=ReviewBoardRepository(db),
    )


async def get_list_available_templates_use_case(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ListAvailableTemplatesUseCase:
    return ListAvailableTemplatesUseCase(
        template_repo=ApplicationTemplateRepository(db),
        user_repo=UserRepository(db),
    )


# ---- Users ----


async def get_update_user_use_case(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> UpdateUserUseCase:
    return UpdateUserUseCase(UserRepository(db))


async def get_delete_user_use_case(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> DeleteUserUseCase:
    return DeleteUserUseCase(UserRepository(db))


@asynccontextmanager
async def _user_store() -> AsyncIterator[UserRepository]:
    """One short transaction per use; role sync opens two around the Discord call."""
    async with transactional_session() as session:
        yield UserRepository(session)


def get_role_synchronizer(request: Request) -> RoleSynchronizer:
    """Role synchronizer on the shared Discord HTTP client (composition root)."""
    settings = get_settings()
    client = DiscordGuildClient.from_settings(request.app.state.discord_http_client, settings)
    return RoleSynchronizer(
        client,
        ExternalRoleMap.from_settings(settings),
        max_wait_seconds=settings.discord_rate_limit_max_wait_seconds,
        margin_seconds=settings.discord_rate_limit_margin_seconds,
        department_map=ExternalDepartmentMap.from_settings(settings),
    )


def get_sync_user_role_use_case(
    synchronizer: Annotated[RoleSynchronizer, Depends(get_role_synchronizer)],
) -> SyncUserRoleUseCase:
    settings = get_settings()
    return SyncUserRoleUseCase(
        user_store=_user_store,
        synchronizer=synchronizer,
        batch_size=settings.role_sync_batch_size,
        batch_pause_seconds=settings.role_sync_batch_pause_seconds,
    )
