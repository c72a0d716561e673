"""Role and department sync use cases: one user, sign-in, and bulk.

Each sync reads in one short transaction, calls the community platform
with no transaction open, then writes in a second transaction after
re-checking protection against the freshly read role.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from backoffice.application.dtos.role_sync import (
    BulkRoleSyncResult,
    DepartmentSyncOutcome,
    DepartmentSyncStatus,
    RoleSyncOutcome,
    RoleSyncStatus,
)
from backoffice.application.interfaces.repositories import UserStoreScope
from backoffice.application.services.permission_engine import (
    RESERVED_DEPARTMENTS,
    can_sync_all_roles,
    can_sync_user_role,
)
from backoffice.application.services.role_synchronizer import (
    RoleSynchronizer,
    is_sync_protected,
    resolve_synced_role,
)
from backoffice.domain.enums import Role
from backoffice.domain.exceptions import (
    AuthorizationException,
    ExternalSyncException,
    ResourceNotFoundException,
)
from backoffice.domain.value_objects import Actor
from backoffice.shared.telemetry import get_logger, traced

logger = get_logger(__name__)


class SyncUserRoleUseCase:
    """Synchronizes stored roles and departments from the community platform."""

    def __init__(
        self,
        user_store: UserStoreScope,
        synchronizer: RoleSynchronizer,
        batch_size: int = 5,
        batch_pause_seconds: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self._user_store = user_store
        self._synchronizer = synchronizer
        self._batch_size = batch_size
        self._batch_pause_seconds = batch_pause_seconds
        self._sleep = sleep

    @property
    def _role_map(self):
        return self._synchronizer.role_map

    @traced("user.sync_role")
    async def sync_user(self, actor: Actor, user_id: int) -> RoleSyncOutcome:
        """Sync one user's role; lookup failures come back as EXTERNAL_SYNC_FAILED.

        Raises:
            AuthorizationException: Actor is neither the user nor junior admin or above.
            ResourceNotFoundException: Unknown user.
        """
        if not can_sync_user_role(actor.user_id, actor.role, user_id):
            raise AuthorizationException(resource="user", action="sync_role")
        return await self._sync(user_id)

    @traced("user.sync_department")
    async def sync_department(self, actor: Actor, user_id: int) -> DepartmentSyncOutcome:
        """Set the department from the member's guild roles.

        One matched department is stored directly. Several are returned as
        candidates without a write; the user then picks one through the
        regular user update. Reserved departments are never touched.

        Raises:
            AuthorizationException: Actor is neither the user nor junior admin or above.
            ResourceNotFoundException: Unknown user.
        """
        if not can_sync_user_role(actor.user_id, actor.role, user_id):
            raise AuthorizationException(resource="user", action="sync_department")

        async with self._user_store() as users:
            user = await users.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        current = user.department

        def unchanged(status: DepartmentSyncStatus, found=()) -> DepartmentSyncOutcome:
            return DepartmentSyncOutcome(user_id, status, current, current, list(found))

        if not user.external_id:
            return unchanged(DepartmentSyncStatus.NO_EXTERNAL_IDENTITY)
        if current in RESERVED_DEPARTMENTS:
            return unchanged(DepartmentSyncStatus.PROTECTED)

        try:
            candidates = await self._synchronizer.departments_from_external(user.external_id)
        except ExternalSyncException as e:
            logger.warning("Department sync for user %s skipped: %s", user_id, e.message)
            return unchanged(DepartmentSyncStatus.EXTERNAL_SYNC_FAILED)
        if not candidates:
            return unchanged(DepartmentSyncStatus.NO_MAPPED_DEPARTMENT)
        if len(candidates) > 1:
            return unchanged(DepartmentSyncStatus.MULTIPLE_DEPARTMENTS, candidates)

        target = candidates[0]
        async with self._user_store() as users:
            fresh = await users.get_by_id(user_id)
            if fresh is None:
                raise ResourceNotFoundException("user", user_id)
            current = fresh.department
            if current in RESERVED_DEPARTMENTS:
                return unchanged(DepartmentSyncStatus.PROTECTED, candidates)
            if current == target:
                return unchanged(DepartmentSyncStatus.UNCHANGED, candidates)
            fresh.department = target
            await users.update_user(fresh)

        logger.info("User %s department synced %s -> %s", user_id, current.value, target.value)
        return DepartmentSyncOutcome(
            user_id, DepartmentSyncStatus.UPDATED, current, target, candidates
        )

    @traced("user.sign_in")
    async def handle_sign_in(self, user_id: int, external_id: str) -> RoleSyncOutcome:
        """Link the external identity on first sign-in, then sync the role.

        Raises:
            ResourceNotFoundException: Unknown user.
            ValidationException: User is already linked to a different identity.
        """
        async with self._user_store() as users:
            user = await users.get_by_id(user_id)
            if user is None:
                raise ResourceNotFoundException("user", user_id)
            if user.link_external_identity(external_id):
                await users.update_user(user)
                logger.info("Linked user %s to external identity %s", user_id, external_id)
        return await self._sync(user_id)

    @traced("user.sync_all_roles")
    async def sync_all(self, actor: Actor) -> BulkRoleSyncResult:
        """Sync every linked user whose role is not protected, in paced batches.

        Raises:
            AuthorizationException: Actor is not in the administrative band.
        """
        if not can_sync_all_roles(actor.role, actor.has_override):
            raise AuthorizationException(resource="user", action="sync_all_roles")

        excluded = [role for role in Role if is_sync_protected(role, self._role_map)]
        async with self._user_store() as users:
            candidates = await users.list_syncable(excluded)
        logger.info("Syncing roles for %d users", len(candidates))

        processed = updated = failed = 0
        for start in range(0, len(candidates), self._batch_size):
            if start:
                await self._sleep(self._batch_pause_seconds)
            batch = candidates[start : start + self._batch_size]
            results = await asyncio.gather(
                *(self._sync(user.id) for user in batch), return_exceptions=True
            )
            for user, result in zip(batch, results):
                processed += 1
                if isinstance(result, Exception):
                    failed += 1
                    logger.error("Role sync failed for user %s: %s", user.id, result)
                elif result.status == RoleSyncStatus.EXTERNAL_SYNC_FAILED:
                    failed += 1
                elif result.changed:
                    updated += 1

        logger.info(
            "Bulk role sync done: processed=%d updated=%d failed=%d",
            processed,
            updated,
            failed,
        )
        return BulkRoleSyncResult(processed=processed, updated=updated, failed=failed)

    async def _sync(self, user_id: int) -> RoleSyncOutcome:
        async with self._user_store() as users:
            user = await users.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        if not user.external_id:
            return RoleSyncOutcome(user_id, RoleSyncStatus.NO_EXTERNAL_IDENTITY, user.role, user.role)
        if is_sync_protected(user.role, self._role_map):
            return RoleSyncOutcome(user_id, RoleSyncStatus.PROTECTED, user.role, user.role)

        try:
            synced = await self._synchronizer.sync_role_from_external(user.external_id)
        except ExternalSyncException as e:
            logger.warning("Role sync for user %s skipped: %s", user_id, e.message)
            return RoleSyncOutcome(user_id, RoleSyncStatus.EXTERNAL_SYNC_FAILED, user.role, user.role)
        if synced is None:
            return RoleSyncOutcome(user_id, RoleSyncStatus.NO_MAPPED_ROLE, user.role, user.role)

        async with self._user_store() as users:
            fresh = await users.get_by_id(user_id)
            if fresh is None:
                raise ResourceNotFoundException("user", user_id)
            new_role = resolve_synced_role(fresh.role, synced, self._role_map)
            if new_role is None:
                status = (
                    RoleSyncStatus.PROTECTED
                    if is_sync_protected(fresh.role, self._role_map)
                    else RoleSyncStatus.UNCHANGED
                )
                return RoleSyncOutcome(user_id, status, fresh.role, fresh.role, synced)
            previous = fresh.role
            fresh.role = new_role
            await users.update_user(fresh)

        logger.info("User %s role synced %s -> %s", user_id, previous.value, new_role.value)
        return RoleSyncOutcome(user_id, RoleSyncStatus.UPDATED, previous, new_role, synced)
