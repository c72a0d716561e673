"""External role and department synchronizer.

Derives an internal role, and candidate departments, from a member's
Discord guild roles. The client returns tagged results; this module owns
the single-retry rate-limit policy and the non-downgrade rule.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import TYPE_CHECKING

from backoffice.application.dtos.community import (
    LookupFailed,
    MemberNotFound,
    MemberRolesFound,
    RateLimited,
)
from backoffice.application.interfaces.services import ICommunityPlatformClient
from backoffice.application.services.permission_engine import RESERVED_DEPARTMENTS
from backoffice.domain.enums import Department, Role
from backoffice.domain.exceptions import ExternalSyncException
from backoffice.domain.role_hierarchy import highest, is_administrative, outranks, parse_role
from backoffice.shared.telemetry.logging import get_logger
from backoffice.shared.telemetry.tracing import add_span_event

if TYPE_CHECKING:
    from backoffice.core.config import Settings

logger = get_logger(__name__)

# One initial attempt plus one retry after a rate limit.
MAX_ATTEMPTS = 2


class ExternalRoleMap:
    """Priority table from external role ids to internal roles.

    Built from a Role -> external id mapping (the shape used in settings).
    Several internal roles may share one external id; when a member's roles
    match more than one entry, the highest-ranked internal role wins.
    """

    def __init__(self, role_ids: Mapping[Role | str, str]) -> None:
        self._roles_by_external_id: dict[str, set[Role]] = {}
        for name, external_id in role_ids.items():
            role = parse_role(name)
            if role is None:
                raise ValueError(f"Unknown role in external role map: {name!r}")
            if not external_id:
                continue
            self._roles_by_external_id.setdefault(str(external_id), set()).add(role)

    @classmethod
    def from_settings(cls, settings: Settings) -> ExternalRoleMap:
        return cls(settings.discord_role_map)

    @property
    def producible_roles(self) -> set[Role]:
        """Every internal role the map can yield."""
        return {role for roles in self._roles_by_external_id.values() for role in roles}

    def resolve(self, external_role_ids: Iterable[str]) -> Role | None:
        """Return the highest internal role matched by external_role_ids, or None."""
        matched: list[Role] = []
        for external_id in external_role_ids:
            matched.extend(self._roles_by_external_id.get(str(external_id), ()))
        return highest(matched)

    def __len__(self) -> int:
        return len(self._roles_by_external_id)


class ExternalDepartmentMap:
    """External role ids to departments (Department -> external id in settings).

    Reserved departments are assigned by head administration only and
    cannot appear in the map.
    """

    def __init__(self, department_ids: Mapping[Department | str, str]) -> None:
        self._departments_by_external_id: dict[str, set[Department]] = {}
        for name, external_id in department_ids.items():
            try:
                department = Department(name)
            except ValueError:
                raise ValueError(
                    f"Unknown department in external department map: {name!r}"
                ) from None
            if department in RESERVED_DEPARTMENTS:
                raise ValueError(f"Reserved department cannot be synced: {department.value}")
            if not external_id:
                continue
            self._departments_by_external_id.setdefault(str(external_id), set()).add(department)

    @classmethod
    def from_settings(cls, settings: Settings) -> ExternalDepartmentMap:
        return cls(settings.discord_department_map)

    def resolve(self, external_role_ids: Iterable[str]) -> list[Department]:
        """Return every matched department once, in declaration order."""
        matched: set[Department] = set()
        for external_id in external_role_ids:
            matched.update(self._departments_by_external_id.get(str(external_id), ()))
        return [department for department in Department if department in matched]

    def __len__(self) -> int:
        return len(self._departments_by_external_id)


def is_sync_protected(role: Role | str | None, role_map: ExternalRoleMap) -> bool:
    """Return True if external sync must never overwrite role.

    Administrative roles are protected, and so is any role that outranks
    everything the map can produce.
    """
    parsed = parse_role(role)
    if parsed is None:
        return False
    if is_administrative(parsed):
        return True
    producible = role_map.producible_roles
    if not producible:
        return True
    return all(outranks(parsed, candidate) for candidate in producible)


def resolve_synced_role(
    current: Role | str | None,
    synced: Role | None,
    role_map: ExternalRoleMap,
) -> Role | None:
    """Return the role to store, or None to keep the current one."""
    if synced is None or is_sync_protected(current, role_map):
        return None
    if parse_role(current) == synced:
        return None
    return synced


class RoleSynchronizer:
    """Looks up a member on the community platform and maps their roles."""

    def __init__(
        self,
        client: ICommunityPlatformClient,
        role_map: ExternalRoleMap,
        max_wait_seconds: float = 30.0,
        margin_seconds: float = 0.5,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        department_map: ExternalDepartmentMap | None = None,
    ) -> None:
        self.client = client
        self.role_map = role_map
        self.department_map = department_map or ExternalDepartmentMap({})
        self.max_wait_seconds = max_wait_seconds
        self.margin_seconds = margin_seconds
        self._sleep = sleep

    async def sync_role_from_external(self, external_id: str) -> Role | None:
        """Return the mapped role for external_id, or None when there is none.

        None covers: not a guild member, no roles, no mapped role.

        Raises:
            ExternalSyncException: On a lookup failure, or when the platform
                rate-limits the retry as well.
        """
        external_roles = await self._member_roles(external_id)
        if not external_roles:
            return None
        role = self.role_map.resolve(external_roles)
        if role is None:
            logger.debug("No mapped role for external member %s", external_id)
        return role

    async def departments_from_external(self, external_id: str) -> list[Department]:
        """Return the departments matched by the member's guild roles (maybe empty).

        Raises:
            ExternalSyncException: Same conditions as sync_role_from_external.
        """
        external_roles = await self._member_roles(external_id)
        if not external_roles:
            return []
        return self.department_map.resolve(external_roles)

    async def _member_roles(self, external_id: str) -> list[str] | None:
        """Guild role ids for external_id; None when not a guild member."""
        for attempt in range(1, MAX_ATTEMPTS + 1):
            result = await self.client.fetch_group_roles(external_id)

            if isinstance(result, MemberRolesFound):
                return result.roles

            if isinstance(result, MemberNotFound):
                logger.info("External member %s not found in guild", external_id)
                return None

            if isinstance(result, LookupFailed):
                logger.error(
                    "External role lookup failed for %s: %s (status=%s)",
                    external_id,
                    result.reason,
                    result.status_code,
                )
                raise ExternalSyncException(
                    f"Role lookup failed: {result.reason}", status_code=result.status_code
                )

            if isinstance(result, RateLimited):
                if attempt == MAX_ATTEMPTS:
                    break
                delay = min(max(result.retry_after, 0.0), self.max_wait_seconds) + self.margin_seconds
                logger.warning(
                    "Rate limited looking up %s; retrying in %.2fs", external_id, delay
                )
                add_span_event(
                    "external_sync.rate_limited",
                    {"retry_after": result.retry_after, "delay": delay},
                )
                await self._sleep(delay)
                continue

            raise ExternalSyncException(f"Unexpected lookup result: {type(result).__name__}")

        raise ExternalSyncException("Rate limited by the community platform", status_code=429)
