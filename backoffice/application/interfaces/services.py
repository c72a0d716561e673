"""Service interfaces (ports) for the application layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from backoffice.application.dtos.community import MemberRolesLookup


# External community platform (Discord guild)
class ICommunityPlatformClient(Protocol):
    """Protocol for reading a member's group roles from the community platform."""

    async def fetch_group_roles(self, external_id: str) -> MemberRolesLookup:
        """Return a tagged lookup result; HTTP outcomes are never raised."""
