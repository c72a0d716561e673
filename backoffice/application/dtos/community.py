"""Tagged results of a community platform member lookup.

The client never raises for HTTP outcomes; the synchronizer branches on
the result type.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class MemberRolesFound:
    """Member exists; roles are the platform's role ids."""

    roles: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class MemberNotFound:
    """User is not a member of the guild (HTTP 404)."""


@dataclass(frozen=True)
class RateLimited:
    """Platform asked us to back off for retry_after seconds (HTTP 429)."""

    retry_after: float


@dataclass(frozen=True)
class LookupFailed:
    """Network failure or unexpected status."""

    reason: str
    status_code: int | None = None


MemberRolesLookup = MemberRolesFound | MemberNotFound | RateLimited | LookupFailed
