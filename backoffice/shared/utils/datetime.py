"""Timezone-aware UTC helpers.

Cooldown expiries are compared against "now" on later requests, so every
timestamp the core handles is aware and in UTC.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Default clock for use cases (tests pass a fixed clock instead)."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Normalize a value read from the database to aware UTC.

    Naive values are taken to already be UTC; None passes through.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
