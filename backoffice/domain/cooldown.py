"""Cooldown ladder: how long a user waits after a denial or failed interview."""

from datetime import datetime, timedelta

# Denial number -> wait before reapplying. Counts above the last rung clamp to it.
DENIAL_COOLDOWN_LADDER: tuple[timedelta, ...] = (
    timedelta(hours=24),
    timedelta(days=7),
    timedelta(days=30),
)

# Wait before a second interview attempt after the first failure.
INTERVIEW_RETRY_COOLDOWN = timedelta(days=7)


def cooldown_for(denial_count: int) -> timedelta | None:
    """Return the reapplication cooldown for the given denial count.

    1 -> 24 hours, 2 -> 7 days, 3 and above -> 30 days. Zero (or a negative
    count) means no denial yet, so no cooldown.
    """
    if denial_count < 1:
        return None
    index = min(denial_count, len(DENIAL_COOLDOWN_LADDER)) - 1
    return DENIAL_COOLDOWN_LADDER[index]


def cooldown_until(denial_count: int, now: datetime) -> datetime | None:
    """Return the cooldown expiry for a denial at now, or None."""
    duration = cooldown_for(denial_count)
    if duration is None:
        return None
    return now + duration
