"""Discord guild REST client.

Reads a member's guild roles with the bot token. Every HTTP outcome is
returned as a tagged result; nothing here sleeps or retries.
"""

from __future__ import annotations

import httpx

from backoffice.application.dtos.community import (
    LookupFailed,
    MemberNotFound,
    MemberRolesFound,
    MemberRolesLookup,
    RateLimited,
)
from backoffice.core.config import Settings
from backoffice.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

DEFAULT_RETRY_AFTER_SECONDS = 5.0
# Below this many remaining requests in the bucket, log a warning.
RATE_LIMIT_WARNING_THRESHOLD = 10


def _retry_after(resp: httpx.Response) -> float:
    """Seconds to wait from a 429 body (retry_after) or the Retry-After header."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("retry_after") is not None:
        try:
            return float(body["retry_after"])
        except (TypeError, ValueError):
            pass
    header = resp.headers.get("Retry-After")
    if header:
        try:
            return float(header)
        except ValueError:
            pass
    return DEFAULT_RETRY_AFTER_SECONDS


def _warn_if_bucket_low(resp: httpx.Response) -> None:
    remaining = resp.headers.get("X-RateLimit-Remaining")
    if remaining is None:
        return
    try:
        left = int(remaining)
    except ValueError:
        return
    if left < RATE_LIMIT_WARNING_THRESHOLD:
        logger.warning(
            "Discord rate limit bucket low: %d requests remaining (reset after %ss)",
            left,
            resp.headers.get("X-RateLimit-Reset-After", "?"),
        )


class DiscordGuildClient:
    """ICommunityPlatformClient on the Discord v10 guild members endpoint."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        guild_id: str,
        bot_token: str,
        api_base: str = "https://discord.com/api/v10",
        timeout_seconds: float = 10.0,
    ) -> None:
        self._http = http_client
        self._guild_id = guild_id
        self._bot_token = bot_token
        self._api_base = api_base.rstrip("/")
        self._timeout = timeout_seconds

    @classmethod
    def from_settings(
        cls, http_client: httpx.AsyncClient, settings: Settings
    ) -> DiscordGuildClient:
        token = settings.discord_bot_token.get_secret_value() if settings.discord_bot_token else ""
        return cls(
            http_client,
            guild_id=settings.discord_guild_id,
            bot_token=token,
            api_base=settings.discord_api_base,
            timeout_seconds=settings.discord_timeout_seconds,
        )

    async def fetch_group_roles(self, external_id: str) -> MemberRolesLookup:
        if not self._guild_id or not self._bot_token:
            return LookupFailed("Discord guild id or bot token is not configured")
        url = f"{self._api_base}/guilds/{self._guild_id}/members/{external_id}"
        try:
            resp = await self._http.get(
                url,
                headers={"Authorization": f"Bot {self._bot_token}"},
                timeout=self._timeout,
            )
        except httpx.HTTPError as e:
            logger.warning("Discord member lookup for %s failed: %s", external_id, e)
            return LookupFailed(f"{type(e).__name__}: {e}")

        if resp.status_code == 404:
            return MemberNotFound()
        if resp.status_code == 429:
            retry_after = _retry_after(resp)
            logger.warning("Discord rate limited member lookup; retry after %ss", retry_after)
            return RateLimited(retry_after=retry_after)
        if resp.status_code != 200:
            return LookupFailed(
                f"Discord API error: {resp.status_code} {resp.reason_phrase}",
                status_code=resp.status_code,
            )

        _warn_if_bucket_low(resp)
        try:
            data = resp.json()
        except ValueError:
            return LookupFailed("Discord API returned invalid JSON", status_code=resp.status_code)
        roles = data.get("roles") if isinstance(data, dict) else None
        return MemberRolesFound(roles=[str(r) for r in roles or []])
