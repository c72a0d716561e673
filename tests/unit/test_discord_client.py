"""Tests for the Discord guild client (HTTP mapped to tagged results)."""

import httpx
import pytest

from backoffice.application.dtos.community import (
    LookupFailed,
    MemberNotFound,
    MemberRolesFound,
    RateLimited,
)
from backoffice.core.config import Settings
from backoffice.infrastructure.external.discord import DiscordGuildClient


def _client(handler) -> tuple[DiscordGuildClient, httpx.AsyncClient]:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return DiscordGuildClient(http, guild_id="G1", bot_token="tok"), http


async def test_found_member_returns_roles() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"roles": ["1", "2"], "user": {"id": "42"}})

    client, http = _client(handler)
    async with http:
        result = await client.fetch_group_roles("42")
    assert result == MemberRolesFound(roles=["1", "2"])
    assert seen[0].url.path == "/api/v10/guilds/G1/members/42"
    assert seen[0].headers["Authorization"] == "Bot tok"


async def test_missing_roles_field_is_empty() -> None:
    client, http = _client(lambda request: httpx.Response(200, json={}))
    async with http:
        assert await client.fetch_group_roles("42") == MemberRolesFound(roles=[])


async def test_not_found() -> None:
    client, http = _client(lambda request: httpx.Response(404, json={"message": "Unknown Member"}))
    async with http:
        assert await client.fetch_group_roles("42") == MemberNotFound()


@pytest.mark.parametrize(
    ("response", "expected"),
    [
        (httpx.Response(429, json={"retry_after": 1.25}), 1.25),
        (httpx.Response(429, headers={"Retry-After": "3"}), 3.0),
        (httpx.Response(429, text="slow down"), 5.0),
    ],
)
async def test_rate_limited(response: httpx.Response, expected: float) -> None:
    client, http = _client(lambda request: response)
    async with http:
        assert await client.fetch_group_roles("42") == RateLimited(retry_after=expected)


async def test_server_error_is_lookup_failure() -> None:
    client, http = _client(lambda request: httpx.Response(503))
    async with http:
        result = await client.fetch_group_roles("42")
    assert isinstance(result, LookupFailed)
    assert result.status_code == 503


async def test_network_error_is_lookup_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client, http = _client(handler)
    async with http:
        result = await client.fetch_group_roles("42")
    assert isinstance(result, LookupFailed)
    assert result.status_code is None


async def test_unconfigured_client_fails_without_calling_out() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"roles": []})

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client = DiscordGuildClient(http, guild_id="", bot_token="")
    async with http:
        assert isinstance(await client.fetch_group_roles("42"), LookupFailed)
    assert calls == []


async def test_client_built_from_settings() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(404)

    settings = Settings(_env_file=None, discord_guild_id="G9", discord_bot_token="abc")
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        client = DiscordGuildClient.from_settings(http, settings)
        assert await client.fetch_group_roles("42") == MemberNotFound()
    assert seen[0].url.path == "/api/v10/guilds/G9/members/42"
    assert seen[0].headers["Authorization"] == "Bot abc"
