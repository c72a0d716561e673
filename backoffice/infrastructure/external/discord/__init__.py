"""Discord guild client (community platform adapter)."""

from backoffice.infrastructure.external.discord.client import DiscordGuildClient

__all__ = ["DiscordGuildClient"]
