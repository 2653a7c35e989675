"""discord.py adapter for the chat platform port.

Translates discord.py exceptions into core error kinds so the expansion
service never has to know about the client library.
"""

from __future__ import annotations

import logging
from typing import Any, List

import discord

from adapters.discord_mapper import to_channel_metadata, to_remote_message
from adapters.embed_formatting import (
    build_allowed_mentions,
    build_citation_embed,
    build_reply_reference,
)
from core.errors import DispatchError, FetchError, NameResolutionError, NotFound, TransportError
from core.models import ChannelMetadata, CitationPayload, InboundMessage, RemoteMessage

LOGGER = logging.getLogger(__name__)


class DiscordPlatform:
    """Port implementation backed by a connected ``discord.Client``."""

    def __init__(self, client: discord.Client, accent_color: int) -> None:
        self._client = client
        self._accent_color = accent_color

    async def _resolve_channel(self, channel_id: int) -> Any:
        # Prefer the gateway cache; fall back to a REST lookup.
        channel = self._client.get_channel(channel_id)
        if channel is not None:
            return channel
        try:
            return await self._client.fetch_channel(channel_id)
        except discord.NotFound as exc:
            raise NotFound(f"Channel {channel_id} not found") from exc
        except discord.DiscordException as exc:
            raise TransportError(f"Failed to fetch channel {channel_id}: {exc}") from exc

    async def list_channels(self, guild_id: int) -> List[ChannelMetadata]:
        try:
            guild = self._client.get_guild(guild_id)
            if guild is None:
                guild = await self._client.fetch_guild(guild_id)
            channels = await guild.fetch_channels()
        except discord.NotFound as exc:
            raise NotFound(f"Guild {guild_id} not found") from exc
        except discord.DiscordException as exc:
            raise TransportError(f"Failed to list channels of guild {guild_id}: {exc}") from exc
        return [to_channel_metadata(channel) for channel in channels]

    async def fetch_message(self, channel_id: int, message_id: int) -> RemoteMessage:
        channel = await self._resolve_channel(channel_id)
        # Only guild text channels and threads can be cited.
        if getattr(channel, "guild", None) is None or not hasattr(channel, "fetch_message"):
            raise NotFound(f"Channel {channel_id} is not a guild message channel")
        try:
            message = await channel.fetch_message(message_id)
        except discord.NotFound as exc:
            raise NotFound(f"Message {message_id} not found in channel {channel_id}") from exc
        except discord.DiscordException as exc:
            raise TransportError(f"Failed to fetch message {message_id}: {exc}") from exc
        return to_remote_message(message)

    async def channel_name(self, channel_id: int) -> str:
        channel = await self._resolve_channel(channel_id)
        name = getattr(channel, "name", None)
        if not name:
            raise NameResolutionError(f"Channel {channel_id} has no name")
        return str(name)

    async def send_citation(self, reply_to: InboundMessage, citation: CitationPayload) -> None:
        try:
            channel = await self._resolve_channel(reply_to.channel_id)
        except FetchError as exc:
            raise DispatchError(str(exc)) from exc

        embed = build_citation_embed(citation, self._accent_color)
        try:
            sent = await channel.send(
                embed=embed,
                reference=build_reply_reference(reply_to),
                allowed_mentions=build_allowed_mentions(),
            )
        except discord.DiscordException as exc:
            raise DispatchError(f"Failed to send citation to channel {reply_to.channel_id}: {exc}") from exc
        LOGGER.debug("Sent citation message %s", getattr(sent, "id", None))
