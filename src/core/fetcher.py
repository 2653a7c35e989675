"""Remote reads for the referenced channel and message.

Each call is a single attempt bounded by a timeout. A timeout counts as a
``TransportError``; nothing is retried.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, TypeVar

from core.errors import FetchError, NameResolutionError, NotFound, TransportError
from core.models import ChannelMetadata, RemoteMessage
from core.ports import ChatPlatformPort

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class CitationFetcher:
    """Fetch channel metadata, channel names, and messages through the platform port."""

    def __init__(self, platform: ChatPlatformPort, timeout_seconds: float) -> None:
        self._platform = platform
        self._timeout = timeout_seconds

    async def _bounded(self, call: Awaitable[T], what: str) -> T:
        try:
            return await asyncio.wait_for(call, timeout=self._timeout)
        except asyncio.TimeoutError as exc:
            raise TransportError(f"Timed out after {self._timeout}s while fetching {what}") from exc

    async def fetch_channel(self, guild_id: int, channel_id: int) -> ChannelMetadata:
        """Return the metadata of ``channel_id`` from the guild's channel listing."""

        channels = await self._bounded(self._platform.list_channels(guild_id), f"channels of guild {guild_id}")
        for channel in channels:
            if channel.channel_id == channel_id:
                return channel
        raise NotFound(f"Channel {channel_id} not found in guild {guild_id}")

    async def fetch_message(self, channel_id: int, message_id: int) -> RemoteMessage:
        return await self._bounded(
            self._platform.fetch_message(channel_id, message_id),
            f"message {message_id} in channel {channel_id}",
        )

    async def fetch_channel_name(self, channel_id: int) -> str:
        try:
            return await self._bounded(self._platform.channel_name(channel_id), f"name of channel {channel_id}")
        except FetchError as exc:
            raise NameResolutionError(str(exc)) from exc
