"""Ports (interfaces) used by the core expansion service.

Ports define the minimal contract for the chat platform adapter so that the
core can be reused with a different client library or a fake in tests.
"""

from __future__ import annotations

from typing import List, Protocol

from core.models import ChannelMetadata, CitationPayload, InboundMessage, RemoteMessage


class ChatPlatformPort(Protocol):
    """Remote operations required by the expansion service.

    Implementations raise ``core.errors.NotFound`` or ``TransportError`` for
    failed reads, ``NameResolutionError`` when a channel has no name, and
    ``DispatchError`` when sending fails.
    """

    async def list_channels(self, guild_id: int) -> List[ChannelMetadata]:
        ...

    async def fetch_message(self, channel_id: int, message_id: int) -> RemoteMessage:
        ...

    async def channel_name(self, channel_id: int) -> str:
        ...

    async def send_citation(self, reply_to: InboundMessage, citation: CitationPayload) -> None:
        ...
