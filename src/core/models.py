"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any integration-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True)
class LinkReference:
    """Identifiers extracted from a message link."""

    guild_id: int
    channel_id: int
    message_id: int


@dataclass(frozen=True)
class ChannelMetadata:
    """Last-known metadata for a guild channel."""

    channel_id: int
    display_name: str
    is_restricted: bool


@dataclass(frozen=True)
class InboundMessage:
    """Minimal view of the message being handled by the expansion service."""

    message_id: int
    channel_id: int
    guild_id: Optional[int]
    author_id: int
    author_is_bot: bool
    content: str
    created_at: datetime


@dataclass(frozen=True)
class RemoteMessage:
    """Read-only snapshot of the referenced message.

    ``sticker_urls`` keeps one entry per sticker item; ``None`` marks a sticker
    whose image URL could not be resolved.
    """

    author_name: str
    author_avatar_url: Optional[str]
    content: str
    created_at: datetime
    attachment_urls: Tuple[str, ...] = ()
    sticker_urls: Tuple[Optional[str], ...] = ()


@dataclass(frozen=True)
class CitationPayload:
    """Normalized citation rendered into the reply."""

    content: str
    author_name: str
    author_icon_url: Optional[str]
    channel_name: str
    created_at: datetime
    first_attachment_url: Optional[str]
    first_sticker_url: Optional[str]


class ExpansionState(str, Enum):
    """Steps of one expansion, in order; DROPPED can follow any of them."""

    RECEIVED = "received"
    MATCHED = "matched"
    GUILD_VERIFIED = "guild_verified"
    CHANNEL_RESOLVED = "channel_resolved"
    ALLOWED = "allowed"
    MESSAGE_FETCHED = "message_fetched"
    BUILT = "built"
    DISPATCHED = "dispatched"
    DROPPED = "dropped"


@dataclass(frozen=True)
class ExpansionOutcome:
    """Terminal state of one expansion.

    ``stage`` is the last step the message got through before it was dropped
    or dispatched, which tells apart e.g. a cross-guild link (MATCHED) from an
    NSFW channel (CHANNEL_RESOLVED).
    """

    state: ExpansionState
    reason: str
    stage: ExpansionState = ExpansionState.RECEIVED

    @property
    def completed(self) -> bool:
        """True once the reply was handed to the platform, even if sending failed."""
        return self.state is ExpansionState.DISPATCHED
