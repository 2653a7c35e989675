"""discord.py-to-core mapping adapter.

This keeps discord.py specific details out of the core expansion service.
"""

from __future__ import annotations

from typing import Any, Optional

import discord

from core.models import ChannelMetadata, InboundMessage, RemoteMessage


def _avatar_url(user: Any) -> Optional[str]:
    # Users without a custom avatar have ``avatar`` set to None.
    avatar = getattr(user, "avatar", None)
    if avatar is None:
        return None
    return str(avatar.url)


def _sticker_url(sticker: Any) -> Optional[str]:
    # Lottie stickers are JSON animations with no image to show.
    if getattr(sticker, "format", None) is discord.StickerFormatType.lottie:
        return None
    url = getattr(sticker, "url", None)
    return str(url) if url else None


def build_inbound(message: discord.Message) -> InboundMessage:
    """Build a core InboundMessage from a discord.py Message."""

    guild = getattr(message, "guild", None)
    return InboundMessage(
        message_id=message.id,
        channel_id=message.channel.id,
        guild_id=guild.id if guild is not None else None,
        author_id=message.author.id,
        author_is_bot=bool(getattr(message.author, "bot", False)),
        content=message.content or "",
        created_at=message.created_at,
    )


def to_remote_message(message: discord.Message) -> RemoteMessage:
    """Snapshot the referenced message for citation building."""

    return RemoteMessage(
        author_name=message.author.name,
        author_avatar_url=_avatar_url(message.author),
        content=message.content or "",
        created_at=message.created_at,
        attachment_urls=tuple(attachment.url for attachment in message.attachments),
        sticker_urls=tuple(_sticker_url(sticker) for sticker in message.stickers),
    )


def to_channel_metadata(channel: Any) -> ChannelMetadata:
    """Map a guild channel to core metadata; channels without an nsfw flag are unrestricted."""

    return ChannelMetadata(
        channel_id=channel.id,
        display_name=channel.name,
        is_restricted=bool(getattr(channel, "nsfw", False)),
    )
