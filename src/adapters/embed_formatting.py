"""Citation embed rendering.

Keeping the embed layout here prevents drift between the reply and anything
else that wants to preview a citation.
"""

from __future__ import annotations

import discord

from core.models import CitationPayload, InboundMessage


def build_citation_embed(citation: CitationPayload, accent_color: int) -> discord.Embed:
    """Render the citation as a rich embed."""

    embed = discord.Embed(
        description=citation.content,
        color=accent_color,
        timestamp=citation.created_at,
    )
    embed.set_footer(text=citation.channel_name)
    embed.set_author(name=citation.author_name, icon_url=citation.author_icon_url)
    if citation.first_attachment_url:
        embed.set_image(url=citation.first_attachment_url)
    if citation.first_sticker_url:
        embed.set_thumbnail(url=citation.first_sticker_url)
    return embed


def build_reply_reference(reply_to: InboundMessage) -> discord.MessageReference:
    """Reference the original message; the reply still sends if it was deleted."""

    return discord.MessageReference(
        message_id=reply_to.message_id,
        channel_id=reply_to.channel_id,
        guild_id=reply_to.guild_id,
        fail_if_not_exists=False,
    )


def build_allowed_mentions() -> discord.AllowedMentions:
    """Never ping the author of the message being replied to."""

    return discord.AllowedMentions(replied_user=False)
