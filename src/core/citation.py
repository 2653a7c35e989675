"""Citation assembly (core domain)."""

from __future__ import annotations

from core.errors import StickerResolutionError
from core.models import CitationPayload, RemoteMessage


def build_citation(remote: RemoteMessage, channel_name: str) -> CitationPayload:
    """Turn a fetched message into the citation rendered in the reply.

    Only the first attachment and the first sticker are kept, in their
    original order. A first sticker without an image URL raises
    ``StickerResolutionError`` instead of being dropped.
    """

    first_attachment_url = remote.attachment_urls[0] if remote.attachment_urls else None

    first_sticker_url = None
    if remote.sticker_urls:
        first_sticker_url = remote.sticker_urls[0]
        if first_sticker_url is None:
            raise StickerResolutionError("First sticker of the referenced message has no image URL")

    return CitationPayload(
        content=remote.content,
        author_name=remote.author_name,
        author_icon_url=remote.author_avatar_url,
        channel_name=channel_name,
        created_at=remote.created_at,
        first_attachment_url=first_attachment_url,
        first_sticker_url=first_sticker_url,
    )
