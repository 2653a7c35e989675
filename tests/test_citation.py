from __future__ import annotations

from datetime import datetime, timezone

import pytest

from core.citation import build_citation
from core.errors import StickerResolutionError
from core.models import RemoteMessage

CREATED_AT = datetime(2024, 1, 1, 12, 30, tzinfo=timezone.utc)


def _remote(**overrides) -> RemoteMessage:
    fields = dict(
        author_name="Alice",
        author_avatar_url="https://cdn.discordapp.com/avatars/1/abc.png",
        content="hello",
        created_at=CREATED_AT,
    )
    fields.update(overrides)
    return RemoteMessage(**fields)


def test_copies_core_fields() -> None:
    citation = build_citation(_remote(), "general")

    assert citation.content == "hello"
    assert citation.author_name == "Alice"
    assert citation.author_icon_url == "https://cdn.discordapp.com/avatars/1/abc.png"
    assert citation.channel_name == "general"
    assert citation.created_at == CREATED_AT


def test_no_attachments_or_stickers_leaves_optional_urls_empty() -> None:
    citation = build_citation(_remote(author_avatar_url=None), "general")

    assert citation.author_icon_url is None
    assert citation.first_attachment_url is None
    assert citation.first_sticker_url is None


def test_uses_first_attachment_only() -> None:
    remote = _remote(attachment_urls=("https://cdn/a.png", "https://cdn/b.png"))

    citation = build_citation(remote, "general")

    assert citation.first_attachment_url == "https://cdn/a.png"


def test_uses_first_sticker_only() -> None:
    remote = _remote(sticker_urls=("https://media/s1.png", "https://media/s2.png"))

    citation = build_citation(remote, "general")

    assert citation.first_sticker_url == "https://media/s1.png"
    assert citation.first_attachment_url is None


def test_unresolvable_first_sticker_fails_loudly() -> None:
    remote = _remote(sticker_urls=(None, "https://media/s2.png"))

    with pytest.raises(StickerResolutionError):
        build_citation(remote, "general")
