from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest

from core.errors import NameResolutionError, NotFound, TransportError
from core.fetcher import CitationFetcher
from core.models import ChannelMetadata, RemoteMessage


class FakePlatform:
    def __init__(self) -> None:
        self.channels = [
            ChannelMetadata(channel_id=222, display_name="general", is_restricted=False),
            ChannelMetadata(channel_id=223, display_name="after-dark", is_restricted=True),
        ]
        self.message = RemoteMessage(
            author_name="Alice",
            author_avatar_url=None,
            content="hello",
            created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
        self.delay = 0.0
        self.name_error: "Exception | None" = None
        self.list_calls: list[int] = []

    async def list_channels(self, guild_id: int):
        self.list_calls.append(guild_id)
        await asyncio.sleep(self.delay)
        return list(self.channels)

    async def fetch_message(self, channel_id: int, message_id: int):
        await asyncio.sleep(self.delay)
        if message_id != 333:
            raise NotFound(f"message {message_id}")
        return self.message

    async def channel_name(self, channel_id: int) -> str:
        await asyncio.sleep(self.delay)
        if self.name_error is not None:
            raise self.name_error
        return "general"

    async def send_citation(self, reply_to, citation) -> None:
        raise AssertionError("fetcher never sends")


def test_fetch_channel_returns_matching_entry() -> None:
    platform = FakePlatform()
    fetcher = CitationFetcher(platform, timeout_seconds=1)

    channel = asyncio.run(fetcher.fetch_channel(111, 223))

    assert channel.display_name == "after-dark"
    assert channel.is_restricted is True
    assert platform.list_calls == [111]


def test_fetch_channel_missing_entry_is_not_found() -> None:
    fetcher = CitationFetcher(FakePlatform(), timeout_seconds=1)

    with pytest.raises(NotFound):
        asyncio.run(fetcher.fetch_channel(111, 999))


def test_fetch_message_passes_through_platform_errors() -> None:
    fetcher = CitationFetcher(FakePlatform(), timeout_seconds=1)

    assert asyncio.run(fetcher.fetch_message(222, 333)).content == "hello"
    with pytest.raises(NotFound):
        asyncio.run(fetcher.fetch_message(222, 444))


def test_timeout_is_a_transport_error() -> None:
    platform = FakePlatform()
    platform.delay = 0.5
    fetcher = CitationFetcher(platform, timeout_seconds=0.01)

    with pytest.raises(TransportError):
        asyncio.run(fetcher.fetch_message(222, 333))
    with pytest.raises(TransportError):
        asyncio.run(fetcher.fetch_channel(111, 222))


@pytest.mark.parametrize("error", [NotFound("gone"), TransportError("down")])
def test_channel_name_failures_become_name_resolution_errors(error: Exception) -> None:
    platform = FakePlatform()
    platform.name_error = error
    fetcher = CitationFetcher(platform, timeout_seconds=1)

    with pytest.raises(NameResolutionError):
        asyncio.run(fetcher.fetch_channel_name(222))


def test_channel_name_timeout_is_name_resolution_error() -> None:
    platform = FakePlatform()
    platform.delay = 0.5
    fetcher = CitationFetcher(platform, timeout_seconds=0.01)

    with pytest.raises(NameResolutionError):
        asyncio.run(fetcher.fetch_channel_name(222))
