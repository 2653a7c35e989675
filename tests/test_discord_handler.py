from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone

from adapters.discord_handler import MessageHandler, report_ready
from core.models import ExpansionOutcome, ExpansionState


class DummyUser:
    id = 42
    name = "Alice"
    bot = False
    avatar = None


class DummyChannel:
    id = 500


class DummyGuild:
    id = 111


class DummyMessage:
    id = 900
    channel = DummyChannel()
    guild = DummyGuild()
    author = DummyUser()
    content = "hello"
    created_at = datetime(2024, 1, 1, tzinfo=timezone.utc)


class RecordingService:
    def __init__(self) -> None:
        self.handled = []

    async def handle(self, message) -> ExpansionOutcome:
        self.handled.append(message)
        return ExpansionOutcome(state=ExpansionState.DROPPED, reason="test")


class ExplodingService:
    async def handle(self, message) -> ExpansionOutcome:
        raise RuntimeError("unexpected")


def test_handler_maps_and_forwards_message() -> None:
    service = RecordingService()

    outcome = asyncio.run(MessageHandler(service).on_message(DummyMessage()))

    assert outcome is not None
    assert service.handled[0].guild_id == 111
    assert service.handled[0].content == "hello"


def test_handler_logs_unexpected_errors(caplog) -> None:
    with caplog.at_level(logging.ERROR, logger="adapters.discord_handler"):
        outcome = asyncio.run(MessageHandler(ExplodingService()).on_message(DummyMessage()))

    assert outcome is None
    assert "Error while processing message" in caplog.text


def test_report_ready_logs_identity(caplog) -> None:
    with caplog.at_level(logging.INFO, logger="adapters.discord_handler"):
        report_ready(DummyUser(), guild_count=3)

    assert "user name : Alice" in caplog.text
    assert "connected 3 guilds" in caplog.text
