"""Gateway event handlers.

A single message handler keeps the discord.py integration minimal and defers
all filtering to the core expansion service for consistency and testability.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from adapters.discord_mapper import build_inbound
from core import __version__
from core.expander import LinkExpansionService
from core.models import ExpansionOutcome

LOGGER = logging.getLogger(__name__)


def report_ready(user: Any, guild_count: int) -> None:
    """Log the bot identity once the gateway session is ready."""

    LOGGER.info("Discord bot is ready!")
    LOGGER.info("user name : %s", getattr(user, "name", None))
    LOGGER.info("user id : %s", getattr(user, "id", None))
    LOGGER.info("bot version : %s", __version__)
    LOGGER.info("connected %s guilds", guild_count)


class MessageHandler:
    """Map incoming messages and hand them to the expansion service."""

    def __init__(self, service: LinkExpansionService) -> None:
        self._service = service

    async def on_message(self, message: Any) -> Optional[ExpansionOutcome]:
        try:
            inbound = build_inbound(message)
            return await self._service.handle(inbound)
        except Exception:
            # One broken expansion must never take down the event loop.
            LOGGER.exception("Error while processing message")
            return None
