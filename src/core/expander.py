"""Core link expansion service.

This module is integration-agnostic. It only relies on the chat platform port,
enabling a different client library or test fakes without changes here.

Each inbound message walks a strict sequence of gates:
1) Skip bot authors
2) Extract the first message link
3) Require a guild context and the same guild as the link
4) Resolve channel metadata (cached) and refuse NSFW channels
5) Fetch the referenced message
6) Resolve the channel name (cached) and build the citation
7) Send the citation as a reply

Any failing gate drops the expansion without a user-visible signal.
"""

from __future__ import annotations

import logging

from core.citation import build_citation
from core.errors import (
    CrossScopeViolation,
    DispatchError,
    FetchError,
    NameResolutionError,
    StickerResolutionError,
)
from core.fetcher import CitationFetcher
from core.link_matcher import ensure_same_guild, extract_link_reference
from core.metadata_cache import IdleCache
from core.models import ChannelMetadata, ExpansionOutcome, ExpansionState, InboundMessage
from core.ports import ChatPlatformPort
from core.timing import log_duration

LOGGER = logging.getLogger(__name__)


def _dropped(stage: ExpansionState, reason: str) -> ExpansionOutcome:
    LOGGER.info("skip message expand after %s because %s", stage.value, reason)
    return ExpansionOutcome(state=ExpansionState.DROPPED, reason=reason, stage=stage)


class LinkExpansionService:
    """Orchestrates link matching, channel checks, fetching, and the reply."""

    def __init__(
        self,
        platform: ChatPlatformPort,
        fetcher: CitationFetcher,
        channel_cache: IdleCache[int, ChannelMetadata],
        name_cache: IdleCache[int, str],
    ) -> None:
        self._platform = platform
        self._fetcher = fetcher
        self._channel_cache = channel_cache
        self._name_cache = name_cache

    async def handle(self, message: InboundMessage) -> ExpansionOutcome:
        """Process one inbound message and reply with a citation when allowed."""

        with log_duration("LinkExpansionService.handle", LOGGER):
            return await self._handle(message)

    async def _handle(self, message: InboundMessage) -> ExpansionOutcome:
        if message.author_is_bot:
            return _dropped(ExpansionState.RECEIVED, "the message is from a bot")

        link = extract_link_reference(message.content)
        if link is None:
            return _dropped(ExpansionState.RECEIVED, "the message does not contain a message link")
        LOGGER.debug("Extracted link reference: %s", link)

        if message.guild_id is None:
            return _dropped(ExpansionState.MATCHED, "the message has no guild context")

        try:
            ensure_same_guild(link, message.guild_id)
        except CrossScopeViolation as exc:
            return _dropped(ExpansionState.MATCHED, str(exc))

        try:
            channel = await self._channel_cache.get_or_fetch(
                link.channel_id,
                lambda: self._fetch_channel(link.guild_id, link.channel_id),
            )
        except FetchError as exc:
            LOGGER.warning("Failed to fetch channel info: %s", exc)
            return _dropped(ExpansionState.GUILD_VERIFIED, "the channel could not be resolved")
        LOGGER.debug("Resolved channel metadata: %s", channel)

        # Restricted content is never echoed into a citation.
        if channel.is_restricted:
            return _dropped(ExpansionState.CHANNEL_RESOLVED, "the channel is nsfw")

        try:
            remote = await self._fetcher.fetch_message(link.channel_id, link.message_id)
        except FetchError as exc:
            LOGGER.warning("Failed to fetch message: %s", exc)
            return _dropped(ExpansionState.ALLOWED, "the referenced message could not be fetched")

        try:
            channel_name = await self._name_cache.get_or_fetch(
                link.channel_id,
                lambda: self._fetcher.fetch_channel_name(link.channel_id),
            )
        except NameResolutionError as exc:
            LOGGER.warning("Failed to resolve channel name: %s", exc)
            return _dropped(ExpansionState.MESSAGE_FETCHED, "the channel name could not be resolved")

        try:
            citation = build_citation(remote, channel_name)
        except StickerResolutionError:
            LOGGER.exception("Failed to build citation for %s", link)
            return _dropped(ExpansionState.MESSAGE_FETCHED, "the citation could not be built")
        LOGGER.debug("Citation: %s", citation)

        try:
            await self._platform.send_citation(message, citation)
        except DispatchError as exc:
            LOGGER.warning("Failed to send citation message: %s", exc)
            return ExpansionOutcome(
                state=ExpansionState.DISPATCHED,
                reason=f"send failed: {exc}",
                stage=ExpansionState.BUILT,
            )

        LOGGER.info("Sent citation for message %s in channel %s", link.message_id, link.channel_id)
        return ExpansionOutcome(state=ExpansionState.DISPATCHED, reason="sent", stage=ExpansionState.DISPATCHED)

    async def _fetch_channel(self, guild_id: int, channel_id: int) -> ChannelMetadata:
        channel = await self._fetcher.fetch_channel(guild_id, channel_id)
        # Keep the name cache in step with the refreshed metadata.
        self._name_cache.put(channel_id, channel.display_name)
        return channel
