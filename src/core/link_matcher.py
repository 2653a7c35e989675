"""Message link detection (core domain)."""

from __future__ import annotations

import re
from typing import Optional

from core.errors import CrossScopeViolation
from core.models import LinkReference

LINK_PATTERN = re.compile(
    r"https://(?:ptb\.|canary\.)?discord(?:app)?\.com/channels/"
    r"(?P<guild_id>\d+)/(?P<channel_id>\d+)/(?P<message_id>\d+)"
)

_MAX_SNOWFLAKE = 2**64 - 1
_MAX_SNOWFLAKE_DIGITS = len(str(_MAX_SNOWFLAKE))


def _parse_snowflake(raw: str) -> Optional[int]:
    # Leading zeros aside, anything longer cannot fit; skip int() on huge digit runs.
    digits = raw.lstrip("0") or "0"
    if len(digits) > _MAX_SNOWFLAKE_DIGITS:
        return None
    value = int(digits)
    if value > _MAX_SNOWFLAKE:
        return None
    return value


def extract_link_reference(text: str) -> Optional[LinkReference]:
    """Return the ids of the first message link in ``text``.

    Only the first match is considered. If any of its segments does not fit an
    unsigned 64-bit integer the whole match is discarded.
    """

    match = LINK_PATTERN.search(text)
    if match is None:
        return None

    guild_id = _parse_snowflake(match.group("guild_id"))
    channel_id = _parse_snowflake(match.group("channel_id"))
    message_id = _parse_snowflake(match.group("message_id"))
    if guild_id is None or channel_id is None or message_id is None:
        return None

    return LinkReference(guild_id=guild_id, channel_id=channel_id, message_id=message_id)


def ensure_same_guild(link: LinkReference, guild_id: int) -> None:
    """Raise ``CrossScopeViolation`` when the link points outside ``guild_id``."""

    if link.guild_id != guild_id:
        raise CrossScopeViolation(f"the link guild ({link.guild_id}) is not the message guild ({guild_id})")
