"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_CACHE_MAX_ENTRIES = 100
DEFAULT_CACHE_IDLE_SECONDS = 60 * 60
DEFAULT_FETCH_TIMEOUT_SECONDS = 10.0
DEFAULT_ACCENT_COLOR = 0x7FFFFF


@dataclass(frozen=True)
class CacheConfig:
    """Capacity and idle timeout shared by the channel caches."""

    max_entries: int = DEFAULT_CACHE_MAX_ENTRIES
    idle_seconds: float = DEFAULT_CACHE_IDLE_SECONDS


@dataclass(frozen=True)
class ExpansionConfig:
    """Remote call and rendering settings for link expansion."""

    fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS
    accent_color: int = DEFAULT_ACCENT_COLOR
