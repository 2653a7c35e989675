"""Static configuration for linkscope.

All user-editable settings (cache sizing, fetch timeout, embed color, logging)
live in a single JSON file for quick edits without touching Python. Secrets
such as the bot token stay in the environment.
"""

import json
import os

from core.config import (
    DEFAULT_ACCENT_COLOR,
    DEFAULT_CACHE_IDLE_SECONDS,
    DEFAULT_CACHE_MAX_ENTRIES,
    DEFAULT_FETCH_TIMEOUT_SECONDS,
)

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

CONFIG_PATH = os.environ.get("LINKSCOPE_CONFIG", os.path.join(PROJECT_ROOT, "config.json"))


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


def _parse_color(raw) -> int:
    """Accept either an integer or a "#rrggbb" / "0xrrggbb" string."""

    if isinstance(raw, int):
        return raw
    text = str(raw).strip().lower()
    if text.startswith("#"):
        return int(text[1:], 16)
    return int(text, 0)


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# Both channel caches (metadata and names) share one sizing policy.
# - max_entries: LRU capacity
# - idle_seconds: entries expire after this long without access
_cache = _CONFIG.get("cache", {})
CACHE_MAX_ENTRIES = int(_cache.get("max_entries", DEFAULT_CACHE_MAX_ENTRIES))
CACHE_IDLE_SECONDS = float(_cache.get("idle_seconds", DEFAULT_CACHE_IDLE_SECONDS))

# Every remote read is bounded by this timeout; a timeout drops the expansion.
_expansion = _CONFIG.get("expansion", {})
FETCH_TIMEOUT_SECONDS = float(_expansion.get("fetch_timeout_seconds", DEFAULT_FETCH_TIMEOUT_SECONDS))
ACCENT_COLOR = _parse_color(_expansion.get("accent_color", DEFAULT_ACCENT_COLOR))

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
