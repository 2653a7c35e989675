"""Application entry point for the linkscope bot."""

from __future__ import annotations

import argparse
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

import discord
from art import tprint
from dotenv import load_dotenv

import settings
from adapters.discord_handler import MessageHandler, report_ready
from adapters.discord_platform import DiscordPlatform
from client import build_client, load_token
from core.config import CacheConfig, ExpansionConfig
from core.expander import LinkExpansionService
from core.fetcher import CitationFetcher
from core.metadata_cache import IdleCache
from core.models import ChannelMetadata

NAME = "LINKSCOPE"
FONT = "tarty-1"
TOKEN_ENV = "DISCORD_TOKEN"

# discord.py logs every gateway resume and heartbeat at INFO.
DEFAULT_LIBRARY_LEVELS = {"discord": "WARNING", "discord.gateway": "WARNING"}


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


class _RedactingFormatter(logging.Formatter):
    def __init__(self, secrets: list[str], fmt: str, datefmt: Optional[str] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._secrets = [secret for secret in secrets if secret]

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for secret in self._secrets:
            message = message.replace(secret, "***")
        return message


def _collect_redaction_values(config: dict) -> list[str]:
    redact_cfg = config.get("redact", {}) if config else {}
    # The bot token is masked even when redaction is switched off.
    names = [TOKEN_ENV]
    if redact_cfg.get("enabled", False):
        names.extend(redact_cfg.get("patterns", []))
    values = []
    for name in names:
        value = os.getenv(name)
        if value:
            values.append(value)
    return sorted(set(values), key=len, reverse=True)


def _configure_library_loggers(config: dict) -> None:
    """Apply per-logger levels, e.g. to keep discord.gateway heartbeats out of INFO logs."""

    levels = dict(DEFAULT_LIBRARY_LEVELS)
    levels.update(config.get("library_levels", {}) if config else {})
    for name, level_name in levels.items():
        logging.getLogger(name).setLevel(getattr(logging, str(level_name).upper(), logging.WARNING))


def _configure_logging() -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    load_dotenv()
    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    secrets = _collect_redaction_values(config)
    formatter = _RedactingFormatter(secrets, fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/linkscope.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)
    _configure_library_loggers(config)


def build_service(
    client: discord.Client,
    cache_config: CacheConfig,
    expansion_config: ExpansionConfig,
) -> LinkExpansionService:
    """Wire the core expansion service to the discord.py adapter."""

    platform = DiscordPlatform(client, accent_color=expansion_config.accent_color)
    fetcher = CitationFetcher(platform, timeout_seconds=expansion_config.fetch_timeout_seconds)
    channel_cache: IdleCache[int, ChannelMetadata] = IdleCache.from_config(cache_config, name="channel_cache")
    name_cache: IdleCache[int, str] = IdleCache.from_config(cache_config, name="channel_name_cache")
    return LinkExpansionService(
        platform=platform,
        fetcher=fetcher,
        channel_cache=channel_cache,
        name_cache=name_cache,
    )


def _run() -> None:
    _print_banner()
    _configure_logging()
    logger = logging.getLogger(__name__)

    logger.info("Starting linkscope")

    token = load_token()
    cache_config = CacheConfig(
        max_entries=settings.CACHE_MAX_ENTRIES,
        idle_seconds=settings.CACHE_IDLE_SECONDS,
    )
    expansion_config = ExpansionConfig(
        fetch_timeout_seconds=settings.FETCH_TIMEOUT_SECONDS,
        accent_color=settings.ACCENT_COLOR,
    )
    logger.info(
        "Channel caches hold %s entries with %ss idle timeout",
        cache_config.max_entries,
        cache_config.idle_seconds,
    )

    client = build_client()
    handler = MessageHandler(build_service(client, cache_config, expansion_config))

    # discord.py runs every event handler in its own task, so expansions of
    # different messages proceed concurrently.
    @client.event
    async def on_ready() -> None:
        report_ready(client.user, len(client.guilds))

    @client.event
    async def on_message(message: discord.Message) -> None:
        await handler.on_message(message)

    # discord.py installs its own log handler unless told otherwise.
    client.run(token, log_handler=None)


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="linkscope")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("run", help="Start the bot")

    parser.parse_args(argv)
    _run()


if __name__ == "__main__":
    main()
