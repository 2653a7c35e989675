from __future__ import annotations

import logging

import app


def test_token_is_redacted_even_when_redaction_disabled(monkeypatch) -> None:
    monkeypatch.setenv("DISCORD_TOKEN", "secret-token")

    secrets = app._collect_redaction_values({"redact": {"enabled": False}})

    assert secrets == ["secret-token"]


def test_redacting_formatter_masks_token() -> None:
    formatter = app._RedactingFormatter(["secret-token"], fmt="%(message)s")
    record = logging.LogRecord("test", logging.INFO, __file__, 1, "login with secret-token", None, None)

    assert formatter.format(record) == "login with ***"


def test_discord_loggers_default_to_warning() -> None:
    app._configure_library_loggers({})

    assert logging.getLogger("discord").level == logging.WARNING
    assert logging.getLogger("discord.gateway").level == logging.WARNING


def test_library_levels_can_be_overridden() -> None:
    app._configure_library_loggers({"library_levels": {"discord.gateway": "error", "discord.http": "debug"}})

    assert logging.getLogger("discord.gateway").level == logging.ERROR
    assert logging.getLogger("discord.http").level == logging.DEBUG
    assert logging.getLogger("discord").level == logging.WARNING
