"""Discord client factory for linkscope.

We explicitly manage the client's lifecycle (``client.run``) so it is obvious
when the gateway session is created and when it ends.
"""

from __future__ import annotations

import logging
import os

import discord
from dotenv import load_dotenv


def load_token() -> str:
    """Read DISCORD_TOKEN via python-dotenv to keep secrets out of the repo."""

    load_dotenv()

    token = os.getenv("DISCORD_TOKEN")
    # Fail fast on missing credentials to avoid an opaque login error.
    if not token:
        raise RuntimeError("Missing DISCORD_TOKEN in environment")
    return token


def build_client() -> discord.Client:
    """Create a discord.py client with the intents needed to read message links."""

    intents = discord.Intents.default()
    # Message content is a privileged intent; without it every link is invisible.
    intents.message_content = True

    logging.getLogger(__name__).info("Initializing Discord client")

    return discord.Client(intents=intents)
