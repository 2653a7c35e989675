"""Error kinds raised while expanding a message link.

Every kind except ``DispatchError`` ends the expansion silently; the service
decides how loudly each one is logged.
"""

from __future__ import annotations


class ExpansionError(Exception):
    """Base class for link expansion failures."""


class CrossScopeViolation(ExpansionError):
    """The link points at a guild other than the one the message was posted in."""


class FetchError(ExpansionError):
    """A remote read for a channel or message failed."""


class NotFound(FetchError):
    """The channel or message does not exist remotely."""


class TransportError(FetchError):
    """The remote call failed for network or protocol reasons (timeouts included)."""


class NameResolutionError(ExpansionError):
    """The channel display name could not be resolved."""


class DispatchError(ExpansionError):
    """Sending the citation reply failed."""


class StickerResolutionError(ExpansionError):
    """A sticker item has no resolvable image URL."""
