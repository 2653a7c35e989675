"""Scoped duration logging."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Iterator, Optional

LOGGER = logging.getLogger(__name__)


@contextmanager
def log_duration(name: str, logger: Optional[logging.Logger] = None) -> Iterator[None]:
    """Log how long the wrapped block took, even when it raises."""

    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        seconds = int(elapsed)
        millis = int((elapsed - seconds) * 1000)
        (logger or LOGGER).info("%s took %ss %sms", name, seconds, millis)
