"""
Lightweight telemetry helpers for the paste pipeline.

Nothing is shipped externally; events go to the log and counters are kept
in memory so tests and the health endpoint can read them.
"""

from __future__ import annotations

import contextlib
import logging
import time
from collections.abc import Iterator
from threading import Lock
from typing import Any

logger = logging.getLogger("pasteq.telemetry")

_COUNTERS: dict[str, int] = {}
_COUNTERS_LOCK = Lock()


def log_event(event_name: str, **fields: Any) -> None:
    """
    Structured log event. Caller must ensure origins are redacted.

    Side Effects:
        - Writes to logger (info level)
    """
    logger.info("event=%s %s", event_name, fields)


def counter(name: str, increment: int = 1) -> int:
    """
    Increment an in-memory counter and emit a debug log.

    Side Effects:
        - Modifies _COUNTERS dict (in-memory state)
        - Writes to logger (debug level)
    """
    with _COUNTERS_LOCK:
        value = _COUNTERS.get(name, 0) + increment
        _COUNTERS[name] = value
    logger.debug("counter=%s value=%s", name, value)
    return value


def get_counter(name: str) -> int:
    """Current value of a counter (0 if never incremented)."""
    return _COUNTERS.get(name, 0)


def snapshot_counters() -> dict[str, int]:
    with _COUNTERS_LOCK:
        return dict(_COUNTERS)


def reset_counters() -> None:
    """
    Clear all counters (useful for tests).

    Side Effects:
        - Clears _COUNTERS dict (in-memory state)
    """
    with _COUNTERS_LOCK:
        _COUNTERS.clear()


@contextlib.contextmanager
def time_block(metric_name: str) -> Iterator[None]:
    """
    Context manager for timing code blocks.

    Side Effects:
        - Writes to logger (debug level) with timing
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        logger.debug("timing=%s_ms value=%.3f", metric_name, elapsed * 1000)
