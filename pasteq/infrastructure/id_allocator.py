"""
Paste ID allocation.

IDs come from the `counters` row in the central database. The increment and
the read of the new value happen inside one write transaction, and callers in
this process are additionally serialized through a lock, so no two callers
(threads or processes sharing the file) ever see the same value and no value
is handed out before it is durable.
"""

from __future__ import annotations

import sqlite3
from threading import Lock

from pasteq.infrastructure.database import db_transaction, retry_on_db_lock
from pasteq.infrastructure.database_schema import PASTE_ID_COUNTER
from pasteq.observability.logging import get_logger
from pasteq.observability.telemetry import counter, log_event
from pasteq.pastes.errors import StorageUnavailableError

logger = get_logger(__name__)

# Shared by every allocator in this process
_ALLOCATION_LOCK = Lock()


class IdentifierAllocator:
    """
    Strictly increasing 64-bit IDs backed by a durable counter.

    If the counter currently holds P, N calls return exactly P+1 .. P+N.
    """

    def __init__(self, counter_name: str = PASTE_ID_COUNTER):
        self.counter_name = counter_name
        self._lock = _ALLOCATION_LOCK

    def allocate_next(self) -> int:
        """
        Allocate the next ID.

        Raises:
            StorageUnavailableError: counter row missing or the database failed

        Side Effects:
            - Increments and commits the counter row
        """
        with self._lock:
            try:
                value = self._increment()
            except (sqlite3.Error, FileNotFoundError, RuntimeError) as e:
                counter("id_allocator.failure")
                log_event("id_allocator.failure", counter=self.counter_name, error=type(e).__name__)
                logger.critical("ID allocation failed for %s: %s", self.counter_name, e)
                raise StorageUnavailableError(f"ID allocation failed: {e}") from e

        logger.debug("Allocated %s=%d", self.counter_name, value)
        return value

    @retry_on_db_lock()
    def _increment(self) -> int:
        with db_transaction() as conn:
            cursor = conn.execute(
                "UPDATE counters SET value = value + 1 WHERE name = ?",
                (self.counter_name,),
            )
            if cursor.rowcount != 1:
                raise RuntimeError(f"counter {self.counter_name!r} is not initialized")
            row = conn.execute(
                "SELECT value FROM counters WHERE name = ?",
                (self.counter_name,),
            ).fetchone()
        return int(row["value"])

    def peek(self) -> int:
        """Current counter value without allocating (diagnostics and tests)."""
        with db_transaction() as conn:
            row = conn.execute(
                "SELECT value FROM counters WHERE name = ?",
                (self.counter_name,),
            ).fetchone()
        if row is None:
            raise StorageUnavailableError(f"counter {self.counter_name!r} is not initialized")
        return int(row["value"])
