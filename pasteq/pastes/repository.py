"""
Paste Repository - the persistence gateway for pastes.

Three operations: allocate the next paste ID, upsert a full paste record,
and fetch a paste by ID. Follows the database patterns in
pasteq/infrastructure/database.py.
"""

from __future__ import annotations

import sqlite3

from pasteq.infrastructure.database import db_transaction, get_db_connection, retry_on_db_lock
from pasteq.infrastructure.id_allocator import IdentifierAllocator
from pasteq.observability.logging import get_logger
from pasteq.pastes.errors import StorageUnavailableError
from pasteq.pastes.models import Paste

logger = get_logger(__name__)


class PasteRepository:
    """
    Storage for Paste records.

    Writes are full-record upserts: a paste is never partially updated.
    """

    def __init__(self, allocator: IdentifierAllocator | None = None):
        self.allocator = allocator or IdentifierAllocator()

    def allocate_next(self) -> int:
        """Next paste ID. Raises StorageUnavailableError if the counter can't be used."""
        return self.allocator.allocate_next()

    def upsert(self, paste: Paste) -> None:
        """
        Insert or fully replace the paste with `paste.id`.

        Raises:
            StorageUnavailableError: if the write fails

        Side Effects:
            - Writes one row of the pastes table and commits
        """
        if paste.id <= 0:
            raise ValueError("paste must have an allocated id before upsert")
        try:
            self._upsert(paste)
        except (sqlite3.Error, FileNotFoundError, RuntimeError) as e:
            logger.critical("Failed to store paste %d: %s", paste.id, e)
            raise StorageUnavailableError(f"failed to store paste {paste.id}") from e

    @staticmethod
    @retry_on_db_lock()
    def _upsert(paste: Paste) -> None:
        with db_transaction() as conn:
            conn.execute(
                """
                INSERT INTO pastes (
                    id, title, content_type, origin, created_at, raw_body,
                    rendered_body, supersedes, diff_report_id, redacted_original
                ) VALUES (
                    :id, :title, :content_type, :origin, :created_at, :raw_body,
                    :rendered_body, :supersedes, :diff_report_id, :redacted_original
                )
                ON CONFLICT(id) DO UPDATE SET
                    title = excluded.title,
                    content_type = excluded.content_type,
                    origin = excluded.origin,
                    created_at = excluded.created_at,
                    raw_body = excluded.raw_body,
                    rendered_body = excluded.rendered_body,
                    supersedes = excluded.supersedes,
                    diff_report_id = excluded.diff_report_id,
                    redacted_original = excluded.redacted_original
                """,
                paste.to_db_dict(),
            )

    def get_by_id(self, paste_id: int) -> Paste | None:
        """
        Get a paste by ID.

        Returns:
            Paste if found, None otherwise
        """
        try:
            with get_db_connection() as conn:
                row = conn.execute("SELECT * FROM pastes WHERE id = ?", (paste_id,)).fetchone()
        except (sqlite3.Error, FileNotFoundError, RuntimeError) as e:
            logger.critical("Failed to read paste %d: %s", paste_id, e)
            raise StorageUnavailableError(f"failed to read paste {paste_id}") from e

        if not row:
            return None

        return Paste.from_db_row(dict(row))

    def count(self) -> int:
        with get_db_connection() as conn:
            return conn.execute("SELECT COUNT(*) FROM pastes").fetchone()[0]
