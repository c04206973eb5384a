"""
Database schema initialization for pasteq.

Two tables: `pastes` holds every stored paste (originals, revisions, diff
reports), `counters` holds the durable paste ID counter.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path

from pasteq.observability.logging import get_logger

logger = get_logger(__name__)

PASTE_ID_COUNTER = "paste_id"


def init_database(db_path: Path) -> None:
    """
    Initialize database with schema (idempotent)

    Safe to run multiple times - uses CREATE TABLE IF NOT EXISTS and seeds the
    ID counter with INSERT OR IGNORE so an existing counter value is kept.

    Args:
        db_path: Path to the database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    try:
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS pastes (
                id INTEGER PRIMARY KEY,
                title TEXT NOT NULL,
                content_type TEXT NOT NULL,
                origin TEXT NOT NULL DEFAULT 'Unknown',
                created_at TEXT NOT NULL,
                raw_body TEXT NOT NULL,
                rendered_body TEXT NOT NULL,
                supersedes INTEGER NOT NULL DEFAULT 0,
                diff_report_id INTEGER NOT NULL DEFAULT 0,
                redacted_original TEXT
            );

            CREATE INDEX IF NOT EXISTS idx_pastes_supersedes
            ON pastes(supersedes);

            CREATE TABLE IF NOT EXISTS counters (
                name TEXT PRIMARY KEY,
                value INTEGER NOT NULL
            );
        """)
        conn.execute(
            "INSERT OR IGNORE INTO counters (name, value) VALUES (?, 0)",
            (PASTE_ID_COUNTER,),
        )
        conn.commit()
    finally:
        conn.close()

    logger.info("Database schema ready at %s", db_path)


def validate_schema(conn: sqlite3.Connection) -> bool:
    """
    Validate database has expected schema

    Args:
        conn: Active database connection

    Returns:
        True if valid

    Raises:
        ValueError: If tables, columns or the ID counter row are missing
    """
    required_tables = {
        "pastes": [
            "id",
            "title",
            "content_type",
            "raw_body",
            "rendered_body",
            "supersedes",
            "diff_report_id",
            "redacted_original",
        ],
        "counters": ["name", "value"],
    }

    cursor = conn.cursor()
    cursor.execute("SELECT name FROM sqlite_master WHERE type='table'")
    existing_tables = {row[0] for row in cursor.fetchall()}

    missing_tables = set(required_tables.keys()) - existing_tables
    if missing_tables:
        raise ValueError(f"Database missing tables: {missing_tables}")

    for table, required_cols in required_tables.items():
        # Identifiers can't be parameterized; names come from the dict above
        cursor.execute(f"PRAGMA table_info({table})")
        existing_cols = {row[1] for row in cursor.fetchall()}
        missing_cols = set(required_cols) - existing_cols
        if missing_cols:
            raise ValueError(f"Table {table} missing columns: {missing_cols}")

    row = cursor.execute(
        "SELECT value FROM counters WHERE name = ?", (PASTE_ID_COUNTER,)
    ).fetchone()
    if row is None:
        raise ValueError(f"Counter row {PASTE_ID_COUNTER!r} missing")

    return True
