"""
Paste domain model.

A Paste is the persisted unit: originals, revisions and generated diff
reports are all Pastes, linked through `supersedes` / `diff_report_id`.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pasteq.config import MAX_TITLE_LENGTH

REDACTED_TITLE = "REMOVED SPAM POST"
REDACTED_BODY = "Spam post removed from view."


def utc_now() -> datetime:
    """Return current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


class Paste(BaseModel):
    """
    A stored paste.

    Mutated only by full replace-and-commit through the repository; the
    redaction snapshot makes a paste terminal for maintenance operations.
    """

    model_config = ConfigDict(frozen=False)

    # Identity
    id: int = Field(..., ge=0, description="Allocated paste ID (0 only before allocation)")

    title: str = Field(..., max_length=MAX_TITLE_LENGTH)
    content_type: str = Field(..., description="Registered content type tag")
    origin: str = Field(default="Unknown", description="Submitter provenance string")
    created_at: datetime = Field(default_factory=utc_now)

    raw_body: str
    rendered_body: str

    # Revision links (0 = none)
    supersedes: int = Field(default=0, ge=0, description="Paste this one edits")
    diff_report_id: int = Field(default=0, ge=0, description="Generated diff report paste")

    redacted_original: str | None = Field(
        default=None, description="Pre-redaction title + body snapshot"
    )

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("title cannot be empty")
        return v

    @property
    def is_redacted(self) -> bool:
        return self.redacted_original is not None

    @property
    def is_revision(self) -> bool:
        return self.supersedes != 0

    def to_db_dict(self) -> dict[str, Any]:
        """Convert to dict for database storage."""
        return {
            "id": self.id,
            "title": self.title,
            "content_type": self.content_type,
            "origin": self.origin,
            "created_at": self.created_at.isoformat(),
            "raw_body": self.raw_body,
            "rendered_body": self.rendered_body,
            "supersedes": self.supersedes,
            "diff_report_id": self.diff_report_id,
            "redacted_original": self.redacted_original,
        }

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> Paste:
        """Create Paste from database row."""
        created_at = row.get("created_at")
        return cls(
            id=row["id"],
            title=row["title"],
            content_type=row["content_type"],
            origin=row.get("origin") or "Unknown",
            created_at=datetime.fromisoformat(created_at) if created_at else utc_now(),
            raw_body=row["raw_body"],
            rendered_body=row["rendered_body"],
            supersedes=row.get("supersedes") or 0,
            diff_report_id=row.get("diff_report_id") or 0,
            redacted_original=row.get("redacted_original"),
        )
