"""
Module: types
Purpose: Shared value types for the ingestion pipeline.
Dependencies: none (leaf module)

Stable import boundary: normalizer, spam_filter, diff, provenance and
service all exchange these, so they live apart from the modules that
produce them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class PasteSubmission:
    """A submission as received from the form, before normalization."""

    title: str
    body: str
    content_type: str
    editing_id: int | None = None
    compact: bool = False
    compact_v2: bool = False


@dataclass(frozen=True)
class ConnectionInfo:
    """Connection metadata the HTTP layer hands to the coordinator."""

    remote_addr: str
    forwarded_for: tuple[str, ...] = ()
    remote_addr_header: tuple[str, ...] = ()


@dataclass(frozen=True)
class Provenance:
    """Where a submission came from.

    `origin` keys the rate limiter; `sender` is the descriptive string stored
    on the paste.
    """

    origin: str
    sender: str


@dataclass(frozen=True)
class NormalizedPaste:
    title: str
    body: str


@dataclass(frozen=True)
class ClassificationResult:
    """Tagged result of the spam rules: accepted, or rejected with a reason."""

    accepted: bool
    reason: str = ""
    rule: str = ""

    @classmethod
    def accept(cls) -> ClassificationResult:
        return cls(accepted=True)

    @classmethod
    def reject(cls, rule: str, reason: str) -> ClassificationResult:
        return cls(accepted=False, reason=reason, rule=rule)


@dataclass(frozen=True)
class DiffResult:
    text: str
    has_differences: bool


class IngestStage(str, Enum):
    """Pipeline stage at which a submission stopped (or ACCEPTED)."""

    RECEIVED = "received"
    CONTENT_TYPE = "content_type"
    CLASSIFIED = "classified"
    RATE_CHECKED = "rate_checked"
    DIFFED = "diffed"
    RENDERED = "rendered"
    ACCEPTED = "accepted"


@dataclass
class IngestOutcome:
    """Accepted vs rejected; `reason` is for server-side logs only."""

    accepted: bool
    stage: IngestStage
    paste_id: int | None = None
    diff_report_id: int | None = None
    reason: str = ""
    compact: bool = False
    compact_v2: bool = False
    notified: list[int] = field(default_factory=list)
