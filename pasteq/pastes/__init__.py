"""Paste ingestion: normalization, spam rules, revisions and storage."""

from __future__ import annotations


# Lazy imports so infrastructure modules can import pastes.errors / pastes.models
# without pulling in the service (and its infrastructure imports) first.
def __getattr__(name: str):
    if name in ("Paste", "REDACTED_TITLE", "REDACTED_BODY"):
        from pasteq.pastes import models

        return getattr(models, name)

    if name in ("PasteIngestionService", "MaintenanceResult"):
        from pasteq.pastes import service

        return getattr(service, name)

    if name == "PasteRepository":
        from pasteq.pastes.repository import PasteRepository

        return PasteRepository

    if name == "SpamClassifier":
        from pasteq.pastes.spam_filter import SpamClassifier

        return SpamClassifier

    if name in ("PasteSubmission", "ConnectionInfo", "IngestOutcome", "IngestStage"):
        from pasteq.pastes import types

        return getattr(types, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "Paste",
    "REDACTED_TITLE",
    "REDACTED_BODY",
    "PasteIngestionService",
    "MaintenanceResult",
    "PasteRepository",
    "SpamClassifier",
    "PasteSubmission",
    "ConnectionInfo",
    "IngestOutcome",
    "IngestStage",
]
