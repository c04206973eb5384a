"""Shared FastAPI dependencies.

Tests swap the service with app.dependency_overrides[get_ingestion_service].
"""

from __future__ import annotations

from functools import lru_cache

from pasteq.pastes.service import PasteIngestionService


@lru_cache(maxsize=1)
def get_ingestion_service() -> PasteIngestionService:
    """Process-wide ingestion service (one classifier, rate limiter and renderer pool)."""
    return PasteIngestionService()
