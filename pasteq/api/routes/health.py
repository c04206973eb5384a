"""Health check endpoint for the pasteq API."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter

from pasteq.config import APP_VERSION
from pasteq.observability.telemetry import snapshot_counters

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """Liveness probe plus the in-memory ingestion counters."""
    return {
        "status": "healthy",
        "service": "pasteq",
        "version": APP_VERSION,
        "timestamp": datetime.now(UTC).isoformat(),
        "counters": snapshot_counters(),
    }
