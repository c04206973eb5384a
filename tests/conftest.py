"""
Pytest configuration for pasteq tests

Every test that touches storage gets its own SQLite file; the global
connection pool is reset around it so nothing leaks between tests.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest

# Importing pasteq.api.app initializes the database; keep that out of the repo.
os.environ.setdefault(
    "PASTEQ_DB_PATH", str(Path(tempfile.mkdtemp(prefix="pasteq-tests-")) / "pasteq.db")
)

from pasteq.infrastructure.database import init_database, reset_pool  # noqa: E402
from pasteq.infrastructure.rate_limit import PasteRateLimiter  # noqa: E402
from pasteq.infrastructure.webhook import WebhookNotifier  # noqa: E402
from pasteq.observability.telemetry import reset_counters  # noqa: E402
from pasteq.pastes.policy import SpamPolicy  # noqa: E402
from pasteq.pastes.repository import PasteRepository  # noqa: E402
from pasteq.pastes.service import PasteIngestionService  # noqa: E402
from pasteq.pastes.spam_filter import SpamClassifier  # noqa: E402
from pasteq.pastes.types import ConnectionInfo, PasteSubmission  # noqa: E402

STAFF_KEY = "test-staff-key"


def make_body(lines: int = 30, tag: str = "") -> str:
    """A body every spam rule accepts: `lines` plain lines, no links."""
    return "\n".join(f"Line {i}{tag}: ordinary paste content goes here" for i in range(lines))


@pytest.fixture
def ordinary_body():
    return make_body


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    """Fresh, initialized database for one test."""
    path = tmp_path / "pasteq.db"
    monkeypatch.setenv("PASTEQ_DB_PATH", str(path))
    reset_pool()
    init_database()
    reset_counters()
    yield path
    reset_pool()


@pytest.fixture
def spam_policy():
    return SpamPolicy(
        partial_titles=("buy cheap",),
        titles=("untitled",),
        keywords=("casino-bonus-code",),
        short_keywords=("viagra",),
    )


@pytest.fixture
def service(db_path, spam_policy):
    svc = PasteIngestionService(
        repository=PasteRepository(),
        classifier=SpamClassifier(policy=spam_policy),
        rate_limiter=PasteRateLimiter(),
        notifier=WebhookNotifier(url=None),
    )
    yield svc
    svc.close()


@pytest.fixture
def connection():
    return ConnectionInfo(remote_addr="203.0.113.7")


@pytest.fixture
def submit(service, connection):
    """Ingest a submission with sensible defaults."""

    def _submit(
        title: str = "Test Paste",
        body: str | None = None,
        content_type: str = "text",
        editing=None,
        **kwargs,
    ):
        submission = PasteSubmission(
            title=title,
            body=make_body() if body is None else body,
            content_type=content_type,
            **kwargs,
        )
        return service.ingest(submission, connection, editing)

    return _submit


@pytest.fixture
def client(service, monkeypatch):
    """TestClient wired to the per-test service, with a known staff key."""
    from fastapi.testclient import TestClient

    from pasteq.api.app import app
    from pasteq.api.dependencies import get_ingestion_service
    from pasteq.api.middleware.auth import auth

    monkeypatch.setattr(auth, "api_key", STAFF_KEY)
    app.dependency_overrides[get_ingestion_service] = lambda: service
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def staff_headers():
    return {"Authorization": f"Bearer {STAFF_KEY}"}
