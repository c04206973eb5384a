"""
Integration tests for staff maintenance: redaction and re-rendering.
"""

from __future__ import annotations

from pasteq.pastes.highlighter import highlight_plain_text
from pasteq.pastes.models import REDACTED_BODY, REDACTED_TITLE
from pasteq.pastes.service import MaintenanceResult


def test_redact_replaces_content_and_keeps_snapshot(service, submit, ordinary_body):
    outcome = submit(title="Cheap pills", body=ordinary_body(), content_type="log")

    result = service.redact(outcome.paste_id, "staff")

    assert result == MaintenanceResult.REDACTED
    paste = service.repository.get_by_id(outcome.paste_id)
    assert paste.title == REDACTED_TITLE
    assert paste.raw_body == REDACTED_BODY
    assert paste.content_type == "text"
    assert paste.redacted_original == f"Cheap pills\n\n{ordinary_body()}"
    assert paste.is_redacted


def test_second_redaction_changes_nothing(service, submit):
    outcome = submit(title="Cheap pills")
    service.redact(outcome.paste_id, "staff")
    first = service.repository.get_by_id(outcome.paste_id)

    assert service.redact(outcome.paste_id, "other-staff") == MaintenanceResult.UNCHANGED
    assert service.repository.get_by_id(outcome.paste_id) == first


def test_rerender_of_redacted_paste_refused(service, submit):
    outcome = submit()
    service.redact(outcome.paste_id, "staff")
    before = service.repository.get_by_id(outcome.paste_id)

    assert service.rerender(outcome.paste_id, "staff") == MaintenanceResult.REFUSED
    assert service.repository.get_by_id(outcome.paste_id) == before


def test_rerender_with_identical_output_writes_nothing(service, submit):
    outcome = submit()

    assert service.rerender(outcome.paste_id, "staff") == MaintenanceResult.UNCHANGED


def test_rerender_replaces_stale_output(service, submit):
    outcome = submit()
    paste = service.repository.get_by_id(outcome.paste_id)
    service.repository.upsert(paste.model_copy(update={"rendered_body": "stale"}))

    assert service.rerender(outcome.paste_id, "staff") == MaintenanceResult.RERENDERED
    refreshed = service.repository.get_by_id(outcome.paste_id)
    assert refreshed.rendered_body == highlight_plain_text(paste.raw_body)
    assert refreshed.raw_body == paste.raw_body


def test_maintenance_on_missing_paste_fails(service):
    assert service.redact(404, "staff") == MaintenanceResult.FAILED
    assert service.rerender(404, "staff") == MaintenanceResult.FAILED
