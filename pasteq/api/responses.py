"""Response shapes for paste submissions.

Accepted pastes redirect to their view page, or, in compact ("micro") mode,
return the location as plain text. Rejections all look the same no matter
which check failed.
"""

from __future__ import annotations

from fastapi import status
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse, Response

from pasteq.config import URL_BASE
from pasteq.pastes.types import IngestOutcome

REJECTION_DETAIL = "Your paste was rejected. Please review it and try again."


def view_path(paste_id: int) -> str:
    return f"/View/{paste_id}"


def rejection_response(compact: bool = False) -> Response:
    if compact:
        return PlainTextResponse("rejected\n", status_code=status.HTTP_400_BAD_REQUEST)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": REJECTION_DETAIL, "rejected": True},
    )


def outcome_response(outcome: IngestOutcome, url_base: str = URL_BASE) -> Response:
    if not outcome.accepted or outcome.paste_id is None:
        return rejection_response(outcome.compact)

    if outcome.compact:
        if outcome.compact_v2:
            return PlainTextResponse(f"{url_base}{view_path(outcome.paste_id)}\n")
        return PlainTextResponse(f"/paste/{outcome.paste_id}\n")

    return RedirectResponse(view_path(outcome.paste_id), status_code=status.HTTP_303_SEE_OTHER)
