"""
Edit and moderation endpoint for an existing paste.

POST /Edit/{id} (also /View/{id} and /New/Edit/{id}) does one of:
- button_type=edit: return the paste so the client can prefill its form
- button_type=spamblock: staff only, redact the paste
- button_type=rerender: staff only, re-run the highlighter
- anything else: treat the form as a revision of the paste
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, RedirectResponse, Response
from starlette.concurrency import run_in_threadpool

from pasteq.api.dependencies import get_ingestion_service
from pasteq.api.forms import connection_info, read_form, read_submission
from pasteq.api.middleware.auth import get_staff_identity
from pasteq.api.responses import outcome_response, view_path
from pasteq.api.routes.pastes import PasteResponse, load_paste
from pasteq.observability.logging import get_logger
from pasteq.pastes.service import PasteIngestionService

router = APIRouter(tags=["edit"])
logger = get_logger(__name__)


@router.post("/Edit/{paste_id}")
@router.post("/View/{paste_id}")
@router.post("/New/Edit/{paste_id}")
async def edit_paste(
    paste_id: str,
    request: Request,
    service: PasteIngestionService = Depends(get_ingestion_service),
    staff: str | None = Depends(get_staff_identity),
) -> Response:
    paste = await load_paste(paste_id, service)

    form = await read_form(request)
    button_values = form.getlist("button_type")
    button = button_values[0] if len(button_values) == 1 else None

    if button == "edit":
        return JSONResponse(PasteResponse.from_paste(paste).model_dump())

    if button in ("spamblock", "rerender") and staff is not None:
        action = service.redact if button == "spamblock" else service.rerender
        result = await run_in_threadpool(action, paste.id, staff)
        logger.info("%s on paste %d: %s", button, paste.id, result.value)
        return RedirectResponse(view_path(paste.id), status_code=status.HTTP_303_SEE_OTHER)

    submission = await read_submission(request, paste.content_type, allow_editing_field=False)
    outcome = await run_in_threadpool(
        service.ingest, submission, connection_info(request), paste
    )
    return outcome_response(outcome)
