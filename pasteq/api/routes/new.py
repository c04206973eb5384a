"""
New-paste endpoints.

One POST route per paste type, mirroring the paste form's tabs. The Other
tab takes any registered type via ?selected=<type>.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from pasteq.api.dependencies import get_ingestion_service
from pasteq.api.forms import connection_info, read_submission
from pasteq.api.responses import outcome_response
from pasteq.pastes.service import PasteIngestionService

router = APIRouter(tags=["new"])

DEFAULT_OTHER_TYPE = "csharp"


async def handle_post(
    request: Request, content_type: str, service: PasteIngestionService
) -> Response:
    submission = await read_submission(request, content_type)
    outcome = await run_in_threadpool(service.ingest, submission, connection_info(request))
    return outcome_response(outcome)


@router.post("/")
@router.post("/New")
@router.post("/New/Index")
@router.post("/New/Script")
async def new_script(
    request: Request, service: PasteIngestionService = Depends(get_ingestion_service)
) -> Response:
    return await handle_post(request, "script", service)


@router.post("/New/Log")
async def new_log(
    request: Request, service: PasteIngestionService = Depends(get_ingestion_service)
) -> Response:
    return await handle_post(request, "log", service)


@router.post("/New/BBCode")
async def new_bbcode(
    request: Request, service: PasteIngestionService = Depends(get_ingestion_service)
) -> Response:
    return await handle_post(request, "bbcode", service)


@router.post("/New/Text")
async def new_text(
    request: Request, service: PasteIngestionService = Depends(get_ingestion_service)
) -> Response:
    return await handle_post(request, "text", service)


@router.post("/New/Other")
async def new_other(
    request: Request,
    selected: str | None = None,
    service: PasteIngestionService = Depends(get_ingestion_service),
) -> Response:
    content_type = DEFAULT_OTHER_TYPE
    if selected and service.registry.is_known(selected):
        content_type = selected.lower()
    return await handle_post(request, content_type, service)
