"""
Read endpoints for stored pastes.

Page rendering lives elsewhere; /View/{id} returns the stored rendered body
in a bare document so redirects after submission land somewhere useful.
"""

from __future__ import annotations

import html

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import HTMLResponse
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from pasteq.api.dependencies import get_ingestion_service
from pasteq.api.forms import parse_paste_id
from pasteq.pastes.errors import MalformedInputError
from pasteq.pastes.models import Paste
from pasteq.pastes.service import PasteIngestionService

router = APIRouter(tags=["pastes"])


class PasteResponse(BaseModel):
    """API response for a single paste."""

    id: int
    title: str
    content_type: str
    created_at: str
    raw_body: str
    rendered_body: str
    supersedes: int | None
    diff_report_id: int | None
    redacted: bool

    @classmethod
    def from_paste(cls, paste: Paste) -> PasteResponse:
        return cls(
            id=paste.id,
            title=paste.title,
            content_type=paste.content_type,
            created_at=paste.created_at.isoformat(),
            raw_body=paste.raw_body,
            rendered_body=paste.rendered_body,
            supersedes=paste.supersedes or None,
            diff_report_id=paste.diff_report_id or None,
            redacted=paste.is_redacted,
        )


async def load_paste(paste_id: str, service: PasteIngestionService) -> Paste:
    """Resolve a path ID to a stored paste, 404 for bad or unknown IDs."""
    try:
        pid = parse_paste_id(paste_id)
    except MalformedInputError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Paste not found") from None

    paste = await run_in_threadpool(service.repository.get_by_id, pid)
    if paste is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Paste not found")
    return paste


@router.get("/api/pastes/{paste_id}", response_model=PasteResponse)
async def get_paste(
    paste_id: str, service: PasteIngestionService = Depends(get_ingestion_service)
) -> PasteResponse:
    return PasteResponse.from_paste(await load_paste(paste_id, service))


@router.get("/View/{paste_id}", response_class=HTMLResponse)
async def view_paste(
    paste_id: str, service: PasteIngestionService = Depends(get_ingestion_service)
) -> HTMLResponse:
    paste = await load_paste(paste_id, service)
    title = html.escape(paste.title)
    return HTMLResponse(
        f"<!DOCTYPE html><html><head><meta charset=\"utf-8\"><title>{title}</title></head>"
        f"<body><h1>{title}</h1><pre class=\"paste paste-{paste.content_type}\">"
        f"{paste.rendered_body}</pre></body></html>"
    )
