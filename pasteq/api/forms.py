"""
Form parsing for paste submissions.

Anything structurally wrong with the form (missing or repeated fields, a
non-numeric `editing` value) raises MalformedInputError. Field values are
never logged.
"""

from __future__ import annotations

from fastapi import Request

from pasteq.config import MAX_FORM_VALUE_LENGTH
from pasteq.observability.logging import get_logger
from pasteq.pastes.errors import MalformedInputError
from pasteq.pastes.types import ConnectionInfo, PasteSubmission

logger = get_logger(__name__)

TITLE_FIELD = "pastetitle"
CONTENTS_FIELD = "pastecontents"
EDITING_FIELD = "editing"


def parse_paste_id(value: str) -> int:
    """Parse a paste ID from a path or form value."""
    try:
        paste_id = int(value.strip())
    except (ValueError, AttributeError) as e:
        raise MalformedInputError("non-numeric paste ID") from e
    if paste_id < 0:
        raise MalformedInputError("negative paste ID")
    return paste_id


async def read_form(request: Request):
    """Parsed form body; Starlette caches it, so repeat calls are free."""
    return await request.form(max_part_size=MAX_FORM_VALUE_LENGTH)


def _single(values: list, name: str) -> str:
    if not values:
        raise MalformedInputError(f"form missing {name}")
    if len(values) != 1 or not isinstance(values[0], str):
        logger.debug("Form field %s has %d values", name, len(values))
        raise MalformedInputError(f"improper form data for {name}")
    return values[0]


async def read_submission(
    request: Request, content_type: str, allow_editing_field: bool = True
) -> PasteSubmission:
    """
    Build a PasteSubmission from the request's form body.

    Args:
        request: incoming POST request
        content_type: paste type chosen by the route
        allow_editing_field: honour an `editing` form value (off when the
            route already identifies the paste being edited)

    Raises:
        MalformedInputError: on an empty form or malformed fields
    """
    if request.method != "POST":
        raise MalformedInputError("non-POST submission")

    form = await read_form(request)
    if not form:
        raise MalformedInputError("empty form")

    title = _single(form.getlist(TITLE_FIELD), TITLE_FIELD)
    body = _single(form.getlist(CONTENTS_FIELD), CONTENTS_FIELD)

    editing_id: int | None = None
    editing_values = form.getlist(EDITING_FIELD)
    if allow_editing_field and len(editing_values) == 1 and editing_values[0] != "":
        editing_id = parse_paste_id(str(editing_values[0]))

    response_values = form.getlist("response")
    version_values = form.getlist("v")
    compact = len(response_values) == 1 and str(response_values[0]).lower() == "micro"
    compact_v2 = compact and len(version_values) == 1 and str(version_values[0]) == "200"

    return PasteSubmission(
        title=title,
        body=body,
        content_type=content_type,
        editing_id=editing_id,
        compact=compact,
        compact_v2=compact_v2,
    )


def connection_info(request: Request) -> ConnectionInfo:
    """Socket address plus the proxy headers provenance cares about."""
    return ConnectionInfo(
        remote_addr=request.client.host if request.client else "unknown",
        forwarded_for=tuple(request.headers.getlist("x-forwarded-for")),
        remote_addr_header=tuple(request.headers.getlist("remote_addr")),
    )
