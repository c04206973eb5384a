"""Cleans raw form input into a usable (title, body) pair."""

from __future__ import annotations

from pasteq.config import MAX_PASTE_RAW_LENGTH, MAX_TITLE_LENGTH
from pasteq.pastes.types import NormalizedPaste

# ASCII control codes (< 32) and DEL
_CONTROL_TRANSLATION = {code: " " for code in (*range(32), 127)}


def force_clean_text(text: str) -> str:
    """Replace every ASCII control character with a space."""
    return text.translate(_CONTROL_TRANSLATION)


def default_title(display_name: str) -> str:
    return f"Unnamed {display_name} Paste"


def normalize(
    raw_title: str,
    raw_body: str,
    display_name: str,
    max_raw_length: int = MAX_PASTE_RAW_LENGTH,
) -> NormalizedPaste:
    """
    Normalize a submission. Never raises.

    - control characters in the title become spaces
    - blank titles fall back to "Unnamed <Type> Paste"
    - title capped at 200 chars, body at max_raw_length
    - CRLF line endings in the body become LF
    - NUL in the body becomes a space (other body characters are kept)
    """
    title = force_clean_text(raw_title or "")
    if not title.strip():
        title = default_title(display_name)
    title = title[:MAX_TITLE_LENGTH]

    body = (raw_body or "").replace("\r\n", "\n")[:max_raw_length]
    body = body.replace("\0", " ")

    return NormalizedPaste(title=title, body=body)
