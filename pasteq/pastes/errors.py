"""
Exception types for the paste pipeline.

Policy and dependency rejections are not exceptions; they come back as an
IngestOutcome. These cover input that never reaches the pipeline and storage
failures that must not be papered over.
"""

from __future__ import annotations


class PasteError(Exception):
    """Base class for paste pipeline errors."""


class MalformedInputError(PasteError):
    """Missing/duplicate form fields or a non-numeric paste reference."""


class PasteNotFoundError(PasteError):
    """A referenced paste ID has no stored record."""

    def __init__(self, paste_id: int):
        super().__init__(f"paste {paste_id} not found")
        self.paste_id = paste_id


class StorageUnavailableError(PasteError):
    """The backing store failed; IDs must not be guessed or reused."""
