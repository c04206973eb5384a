"""pasteq - paste bin backend with spam filtering and revision diffs"""

from __future__ import annotations

__version__ = "1.0.0"


# Lazy imports to avoid opening the database when only importing lightweight modules.
def __getattr__(name: str):
    if name in ("Paste", "PasteIngestionService", "PasteRepository"):
        from pasteq import pastes

        return getattr(pastes, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "Paste",
    "PasteIngestionService",
    "PasteRepository",
]
