"""Line diff between a paste and its revision."""

from __future__ import annotations

from difflib import SequenceMatcher

from pasteq.pastes.types import DiffResult

UNCHANGED_PREFIX = "  "
REMOVED_PREFIX = "- "
ADDED_PREFIX = "+ "


def _diff_lines(text: str) -> list[str]:
    # Trailing whitespace (per line and at the end of the text) never counts as a change
    return [line.rstrip() for line in text.rstrip().split("\n")]


def generate_diff(old_body: str, new_body: str) -> DiffResult:
    """
    Diff two bodies line by line.

    Every line of the new layout is emitted with a two-character prefix:
    "  " unchanged, "- " removed, "+ " added. `has_differences` is False
    exactly when the bodies match after trailing whitespace is ignored.
    """
    old_lines = _diff_lines(old_body)
    new_lines = _diff_lines(new_body)

    matcher = SequenceMatcher(None, old_lines, new_lines, autojunk=False)
    output: list[str] = []
    has_differences = False

    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            output.extend(UNCHANGED_PREFIX + line for line in old_lines[i1:i2])
            continue
        has_differences = True
        if tag in ("delete", "replace"):
            output.extend(REMOVED_PREFIX + line for line in old_lines[i1:i2])
        if tag in ("insert", "replace"):
            output.extend(ADDED_PREFIX + line for line in new_lines[j1:j2])

    return DiffResult(text="\n".join(output), has_differences=has_differences)
