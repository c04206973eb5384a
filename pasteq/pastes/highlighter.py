"""
Content-type registry and default renderers.

The coordinator only needs two things from here: whether a type tag is
known (plus its display name), and a `render(content_type, raw)` callable
that returns rendered text or None on failure. The renderers below are
deliberately plain: HTML-escaped lines with a CSS class per line kind.
"""

from __future__ import annotations

import html
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from pasteq.observability.logging import get_logger

logger = get_logger(__name__)

Renderer = Callable[[str], str]


class Highlighter(Protocol):
    def render(self, content_type: str, raw: str) -> str | None: ...


def _wrap_lines(raw: str, classify: Callable[[str], str]) -> str:
    lines = []
    for line in raw.split("\n"):
        escaped = html.escape(line.rstrip("\r"))
        lines.append(f'<span class="{classify(line)}">{escaped}</span>')
    return "\n".join(lines)


def highlight_plain_text(raw: str) -> str:
    return _wrap_lines(raw, lambda _line: "line")


def highlight_log(raw: str) -> str:
    def classify(line: str) -> str:
        lowered = line.lower()
        if "error" in lowered or "exception" in lowered:
            return "line log-error"
        if "warn" in lowered:
            return "line log-warning"
        return "line"

    return _wrap_lines(raw, classify)


def highlight_diff(raw: str) -> str:
    def classify(line: str) -> str:
        if line.startswith("+ "):
            return "line diff-added"
        if line.startswith("- "):
            return "line diff-removed"
        return "line"

    return _wrap_lines(raw, classify)


def highlight_script(raw: str) -> str:
    def classify(line: str) -> str:
        stripped = line.lstrip()
        if stripped.startswith("#"):
            return "line script-comment"
        if stripped.startswith("- "):
            return "line script-command"
        return "line"

    return _wrap_lines(raw, classify)


@dataclass(frozen=True)
class ContentType:
    name: str
    display_name: str
    renderer: Renderer = highlight_plain_text


DEFAULT_CONTENT_TYPES: tuple[ContentType, ...] = (
    ContentType("script", "Denizen Script", highlight_script),
    ContentType("log", "Server Log", highlight_log),
    ContentType("bbcode", "BBCode"),
    ContentType("text", "Plain Text"),
    ContentType("diff", "Diff Report", highlight_diff),
    ContentType("csharp", "C#"),
    ContentType("java", "Java"),
    ContentType("javascript", "JavaScript"),
    ContentType("python", "Python"),
    ContentType("yaml", "YAML"),
    ContentType("json", "JSON"),
    ContentType("html", "HTML"),
    ContentType("css", "CSS"),
    ContentType("lua", "Lua"),
    ContentType("sql", "SQL"),
)


class ContentTypeRegistry:
    """Known paste types, keyed by lower-case tag."""

    def __init__(self, types: tuple[ContentType, ...] = DEFAULT_CONTENT_TYPES):
        self._types = {t.name.lower(): t for t in types}

    def is_known(self, type_tag: str) -> bool:
        return (type_tag or "").lower() in self._types

    def get(self, type_tag: str) -> ContentType | None:
        return self._types.get((type_tag or "").lower())

    def display_name(self, type_tag: str) -> str:
        content_type = self.get(type_tag)
        if content_type is None:
            raise KeyError(type_tag)
        return content_type.display_name


class RegistryHighlighter:
    """Renders with the registry's renderer; any failure comes back as None."""

    def __init__(self, registry: ContentTypeRegistry):
        self.registry = registry

    def render(self, content_type: str, raw: str) -> str | None:
        entry = self.registry.get(content_type)
        if entry is None:
            logger.warning("No renderer for content type %r", content_type)
            return None
        try:
            return entry.renderer(raw)
        except Exception as e:
            logger.error("Renderer for %s failed: %s", content_type, e)
            return None
