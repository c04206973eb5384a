"""Unit tests for the content-type registry and renderers"""

from __future__ import annotations

import pytest

from pasteq.pastes.highlighter import (
    ContentType,
    ContentTypeRegistry,
    RegistryHighlighter,
    highlight_diff,
    highlight_plain_text,
)


def test_registry_lookup_is_case_insensitive():
    registry = ContentTypeRegistry()

    assert registry.is_known("Script")
    assert registry.get("LOG").display_name == "Server Log"
    assert not registry.is_known("cobol")
    assert registry.get("cobol") is None


def test_display_name_of_unknown_type_raises():
    with pytest.raises(KeyError):
        ContentTypeRegistry().display_name("cobol")


def test_plain_text_is_html_escaped():
    rendered = highlight_plain_text('<script>alert("x")</script>')

    assert "<script>" not in rendered
    assert "&lt;script&gt;" in rendered


def test_one_span_per_line():
    assert highlight_plain_text("a\nb\nc").count("<span") == 3


def test_diff_lines_classified():
    rendered = highlight_diff("  same\n- old\n+ new")

    assert 'class="line diff-removed">- old' in rendered
    assert 'class="line diff-added">+ new' in rendered


def test_highlighter_returns_none_for_unknown_type():
    highlighter = RegistryHighlighter(ContentTypeRegistry())

    assert highlighter.render("cobol", "IDENTIFICATION DIVISION.") is None


def test_highlighter_returns_none_when_renderer_raises():
    def broken(raw: str) -> str:
        raise ValueError("boom")

    registry = ContentTypeRegistry((ContentType("text", "Plain Text", broken),))

    assert RegistryHighlighter(registry).render("text", "hello") is None
