from __future__ import annotations

import re
import sys

import pytest

from linecacher.services.highlight_service import (
    FORMAT_PLAIN,
    HighlightService,
    available_formats,
)

ANSI_PATTERN = re.compile(r"\x1b\[[0-9;]*m")

SOURCE = "def greet(name):\n    return 'hello ' + name"


def _strip_ansi(value: str) -> str:
    return ANSI_PATTERN.sub("", value)


def test_available_formats_lists_plain_first():
    formats = available_formats()
    assert formats[0] == FORMAT_PLAIN
    assert {"terminal", "terminal256", "truecolor"} <= set(formats)


def test_theme_names_map_to_rich_themes():
    assert HighlightService("dark").theme == "ansi_dark"
    assert HighlightService("light").theme == "ansi_light"
    assert HighlightService("monokai").theme == "monokai"


def test_plain_and_empty_text_are_returned_unchanged():
    service = HighlightService()
    assert service.render(SOURCE, FORMAT_PLAIN) == SOURCE
    assert service.render("", "terminal") == ""


def test_unknown_format_returns_text(caplog):
    service = HighlightService()
    with caplog.at_level("WARNING"):
        assert service.render(SOURCE, "html") == SOURCE
    assert "html" in caplog.text


@pytest.mark.parametrize("fmt", ["terminal", "terminal256", "truecolor"])
def test_render_keeps_text_and_line_count(fmt):
    rendered = HighlightService().render(SOURCE, fmt)

    assert "\x1b[" in rendered
    assert _strip_ansi(rendered) == SOURCE
    assert len(rendered.split("\n")) == 2


def test_render_guesses_lexer_from_filename():
    rendered = HighlightService().render("key: value", "terminal", filename="config.yaml")
    assert _strip_ansi(rendered) == "key: value"


def test_render_without_rich_returns_text(monkeypatch):
    monkeypatch.setitem(sys.modules, "rich.syntax", None)
    assert HighlightService().render(SOURCE, "terminal") == SOURCE
