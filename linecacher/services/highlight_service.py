"""Terminal syntax highlighting for cached source text, rendered with rich."""

from __future__ import annotations

import io
import logging

logger = logging.getLogger(__name__)

FORMAT_PLAIN = "plain"
DEFAULT_LEXER = "python"
COLOR_SYSTEMS: dict[str, str] = {
    "terminal": "standard",
    "terminal256": "256",
    "truecolor": "truecolor",
}
THEMES: dict[str, str] = {
    "dark": "ansi_dark",
    "light": "ansi_light",
}


def available_formats() -> tuple[str, ...]:
    return (FORMAT_PLAIN, *COLOR_SYSTEMS)


class HighlightService:
    """Render plain source text into an ANSI-coloured output format.

    When rich is missing or the format is unknown the text is returned
    unchanged, so callers never have to special-case an unavailable
    highlighter.
    """

    def __init__(self, theme: str = "dark") -> None:
        self.theme = THEMES.get(theme, theme)

    def render(self, text: str, fmt: str, filename: str | None = None) -> str:
        if fmt == FORMAT_PLAIN or not text:
            return text
        color_system = COLOR_SYSTEMS.get(fmt)
        if color_system is None:
            logger.warning("Unknown highlight format %r; returning plain text", fmt)
            return text
        try:
            from rich.console import Console
            from rich.syntax import Syntax
        except ImportError:
            return text

        lexer = Syntax.guess_lexer(filename, text) if filename else DEFAULT_LEXER
        if lexer == "default":
            lexer = DEFAULT_LEXER
        syntax = Syntax(text, lexer, theme=self.theme)
        highlighted = syntax.highlight(text)
        # the lexer always terminates its output; keep the caller's line count
        if highlighted.plain.endswith("\n") and not text.endswith("\n"):
            highlighted.right_crop(1)
        highlighted.justify = "default"
        buffer = io.StringIO()
        console = Console(
            file=buffer,
            force_terminal=True,
            color_system=color_system,
            no_color=False,
            highlight=False,
            soft_wrap=True,
        )
        console.print(highlighted, end="", soft_wrap=True)
        return buffer.getvalue()
