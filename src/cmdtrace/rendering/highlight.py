"""Syntax-highlighted code blocks using Pygments."""

from __future__ import annotations

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name, guess_lexer
from pygments.util import ClassNotFound

from cmdtrace.rendering.theme import COLORS, MONO_FAMILY

# Fence tags that Pygments does not know under the same name.
_LANG_ALIASES: dict[str, str] = {
    "sh": "bash",
    "shell": "bash",
    "zsh": "bash",
    "console": "shell-session",
    "py": "python",
    "js": "javascript",
    "ts": "typescript",
    "yml": "yaml",
    "objc": "objective-c",
}

_FORMATTER = HtmlFormatter(
    style="default",
    noclasses=True,
    nowrap=False,
)


def resolve_lexer(code: str, language: str = "") -> Lexer:
    """Pick a lexer from the fence tag, guessing from the code when it is unknown."""
    name = language.strip().lower()
    name = _LANG_ALIASES.get(name, name)
    if name:
        try:
            return get_lexer_by_name(name, stripall=True)
        except ClassNotFound:
            pass
    if code.strip():
        try:
            return guess_lexer(code)
        except ClassNotFound:
            pass
    return get_lexer_by_name("text", stripall=True)


def highlight_code(code: str, language: str = "") -> str:
    """Return HTML with syntax-highlighted code."""
    highlighted = highlight(code, resolve_lexer(code, language), _FORMATTER)

    return f"""<div class="code-block" style="
        background-color: {COLORS["code_bg"]};
        padding: 10px;
        border-radius: 6px;
        overflow-x: auto;
        font-family: {MONO_FAMILY};
        font-size: 12px;
        line-height: 1.4;
    ">{highlighted}</div>"""
