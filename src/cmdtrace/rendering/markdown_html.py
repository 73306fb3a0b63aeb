"""Parsed Markdown blocks → styled HTML."""

from __future__ import annotations

from collections.abc import Iterable
from html import unescape as unescape_entities
from urllib.parse import urlsplit
from xml.etree.ElementTree import Element

import markdown
from markdown.treeprocessors import Treeprocessor

from cmdtrace.data.markdown_parser import parse_blocks
from cmdtrace.models.markdown import (
    Block,
    CodeBlock,
    HeadingBlock,
    ListItemBlock,
    QuoteBlock,
    TableBlock,
    TextBlock,
)
from cmdtrace.rendering.highlight import highlight_code
from cmdtrace.rendering.theme import COLORS, MONO_FAMILY

INDENT_PX = 16

# Block structure comes from parse_blocks; markdown only sees inline content.
_BLOCK_PROCESSORS = (
    "empty",
    "indent",
    "code",
    "hashheader",
    "setextheader",
    "hr",
    "olist",
    "ulist",
    "quote",
    "reference",
)
_SAFE_SCHEMES = frozenset({"", "http", "https", "mailto"})
_URL_ATTRS = {"a": "href", "img": "src"}


class _SafeUrlTreeprocessor(Treeprocessor):
    """Drop link and image targets with schemes other than http(s) and mailto."""

    def run(self, root: Element) -> None:
        for element in root.iter():
            attr = _URL_ATTRS.get(element.tag)
            if attr is None:
                continue
            url = element.get(attr)
            if url is not None and not is_safe_url(url):
                del element.attrib[attr]


def is_safe_url(url: str) -> bool:
    """Relative URLs and http(s)/mailto targets are kept.

    Entities are decoded and whitespace or control characters removed first,
    since browsers do the same before reading the scheme.
    """
    cleaned = "".join(char for char in unescape_entities(url) if char > " ")
    try:
        scheme = urlsplit(cleaned).scheme
    except ValueError:
        return False
    return scheme.lower() in _SAFE_SCHEMES


def _build_converter() -> markdown.Markdown:
    md = markdown.Markdown(extensions=["nl2br"])
    # Raw HTML is shown as text.
    md.preprocessors.deregister("html_block")
    md.inlinePatterns.deregister("html")
    for name in _BLOCK_PROCESSORS:
        md.parser.blockprocessors.deregister(name)
    # After "unescape" so escaped characters in URLs are restored first.
    md.treeprocessors.register(_SafeUrlTreeprocessor(md), "safe_url", -10)
    return md


_MD = _build_converter()


def render_inline(text: str) -> str:
    """Render inline Markdown (emphasis, code spans, links) without a ``<p>`` wrapper."""
    html = _convert(text)
    if html.startswith("<p>") and html.endswith("</p>") and html.count("<p>") == 1:
        return html[3:-4]
    return html


def render_block(block: Block) -> str:
    """Render a single block."""
    match block:
        case CodeBlock(content=content, language=language):
            return highlight_code(content, language)
        case HeadingBlock(content=content, level=level):
            return f"<h{level}>{render_inline(content)}</h{level}>"
        case ListItemBlock(content=content, indent=indent):
            return (
                f'<div class="list-item" style="margin-left: {indent * INDENT_PX}px;">'
                f"&bull; {render_inline(content)}</div>"
            )
        case QuoteBlock(content=content):
            return f"<blockquote>{render_inline(content)}</blockquote>"
        case TableBlock(rows=rows, headers=headers):
            return _render_table(headers, rows)
        case TextBlock(content=content):
            return f'<div class="text">{_convert(content)}</div>'
    return ""


def render_blocks(blocks: Iterable[Block]) -> str:
    """Render blocks top to bottom into one HTML fragment."""
    return "\n".join(render_block(block) for block in blocks)


def render_markdown(text: str) -> str:
    """Parse ``text`` and return a complete styled HTML document."""
    return _wrap_html(render_blocks(parse_blocks(text)))


def _convert(text: str) -> str:
    _MD.reset()
    return _MD.convert(text)


def _render_table(headers: list[str], rows: list[list[str]]) -> str:
    head = "".join(f"<th>{render_inline(cell)}</th>" for cell in headers)
    body = "".join(
        "<tr>" + "".join(f"<td>{render_inline(cell)}</td>" for cell in row) + "</tr>"
        for row in rows
    )
    return f"<table><thead><tr>{head}</tr></thead><tbody>{body}</tbody></table>"


def _wrap_html(body: str) -> str:
    """Wrap HTML body with a styled document."""
    return f"""<!DOCTYPE html>
<html><head><meta charset="utf-8"><style>
body {{
    font-family: -apple-system, 'SF Pro Text', 'Helvetica Neue', sans-serif;
    font-size: 13px;
    color: {COLORS["text"]};
    line-height: 1.5;
    margin: 0;
    padding: 0;
}}
p {{ margin: 0 0 8px 0; }}
code {{
    font-family: {MONO_FAMILY};
    font-size: 12px;
    background-color: {COLORS["code_bg"]};
    padding: 1px 4px;
    border-radius: 3px;
}}
pre {{ margin: 0; }}
blockquote {{
    border-left: 3px solid {COLORS["border"]};
    margin: 8px 0;
    padding: 4px 12px;
    color: {COLORS["text_muted"]};
}}
table {{
    border-collapse: collapse;
    margin: 8px 0;
}}
th, td {{
    border: 1px solid {COLORS["border"]};
    padding: 4px 8px;
    text-align: left;
}}
th {{
    background-color: {COLORS["panel_bg"]};
    font-weight: 600;
}}
a {{
    color: {COLORS["primary"]};
    text-decoration: none;
}}
h1, h2, h3, h4, h5, h6 {{
    margin: 12px 0 4px 0;
    font-weight: 600;
}}
h1 {{ font-size: 18px; }}
h2 {{ font-size: 16px; }}
h3 {{ font-size: 14px; }}
.list-item {{ margin-top: 2px; margin-bottom: 2px; }}
</style></head><body>{body}</body></html>"""
