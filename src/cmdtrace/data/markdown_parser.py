"""Line-oriented Markdown block parser for assistant output.

This is a greedy line-prefix dispatcher rather than a CommonMark grammar.
Each scan step looks at the current line, picks the first matching rule
(fence, heading, list item, quote, table, text) and consumes one or more
lines. Blocks never nest.
"""

from __future__ import annotations

from cmdtrace.models.markdown import (
    Block,
    CodeBlock,
    HeadingBlock,
    ListItemBlock,
    QuoteBlock,
    TableBlock,
    TextBlock,
)

FENCE = "```"
MAX_HEADING_LEVEL = 6
_LIST_MARKERS = ("- ", "* ")


def parse_blocks(content: str) -> list[Block]:
    """Split ``content`` into an ordered list of blocks."""
    lines = content.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    blocks: list[Block] = []
    i = 0

    while i < len(lines):
        line = lines[i]

        if line.startswith(FENCE):
            language = line[len(FENCE) :].strip()
            i += 1
            start = i
            while i < len(lines) and not lines[i].startswith(FENCE):
                i += 1
            blocks.append(CodeBlock(content="\n".join(lines[start:i]), language=language))
            i += 1  # closing fence, or past EOF when unterminated
            continue

        heading = _heading(line)
        if heading is not None:
            blocks.append(heading)
            i += 1
            continue

        if _is_list_item(line):
            blocks.append(
                ListItemBlock(content=line.strip()[2:].strip(), indent=_indent_level(line))
            )
            i += 1
            continue

        if line.startswith("> "):
            blocks.append(QuoteBlock(content=line[2:]))
            i += 1
            continue

        if _is_table_line(line):
            start = i
            while i < len(lines) and _is_table_line(lines[i]):
                i += 1
            table = _table(lines[start:i])
            # TODO: re-emit a lone pipe line as text once callers agree on it;
            # today it is dropped.
            if table is not None:
                blocks.append(table)
            continue

        # The current line matched nothing above, so the run always takes it.
        start = i
        i += 1
        while i < len(lines) and not _starts_block(lines[i]):
            i += 1
        text = "\n".join(lines[start:i]).strip()
        if text:
            blocks.append(TextBlock(content=text))

    return blocks


def parse_table_row(line: str) -> list[str]:
    """Split one ``| a | b |`` row into trimmed cells."""
    row = line.strip()
    if row.startswith("|"):
        row = row[1:]
    if row.endswith("|"):
        row = row[:-1]
    return [cell.strip() for cell in row.split("|")]


def _heading(line: str) -> HeadingBlock | None:
    if not line.startswith("#"):
        return None
    level = len(line) - len(line.lstrip("#"))
    text = line[level:].strip()
    if level > MAX_HEADING_LEVEL or not text:
        return None
    return HeadingBlock(content=text, level=level)


def _is_list_item(line: str) -> bool:
    return line.strip().startswith(_LIST_MARKERS)


def _indent_level(line: str) -> int:
    return (len(line) - len(line.lstrip(" \t"))) // 2


def _is_table_line(line: str) -> bool:
    return line.strip().startswith("|")


def _table(lines: list[str]) -> TableBlock | None:
    if len(lines) < 2:
        return None
    headers = parse_table_row(lines[0])
    data_start = 2 if "---" in lines[1] else 1
    rows = [cells for cells in map(parse_table_row, lines[data_start:]) if cells]
    return TableBlock(rows=rows, headers=headers)


def _starts_block(line: str) -> bool:
    return (
        line.startswith(FENCE)
        or _heading(line) is not None
        or _is_list_item(line)
        or line.startswith("> ")
        or _is_table_line(line)
    )
