"""Block models produced by the lightweight Markdown parser."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class TextBlock(BaseModel):
    """Paragraph run with inline formatting left untouched."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    content: str


class CodeBlock(BaseModel):
    """Fenced code; ``language`` is empty when the fence has no tag."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["code"] = "code"
    content: str
    language: str = ""


class HeadingBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["heading"] = "heading"
    content: str
    level: int = Field(ge=1, le=6)


class ListItemBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["list_item"] = "list_item"
    content: str
    indent: int = Field(default=0, ge=0)


class QuoteBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["quote"] = "quote"
    content: str


class TableBlock(BaseModel):
    """Pipe table; ``rows`` excludes the header and separator rows."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["table"] = "table"
    rows: list[list[str]] = Field(default_factory=list)
    headers: list[str] = Field(default_factory=list)


Block = Annotated[
    TextBlock | CodeBlock | HeadingBlock | ListItemBlock | QuoteBlock | TableBlock,
    Field(discriminator="kind"),
]
