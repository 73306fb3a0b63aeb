"""Pydantic models for cmdtrace."""

from cmdtrace.models.markdown import (
    Block,
    CodeBlock,
    HeadingBlock,
    ListItemBlock,
    QuoteBlock,
    TableBlock,
    TextBlock,
)
from cmdtrace.models.monitor import ClaudePlan, ModelShare, MonitorSnapshot
from cmdtrace.models.usage import (
    EMPTY_MAX_COST,
    BlockUsage,
    BurnRate,
    DailyUsage,
    ModelBreakdown,
    MonthlyUsage,
    Projection,
    UsageSnapshot,
)

__all__ = [
    "Block",
    "BlockUsage",
    "BurnRate",
    "ClaudePlan",
    "CodeBlock",
    "DailyUsage",
    "HeadingBlock",
    "ListItemBlock",
    "ModelBreakdown",
    "ModelShare",
    "MonitorSnapshot",
    "MonthlyUsage",
    "Projection",
    "QuoteBlock",
    "TableBlock",
    "TextBlock",
    "UsageSnapshot",
    "EMPTY_MAX_COST",
]
