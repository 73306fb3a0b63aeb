"""Plain-text usage and monitor reports for the terminal."""

from __future__ import annotations

from collections.abc import Sequence
from enum import StrEnum
from typing import TypeVar

from cmdtrace.models.markdown import (
    Block,
    CodeBlock,
    HeadingBlock,
    ListItemBlock,
    QuoteBlock,
    TableBlock,
    TextBlock,
)
from cmdtrace.models.monitor import ClaudePlan, MonitorSnapshot
from cmdtrace.models.usage import BlockUsage, DailyUsage, MonthlyUsage, UsageSnapshot
from cmdtrace.rendering.format import (
    cost_bar,
    format_block_time,
    format_cost,
    format_day_label,
    format_month_label,
    format_tokens,
    short_model_name,
)

_Row = TypeVar("_Row", DailyUsage, MonthlyUsage, BlockUsage)


class UsageView(StrEnum):
    DAILY = "daily"
    MONTHLY = "monthly"
    BLOCKS = "blocks"

    @property
    def default_limit(self) -> int:
        match self:
            case UsageView.MONTHLY:
                return 6
            case UsageView.BLOCKS:
                return 10
            case _:
                return 7


def usage_lines(
    snapshot: UsageSnapshot,
    view: UsageView = UsageView.DAILY,
    limit: int | None = None,
) -> list[str]:
    """Summary totals followed by one bar row per item of ``view``.

    Rows are listed in report order; ``limit=None`` uses the view's default
    and ``limit=0`` shows everything.
    """
    if limit is None:
        limit = view.default_limit

    lines = [
        f"Total cost:   {format_cost(snapshot.total_cost)}",
        f"Total tokens: {format_tokens(snapshot.total_tokens)}"
        f" (in {format_tokens(snapshot.input_tokens)},"
        f" out {format_tokens(snapshot.output_tokens)})",
        f"Cache:        {format_tokens(snapshot.cache_read_tokens)} read,"
        f" {format_tokens(snapshot.cache_creation_tokens)} created",
        "",
    ]

    match view:
        case UsageView.MONTHLY:
            months = _take(snapshot.monthly_usage, limit)
            lines.append(f"Monthly ({len(months)} of {len(snapshot.monthly_usage)})")
            for month in months:
                lines.append(
                    f"  {format_month_label(month.month):<6}"
                    f" {cost_bar(month.cost, snapshot.max_monthly_cost)}"
                    f" {format_cost(month.cost):>9}"
                    f" {format_tokens(month.total_tokens):>7}"
                    f"  {_models(month.models_used)}"
                )
        case UsageView.BLOCKS:
            blocks = _take(snapshot.block_usage, limit)
            lines.append(f"5-hour blocks ({len(blocks)} of {len(snapshot.block_usage)})")
            for block in blocks:
                marker = "*" if block.is_active else " "
                lines.append(
                    f" {marker}{format_block_time(block.start_time):<12}"
                    f" {cost_bar(block.cost, snapshot.max_block_cost)}"
                    f" ${block.cost:>8.3f}"
                    f" {format_tokens(block.total_tokens):>7}"
                    f"  {_models(block.models)}"
                )
        case _:
            days = _take(snapshot.daily_usage, limit)
            lines.append(f"Daily ({len(days)} of {len(snapshot.daily_usage)})")
            for day in days:
                lines.append(
                    f"  {format_day_label(day.date):<6}"
                    f" {cost_bar(day.cost, snapshot.max_daily_cost)}"
                    f" {format_cost(day.cost):>9}"
                    f" {format_tokens(day.total_tokens):>7}"
                    f"  {_models(day.models_used)}"
                )
    return lines


def monitor_lines(monitor: MonitorSnapshot, plan: ClaudePlan) -> list[str]:
    """Current block figures against ``plan`` limits."""
    lines = [f"Plan: {plan.short_name}"]
    if not monitor.has_active_block:
        lines.append(f"Reset: {monitor.time_to_reset}")
        return lines

    lines.extend(
        [
            f"Cost:     {format_cost(monitor.current_cost)} / {format_cost(monitor.cost_limit)}"
            f"  {cost_bar(monitor.current_cost, monitor.cost_limit)}",
            f"Tokens:   {format_tokens(monitor.current_tokens)}"
            f" / {format_tokens(monitor.token_limit)}"
            f"  {cost_bar(monitor.current_tokens, monitor.token_limit)}",
            f"Messages: {monitor.current_messages} / {monitor.message_limit}",
            f"Burn:     {monitor.burn_rate:.1f} tok/min, {format_cost(monitor.cost_per_hour)}/h",
            f"Projected block cost: {format_cost(monitor.projected_total_cost)}",
            f"Reset in {monitor.time_to_reset} (at {monitor.reset_time})",
        ]
    )
    if monitor.token_exhaustion_time:
        lines.append(f"Tokens run out at {monitor.token_exhaustion_time}")
    if monitor.model_distribution:
        shares = ", ".join(
            f"{share.model} {share.percentage:.0f}%" for share in monitor.model_distribution
        )
        lines.append(f"Models: {shares}")
    return lines


def block_summary(block: Block) -> str:
    """One-line description of a parsed Markdown block."""
    match block:
        case CodeBlock(content=content, language=language):
            return f"code[{language or '-'}] {len(content.splitlines())} lines"
        case HeadingBlock(content=content, level=level):
            return f"h{level} {content}"
        case ListItemBlock(content=content, indent=indent):
            return f"{'  ' * indent}- {content}"
        case QuoteBlock(content=content):
            return f"> {content}"
        case TableBlock(rows=rows, headers=headers):
            return f"table {len(headers)} cols x {len(rows)} rows: {' | '.join(headers)}"
        case TextBlock(content=content):
            first, _, rest = content.partition("\n")
            return f"text {first}" + (" ..." if rest else "")
    return ""


def _take(rows: Sequence[_Row], limit: int) -> list[_Row]:
    return list(rows) if limit <= 0 else list(rows[:limit])


def _models(models: list[str], shown: int = 2) -> str:
    return ", ".join(short_model_name(model) for model in models[:shown])
