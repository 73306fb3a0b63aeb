"""Aggregation of ccusage daily/monthly/blocks reports into a snapshot."""

from __future__ import annotations

from cmdtrace.data.usage_decoder import decode_block, decode_daily, decode_monthly, records
from cmdtrace.models.usage import DailyUsage, UsageSnapshot


def aggregate(
    daily_report: object = None,
    monthly_report: object = None,
    blocks_report: object = None,
) -> UsageSnapshot:
    """Build a ``UsageSnapshot`` from three optional report payloads.

    Args:
        daily_report: Parsed ``ccusage daily --json`` output, or None.
        monthly_report: Parsed ``ccusage monthly --json`` output, or None.
        blocks_report: Parsed ``ccusage blocks --json`` output, or None.

    Returns:
        A snapshot whose grand totals come from the daily rows only. Rows keep
        the order the reports listed them in.
    """
    daily = [decode_daily(raw) for raw in records(daily_report, "daily")]
    monthly = [decode_monthly(raw) for raw in records(monthly_report, "monthly")]
    blocks = [decode_block(raw) for raw in records(blocks_report, "blocks")]

    return UsageSnapshot(
        **_daily_totals(daily),
        daily_usage=daily,
        monthly_usage=monthly,
        block_usage=blocks,
    )


def _daily_totals(days: list[DailyUsage]) -> dict[str, float | int]:
    total_cost = 0.0
    input_tokens = 0
    output_tokens = 0
    cache_creation_tokens = 0
    cache_read_tokens = 0
    total_tokens = 0
    for day in days:
        total_cost += day.cost
        input_tokens += day.input_tokens
        output_tokens += day.output_tokens
        cache_creation_tokens += day.cache_creation_tokens
        cache_read_tokens += day.cache_read_tokens
        total_tokens += day.total_tokens
    return {
        "total_cost": total_cost,
        "input_tokens": input_tokens,
        "output_tokens": output_tokens,
        "cache_creation_tokens": cache_creation_tokens,
        "cache_read_tokens": cache_read_tokens,
        "total_tokens": total_tokens,
    }
