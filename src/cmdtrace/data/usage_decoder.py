"""Best-effort decoding of ccusage report records.

Every field is read through one of the ``_as_*`` helpers below, which return a
fixed default when the value is missing or has the wrong JSON type. Decoding
never raises; malformed rows come out zeroed instead of aborting the report.
"""

from __future__ import annotations

from cmdtrace.models.usage import (
    BlockUsage,
    BurnRate,
    DailyUsage,
    ModelBreakdown,
    MonthlyUsage,
    Projection,
)


def records(report: object, key: str) -> list[dict[str, object]]:
    """Return the dict rows stored under ``report[key]``."""
    if not isinstance(report, dict):
        return []
    rows = report.get(key)
    if not isinstance(rows, list):
        return []
    return [row for row in rows if isinstance(row, dict)]


def decode_model_breakdown(raw: dict[str, object]) -> ModelBreakdown:
    return ModelBreakdown(
        model_name=_as_str(raw.get("modelName")),
        input_tokens=_as_int(raw.get("inputTokens")),
        output_tokens=_as_int(raw.get("outputTokens")),
        cache_creation_tokens=_as_int(raw.get("cacheCreationTokens")),
        cache_read_tokens=_as_int(raw.get("cacheReadTokens")),
        cost=_as_float(raw.get("cost")),
    )


def decode_daily(raw: dict[str, object]) -> DailyUsage:
    return DailyUsage(
        date=_as_str(raw.get("date")),
        cost=_as_float(raw.get("totalCost")),
        input_tokens=_as_int(raw.get("inputTokens")),
        output_tokens=_as_int(raw.get("outputTokens")),
        cache_creation_tokens=_as_int(raw.get("cacheCreationTokens")),
        cache_read_tokens=_as_int(raw.get("cacheReadTokens")),
        total_tokens=_as_int(raw.get("totalTokens")),
        models_used=_as_str_list(raw.get("modelsUsed")),
        model_breakdowns=_breakdowns(raw.get("modelBreakdowns")),
    )


def decode_monthly(raw: dict[str, object]) -> MonthlyUsage:
    return MonthlyUsage(
        month=_as_str(raw.get("month")),
        cost=_as_float(raw.get("totalCost")),
        input_tokens=_as_int(raw.get("inputTokens")),
        output_tokens=_as_int(raw.get("outputTokens")),
        cache_creation_tokens=_as_int(raw.get("cacheCreationTokens")),
        cache_read_tokens=_as_int(raw.get("cacheReadTokens")),
        total_tokens=_as_int(raw.get("totalTokens")),
        models_used=_as_str_list(raw.get("modelsUsed")),
        model_breakdowns=_breakdowns(raw.get("modelBreakdowns")),
    )


def decode_block(raw: dict[str, object]) -> BlockUsage:
    return BlockUsage(
        block_id=_as_str(raw.get("id")),
        start_time=_as_str(raw.get("startTime")),
        end_time=_as_str(raw.get("endTime")),
        is_active=_as_bool(raw.get("isActive")),
        cost=_as_float(raw.get("costUSD")),
        total_tokens=_as_int(raw.get("totalTokens")),
        models=_as_str_list(raw.get("models")),
        entries=_as_int(raw.get("entries")),
        burn_rate=_burn_rate(raw.get("burnRate")),
        projection=_projection(raw.get("projection")),
    )


def _breakdowns(value: object) -> list[ModelBreakdown]:
    if not isinstance(value, list):
        return []
    return [decode_model_breakdown(item) for item in value if isinstance(item, dict)]


def _burn_rate(value: object) -> BurnRate | None:
    if not isinstance(value, dict):
        return None
    return BurnRate(
        tokens_per_minute=_as_float(value.get("tokensPerMinute")),
        cost_per_hour=_as_float(value.get("costPerHour")),
    )


def _projection(value: object) -> Projection | None:
    if not isinstance(value, dict):
        return None
    return Projection(
        remaining_minutes=_as_int(value.get("remainingMinutes")),
        total_cost=_as_float(value.get("totalCost")),
    )


def _as_str(value: object) -> str:
    return value if isinstance(value, str) else ""


def _as_bool(value: object) -> bool:
    return value if isinstance(value, bool) else False


def _as_float(value: object) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        return float(value)
    return 0.0


def _as_int(value: object) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return 0


def _as_str_list(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]
