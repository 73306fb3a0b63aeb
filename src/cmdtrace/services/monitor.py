"""Live monitor for the current 5-hour usage block."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timedelta

from cmdtrace.data.usage_decoder import decode_block, records
from cmdtrace.models.monitor import ClaudePlan, ModelShare, MonitorSnapshot
from cmdtrace.models.usage import BlockUsage
from cmdtrace.rendering.format import short_model_name

NO_ACTIVE_BLOCK = "no active block"
BLOCK_MINUTES = 300
UNKNOWN_TIME = "--:--"


def select_active_block(blocks: Sequence[BlockUsage]) -> BlockUsage | None:
    """First active block, else the most recent one listed."""
    for block in blocks:
        if block.is_active:
            return block
    return blocks[-1] if blocks else None


def build_monitor(blocks_report: object, plan: ClaudePlan, now: datetime) -> MonitorSnapshot:
    """Compare the active block in a ``ccusage blocks`` report to plan limits."""
    blocks = [decode_block(raw) for raw in records(blocks_report, "blocks")]
    block = select_active_block(blocks)
    if block is None:
        return MonitorSnapshot(
            cost_limit=plan.cost_limit,
            token_limit=plan.token_limit,
            message_limit=plan.message_limit,
            time_to_reset=NO_ACTIVE_BLOCK,
            time_to_reset_minutes=BLOCK_MINUTES,
        )

    tokens_per_minute = block.burn_rate.tokens_per_minute if block.burn_rate else 0.0
    cost_per_hour = block.burn_rate.cost_per_hour if block.burn_rate else 0.0
    remaining_minutes = block.projection.remaining_minutes if block.projection else 0
    projected_cost = block.projection.total_cost if block.projection else 0.0

    return MonitorSnapshot(
        current_cost=block.cost,
        cost_limit=plan.cost_limit,
        current_tokens=block.total_tokens,
        token_limit=plan.token_limit,
        current_messages=block.entries,
        message_limit=plan.message_limit,
        time_to_reset=f"{remaining_minutes // 60}h {remaining_minutes % 60}m",
        time_to_reset_minutes=remaining_minutes,
        burn_rate=tokens_per_minute,
        cost_per_hour=cost_per_hour,
        projected_total_cost=projected_cost,
        token_exhaustion_time=exhaustion_time(
            tokens=block.total_tokens,
            token_limit=plan.token_limit,
            tokens_per_minute=tokens_per_minute,
            remaining_minutes=remaining_minutes,
            now=now,
        ),
        reset_time=reset_time(block.end_time, now),
        model_distribution=model_distribution(block.models),
        has_active_block=True,
    )


def exhaustion_time(
    *,
    tokens: int,
    token_limit: int,
    tokens_per_minute: float,
    remaining_minutes: int,
    now: datetime,
) -> str | None:
    """Clock time the token limit runs out, if that happens before the reset."""
    if tokens_per_minute <= 0:
        return None
    remaining_tokens = token_limit - tokens
    if not 0 < remaining_tokens < token_limit:
        return None
    minutes_left = remaining_tokens / tokens_per_minute
    if minutes_left >= remaining_minutes:
        return None
    return (now + timedelta(minutes=minutes_left)).strftime("%H:%M")


def reset_time(end_time: str, now: datetime) -> str:
    """``HH:MM`` of the block end in the timezone of ``now``."""
    try:
        end = datetime.fromisoformat(end_time)
    except ValueError:
        return UNKNOWN_TIME
    if end.tzinfo is not None and now.tzinfo is not None:
        end = end.astimezone(now.tzinfo)
    return end.strftime("%H:%M")


def model_distribution(models: Sequence[str]) -> list[ModelShare]:
    # ccusage does not report per-model token counts for blocks; split evenly.
    share = 100.0 / max(1, len(models))
    return [ModelShare(model=short_model_name(model), percentage=share) for model in models]
