"""Tests for the active-block monitor."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from cmdtrace.models.monitor import ClaudePlan
from cmdtrace.models.usage import BlockUsage
from cmdtrace.services.monitor import (
    NO_ACTIVE_BLOCK,
    build_monitor,
    exhaustion_time,
    model_distribution,
    reset_time,
    select_active_block,
)

NOW = datetime(2025, 12, 13, 12, 45, tzinfo=UTC)


def test_plan_limits() -> None:
    assert (ClaudePlan.PRO.cost_limit, ClaudePlan.PRO.token_limit) == (18.0, 19_000)
    assert (ClaudePlan.MAX5.cost_limit, ClaudePlan.MAX5.token_limit) == (35.0, 88_000)
    assert (ClaudePlan.MAX20.cost_limit, ClaudePlan.MAX20.token_limit) == (140.0, 220_000)
    assert [plan.message_limit for plan in ClaudePlan] == [500, 1_000, 2_000]
    assert ClaudePlan("max20").short_name == "Max20"


def test_select_active_block_prefers_active_then_last() -> None:
    old = BlockUsage(block_id="old")
    active = BlockUsage(block_id="active", is_active=True)
    latest = BlockUsage(block_id="latest")

    assert select_active_block([old, active, latest]) is active
    assert select_active_block([old, latest]) is latest
    assert select_active_block([]) is None


def test_build_monitor_from_active_block(blocks_report) -> None:
    monitor = build_monitor(blocks_report, ClaudePlan.PRO, NOW)

    assert monitor.has_active_block is True
    assert monitor.current_cost == pytest.approx(2.125)
    assert monitor.current_tokens == 12000
    assert monitor.current_messages == 42
    assert monitor.cost_limit == 18.0
    assert monitor.burn_rate == 100.0
    assert monitor.cost_per_hour == 1.2
    assert monitor.projected_total_cost == 5.5
    assert monitor.time_to_reset == "2h 15m"
    assert monitor.time_to_reset_minutes == 135
    assert monitor.reset_time == "15:00"
    # 7,000 tokens left at 100/min runs out 70 minutes from now.
    assert monitor.token_exhaustion_time == "13:55"
    assert [share.model for share in monitor.model_distribution] == ["opus-4-5", "sonnet-4-5"]
    assert [share.percentage for share in monitor.model_distribution] == [50.0, 50.0]


def test_build_monitor_larger_plan_does_not_run_out(blocks_report) -> None:
    monitor = build_monitor(blocks_report, ClaudePlan.MAX20, NOW)
    assert monitor.token_exhaustion_time is None
    assert monitor.token_limit == 220_000


@pytest.mark.parametrize("report", [None, {}, {"blocks": []}, {"blocks": "x"}])
def test_build_monitor_without_blocks(report: object) -> None:
    monitor = build_monitor(report, ClaudePlan.MAX5, NOW)
    assert monitor.has_active_block is False
    assert monitor.current_cost == 0.0
    assert monitor.current_tokens == 0
    assert monitor.time_to_reset == NO_ACTIVE_BLOCK
    assert monitor.time_to_reset_minutes == 300
    assert monitor.reset_time == "--:--"
    assert monitor.model_distribution == []
    assert monitor.message_limit == 1_000


def test_build_monitor_falls_back_to_last_block() -> None:
    report = {
        "blocks": [
            {"id": "a", "costUSD": 1.0, "isActive": False},
            {"id": "b", "costUSD": 2.0, "isActive": False, "endTime": "bogus"},
        ]
    }
    monitor = build_monitor(report, ClaudePlan.PRO, NOW)
    assert monitor.current_cost == 2.0
    assert monitor.time_to_reset == "0h 0m"
    assert monitor.reset_time == "--:--"
    assert monitor.token_exhaustion_time is None


def test_exhaustion_time_rules() -> None:
    kwargs = {"token_limit": 1000, "remaining_minutes": 60, "now": NOW}
    assert exhaustion_time(tokens=500, tokens_per_minute=0.0, **kwargs) is None
    assert exhaustion_time(tokens=1000, tokens_per_minute=10.0, **kwargs) is None
    assert exhaustion_time(tokens=0, tokens_per_minute=10.0, **kwargs) is None
    assert exhaustion_time(tokens=500, tokens_per_minute=5.0, **kwargs) is None
    assert exhaustion_time(tokens=500, tokens_per_minute=10.0, **kwargs) == "13:35"


def test_reset_time_converts_to_caller_timezone() -> None:
    tokyo = timezone(timedelta(hours=9))
    assert reset_time("2025-12-13T15:00:00.000Z", NOW.astimezone(tokyo)) == "00:00"
    assert reset_time("2025-12-13T15:00:00", NOW) == "15:00"
    assert reset_time("", NOW) == "--:--"


def test_model_distribution_shortens_names() -> None:
    shares = model_distribution(
        ["claude-opus-4-5-20251101", "claude-haiku-4-5-20251001", "gpt-5"]
    )
    assert [share.model for share in shares] == ["opus-4-5", "haiku-4-5", "gpt-5"]
    assert sum(share.percentage for share in shares) == pytest.approx(100.0)
    assert model_distribution([]) == []
