"""Usage service tests with a fake ccusage runner."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

import pytest
from result import Err, Ok, Result

from cmdtrace.config import Config
from cmdtrace.models.monitor import ClaudePlan
from cmdtrace.services.usage_service import UsageService


class FakeRunner:
    def __init__(self, outcomes: dict[str, Result[dict[str, object], str]]) -> None:
        self.outcomes = outcomes
        self.calls: list[tuple[str, bool]] = []

    async def __call__(
        self, report: str, config: Config, *, active: bool = False
    ) -> Result[dict[str, object], str]:
        self.calls.append((report, active))
        return self.outcomes.get(report, Err(f"{report} unavailable"))


@pytest.fixture
def config(tmp_path: Path) -> Config:
    return Config(ccusage_command=("ccusage",), cwd=tmp_path)


@pytest.mark.asyncio
async def test_load_snapshot_runs_all_reports(
    config, daily_report, monthly_report, blocks_report
) -> None:
    runner = FakeRunner(
        {"daily": Ok(daily_report), "monthly": Ok(monthly_report), "blocks": Ok(blocks_report)}
    )
    result = await UsageService(config, runner).load_snapshot()

    assert isinstance(result, Ok)
    assert sorted(call[0] for call in runner.calls) == ["blocks", "daily", "monthly"]
    snapshot = result.ok_value
    assert len(snapshot.daily_usage) == 2
    assert len(snapshot.monthly_usage) == 2
    assert len(snapshot.block_usage) == 2
    assert snapshot.total_cost == pytest.approx(5.75)


@pytest.mark.asyncio
async def test_load_snapshot_tolerates_partial_failure(config, monthly_report) -> None:
    runner = FakeRunner({"monthly": Ok(monthly_report)})
    result = await UsageService(config, runner).load_snapshot()

    assert isinstance(result, Ok)
    snapshot = result.ok_value
    assert snapshot.daily_usage == []
    assert snapshot.total_cost == 0.0
    assert snapshot.max_daily_cost == 1.0
    assert len(snapshot.monthly_usage) == 2


@pytest.mark.asyncio
async def test_load_snapshot_fails_when_every_report_fails(config) -> None:
    result = await UsageService(config, FakeRunner({})).load_snapshot()
    assert isinstance(result, Err)
    assert "daily unavailable" in result.err_value
    assert "blocks unavailable" in result.err_value


@pytest.mark.asyncio
async def test_load_monitor_uses_active_blocks_report(config, blocks_report) -> None:
    runner = FakeRunner({"blocks": Ok(blocks_report)})
    now = datetime(2025, 12, 13, 12, 45, tzinfo=UTC)
    result = await UsageService(config, runner).load_monitor(ClaudePlan.MAX5, now=now)

    assert runner.calls == [("blocks", True)]
    assert isinstance(result, Ok)
    monitor = result.ok_value
    assert monitor.has_active_block is True
    assert monitor.current_cost == pytest.approx(2.125)
    assert monitor.token_limit == 88_000
    assert monitor.reset_time == "15:00"


@pytest.mark.asyncio
async def test_load_monitor_propagates_runner_error(config) -> None:
    result = await UsageService(config, FakeRunner({})).load_monitor(ClaudePlan.PRO)
    assert isinstance(result, Err)
    assert result.err_value == "blocks unavailable"
