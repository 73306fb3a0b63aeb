"""Usage service: fetches ccusage reports and builds snapshots."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import TYPE_CHECKING

from result import Err, Ok, Result

from cmdtrace.data.ccusage import REPORTS, run_report
from cmdtrace.models.monitor import ClaudePlan, MonitorSnapshot
from cmdtrace.models.usage import UsageSnapshot
from cmdtrace.services.monitor import build_monitor
from cmdtrace.services.usage_aggregator import aggregate

if TYPE_CHECKING:
    from cmdtrace.config import Config

logger = logging.getLogger(__name__)

ReportRunner = Callable[..., Awaitable[Result[dict[str, object], str]]]


class UsageService:
    """Service for usage snapshots and the live block monitor."""

    def __init__(self, config: Config, runner: ReportRunner = run_report) -> None:
        self._config = config
        self._run = runner

    async def load_snapshot(self) -> Result[UsageSnapshot, str]:
        """Fetch the daily, monthly and blocks reports concurrently and aggregate them.

        A report that fails is treated as absent. Only when all three fail is
        an Err returned.
        """
        results = await asyncio.gather(*(self._run(report, self._config) for report in REPORTS))

        payloads: list[dict[str, object] | None] = []
        errors: list[str] = []
        for report, outcome in zip(REPORTS, results, strict=True):
            if isinstance(outcome, Err):
                logger.info("Skipping %s report: %s", report, outcome.err_value)
                errors.append(outcome.err_value)
                payloads.append(None)
            else:
                payloads.append(outcome.ok_value)

        if all(payload is None for payload in payloads):
            return Err("; ".join(errors))

        daily, monthly, blocks = payloads
        return Ok(aggregate(daily, monthly, blocks))

    async def load_monitor(
        self,
        plan: ClaudePlan,
        now: datetime | None = None,
    ) -> Result[MonitorSnapshot, str]:
        """Fetch the active block and compare it to ``plan`` limits."""
        outcome = await self._run("blocks", self._config, active=True)
        if isinstance(outcome, Err):
            return outcome
        return Ok(build_monitor(outcome.ok_value, plan, now or datetime.now().astimezone()))
