"""Usage report models built from ccusage JSON output."""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field, computed_field

# Bar-chart scale used when a report has no rows.
EMPTY_MAX_COST = 1.0


class ModelBreakdown(BaseModel):
    """Per-model contribution inside a daily or monthly row."""

    model_config = ConfigDict(frozen=True)

    model_name: str = ""
    input_tokens: int = 0
    output_tokens: int = 0
    cache_creation_tokens: int = 0
    cache_read_tokens: int = 0
    cost: float = 0.0


class DailyUsage(BaseModel):
    """One calendar day of usage."""

    model_config = ConfigDict(frozen=True)

    date: str = ""
    cost: float = 0.0
    input_tokens: int = 0
    output_tokens: int = 0
    cache_creation_tokens: int = 0
    cache_read_tokens: int = 0
    total_tokens: int = 0
    models_used: list[str] = Field(default_factory=list)
    model_breakdowns: list[ModelBreakdown] = Field(default_factory=list)


class MonthlyUsage(BaseModel):
    """One calendar month of usage, as aggregated upstream."""

    model_config = ConfigDict(frozen=True)

    month: str = ""
    cost: float = 0.0
    input_tokens: int = 0
    output_tokens: int = 0
    cache_creation_tokens: int = 0
    cache_read_tokens: int = 0
    total_tokens: int = 0
    models_used: list[str] = Field(default_factory=list)
    model_breakdowns: list[ModelBreakdown] = Field(default_factory=list)


class BurnRate(BaseModel):
    """Consumption rate of the current 5-hour block."""

    model_config = ConfigDict(frozen=True)

    tokens_per_minute: float = 0.0
    cost_per_hour: float = 0.0


class Projection(BaseModel):
    """Projected end-of-block figures."""

    model_config = ConfigDict(frozen=True)

    remaining_minutes: int = 0
    total_cost: float = 0.0


class BlockUsage(BaseModel):
    """A 5-hour rolling usage window."""

    model_config = ConfigDict(frozen=True)

    block_id: str = ""
    start_time: str = ""
    end_time: str = ""
    is_active: bool = False
    cost: float = 0.0
    total_tokens: int = 0
    models: list[str] = Field(default_factory=list)
    entries: int = 0
    burn_rate: BurnRate | None = None
    projection: Projection | None = None


def max_cost(rows: Sequence[DailyUsage | MonthlyUsage | BlockUsage]) -> float:
    """Largest cost in ``rows``, or ``EMPTY_MAX_COST`` when there are none."""
    if not rows:
        return EMPTY_MAX_COST
    return max(row.cost for row in rows)


class UsageSnapshot(BaseModel):
    """Aggregated usage for one refresh.

    Grand totals are summed from ``daily_usage`` only. Monthly and block rows
    are kept for display and are not reconciled against the totals.
    """

    model_config = ConfigDict(frozen=True)

    total_cost: float = 0.0
    input_tokens: int = 0
    output_tokens: int = 0
    cache_creation_tokens: int = 0
    cache_read_tokens: int = 0
    total_tokens: int = 0
    daily_usage: list[DailyUsage] = Field(default_factory=list)
    monthly_usage: list[MonthlyUsage] = Field(default_factory=list)
    block_usage: list[BlockUsage] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def max_daily_cost(self) -> float:
        return max_cost(self.daily_usage)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def max_monthly_cost(self) -> float:
        return max_cost(self.monthly_usage)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def max_block_cost(self) -> float:
        return max_cost(self.block_usage)
