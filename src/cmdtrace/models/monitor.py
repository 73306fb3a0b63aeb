"""Live 5-hour block monitor models."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class ClaudePlan(StrEnum):
    """Subscription plans with their per-block limits."""

    PRO = "pro"
    MAX5 = "max5"
    MAX20 = "max20"

    @property
    def short_name(self) -> str:
        match self:
            case ClaudePlan.MAX5:
                return "Max5"
            case ClaudePlan.MAX20:
                return "Max20"
            case _:
                return "Pro"

    @property
    def cost_limit(self) -> float:
        match self:
            case ClaudePlan.MAX5:
                return 35.0
            case ClaudePlan.MAX20:
                return 140.0
            case _:
                return 18.0

    @property
    def token_limit(self) -> int:
        match self:
            case ClaudePlan.MAX5:
                return 88_000
            case ClaudePlan.MAX20:
                return 220_000
            case _:
                return 19_000

    @property
    def message_limit(self) -> int:
        match self:
            case ClaudePlan.MAX5:
                return 1_000
            case ClaudePlan.MAX20:
                return 2_000
            case _:
                return 500


class ModelShare(BaseModel):
    """Share of the current block attributed to one model."""

    model_config = ConfigDict(frozen=True)

    model: str
    percentage: float


class MonitorSnapshot(BaseModel):
    """Point-in-time view of the active block against plan limits."""

    model_config = ConfigDict(frozen=True)

    current_cost: float = 0.0
    cost_limit: float = 0.0
    current_tokens: int = 0
    token_limit: int = 0
    current_messages: int = 0
    message_limit: int = 0
    time_to_reset: str = ""
    time_to_reset_minutes: int = 0
    burn_rate: float = 0.0  # tokens per minute
    cost_per_hour: float = 0.0
    projected_total_cost: float = 0.0
    token_exhaustion_time: str | None = None
    reset_time: str = "--:--"
    model_distribution: list[ModelShare] = Field(default_factory=list)
    has_active_block: bool = False
