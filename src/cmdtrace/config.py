"""Configuration for cmdtrace."""

import os
import shlex
from dataclasses import dataclass, field
from pathlib import Path

from cmdtrace.models.monitor import ClaudePlan

CCUSAGE_ENV_VAR = "CMDTRACE_CCUSAGE"
PLAN_ENV_VAR = "CMDTRACE_PLAN"


def _default_ccusage_command() -> tuple[str, ...]:
    raw = os.environ.get(CCUSAGE_ENV_VAR, "").strip()
    if raw:
        return tuple(shlex.split(raw))
    return ("ccusage",)


def _default_plan() -> ClaudePlan:
    raw = os.environ.get(PLAN_ENV_VAR, "").strip().lower()
    if raw in {plan.value for plan in ClaudePlan}:
        return ClaudePlan(raw)
    return ClaudePlan.PRO


@dataclass(frozen=True)
class Config:
    """Application configuration."""

    ccusage_command: tuple[str, ...] = field(default_factory=_default_ccusage_command)
    ccusage_timeout: float = 15.0
    cwd: Path = field(default_factory=Path.home)
    # Plan used by `monitor` when --plan is not given.
    plan: ClaudePlan = field(default_factory=_default_plan)

    @classmethod
    def with_command(cls, command: str | None, **kwargs: object) -> "Config":
        """Build a config, overriding the ccusage command from a shell-style string."""
        if command and command.strip():
            return cls(ccusage_command=tuple(shlex.split(command)), **kwargs)  # type: ignore[arg-type]
        return cls(**kwargs)  # type: ignore[arg-type]
