"""Shared fixtures for cmdtrace tests."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

from cmdtrace.config import Config

DATA_DIR = Path(__file__).parent / "data"


def _load(name: str) -> dict[str, object]:
    return json.loads((DATA_DIR / name).read_text())


@pytest.fixture
def daily_report() -> dict[str, object]:
    """Sample ``ccusage daily --json`` output."""
    return _load("ccusage_daily.json")


@pytest.fixture
def monthly_report() -> dict[str, object]:
    """Sample ``ccusage monthly --json`` output."""
    return _load("ccusage_monthly.json")


@pytest.fixture
def blocks_report() -> dict[str, object]:
    """Sample ``ccusage blocks --json`` output with one active block."""
    return _load("ccusage_blocks.json")


@pytest.fixture
def sample_markdown_path() -> Path:
    return DATA_DIR / "sample_response.md"


@pytest.fixture
def script_config(tmp_path: Path):  # type: ignore[no-untyped-def]
    """Factory for a Config whose ccusage command runs a Python snippet."""

    def make(script: str, timeout: float = 10.0) -> Config:
        return Config(
            ccusage_command=(sys.executable, "-c", script),
            ccusage_timeout=timeout,
            cwd=tmp_path,
        )

    return make
