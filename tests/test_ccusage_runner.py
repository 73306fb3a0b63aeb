"""Tests for the ccusage subprocess runner against real child processes."""

from __future__ import annotations

from pathlib import Path

import pytest
from result import Err, Ok

from cmdtrace.config import Config
from cmdtrace.data.ccusage import build_args, decode_output, run_report

ECHO_ARGS = "import json, sys; print(json.dumps({'daily': [], 'args': sys.argv[1:]}))"


def test_build_args() -> None:
    assert build_args("daily") == ["daily", "--json", "-o", "desc"]
    assert build_args("monthly") == ["monthly", "--json", "-o", "desc"]
    assert build_args("blocks") == ["blocks", "--json", "-o", "desc"]
    assert build_args("blocks", active=True) == ["blocks", "--active", "--json", "--breakdown"]


def test_decode_output_variants() -> None:
    assert decode_output("daily", '{"daily": []}') == Ok({"daily": []})

    empty = decode_output("daily", "  \n")
    assert isinstance(empty, Err)
    assert "no data" in empty.err_value

    invalid = decode_output("daily", "Error: something broke")
    assert isinstance(invalid, Err)
    assert "invalid JSON" in invalid.err_value

    wrong_shape = decode_output("daily", "[1, 2]")
    assert isinstance(wrong_shape, Err)
    assert "expected object" in wrong_shape.err_value


@pytest.mark.asyncio
async def test_run_report_passes_report_args(script_config) -> None:
    result = await run_report("monthly", script_config(ECHO_ARGS))
    assert isinstance(result, Ok)
    assert result.ok_value["args"] == ["monthly", "--json", "-o", "desc"]


@pytest.mark.asyncio
async def test_run_report_active_blocks(script_config) -> None:
    result = await run_report("blocks", script_config(ECHO_ARGS), active=True)
    assert isinstance(result, Ok)
    assert result.ok_value["args"] == ["blocks", "--active", "--json", "--breakdown"]


@pytest.mark.asyncio
async def test_run_report_nonzero_exit(script_config) -> None:
    result = await run_report("daily", script_config("import sys; sys.exit(3)"))
    assert isinstance(result, Err)
    assert "exited with 3" in result.err_value


@pytest.mark.asyncio
async def test_run_report_timeout_kills_process(script_config) -> None:
    result = await run_report("daily", script_config("import time; time.sleep(30)", timeout=0.3))
    assert isinstance(result, Err)
    assert "timed out" in result.err_value


@pytest.mark.asyncio
async def test_run_report_invalid_json(script_config) -> None:
    result = await run_report("daily", script_config("print('not json')"))
    assert isinstance(result, Err)
    assert "invalid JSON" in result.err_value


@pytest.mark.asyncio
async def test_run_report_missing_executable(tmp_path: Path) -> None:
    config = Config(ccusage_command=(str(tmp_path / "no-such-ccusage"),), cwd=tmp_path)
    result = await run_report("daily", config)
    assert isinstance(result, Err)
    assert "not runnable" in result.err_value


def test_config_command_override(monkeypatch) -> None:
    monkeypatch.setenv("CMDTRACE_CCUSAGE", "npx ccusage@latest")
    assert Config().ccusage_command == ("npx", "ccusage@latest")
    assert Config.with_command("bunx ccusage").ccusage_command == ("bunx", "ccusage")
    assert Config.with_command("  ").ccusage_command == ("npx", "ccusage@latest")

    monkeypatch.delenv("CMDTRACE_CCUSAGE")
    assert Config().ccusage_command == ("ccusage",)
    assert Config.with_command(None, ccusage_timeout=3.0).ccusage_timeout == 3.0
