"""Async runner for the external ``ccusage`` CLI."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING

from result import Err, Ok, Result

if TYPE_CHECKING:
    from cmdtrace.config import Config

logger = logging.getLogger(__name__)

REPORTS = ("daily", "monthly", "blocks")


def build_args(report: str, *, active: bool = False) -> list[str]:
    """Arguments passed to ccusage for one report."""
    if report == "blocks" and active:
        return ["blocks", "--active", "--json", "--breakdown"]
    return [report, "--json", "-o", "desc"]


async def run_report(
    report: str,
    config: Config,
    *,
    active: bool = False,
) -> Result[dict[str, object], str]:
    """Run one ccusage report and decode its JSON object.

    Returns:
        Ok with the top-level JSON object, or Err with a short reason.
    """
    argv = [*config.ccusage_command, *build_args(report, active=active)]
    logger.debug("Running %s", " ".join(argv))
    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=config.cwd,
        )
    except OSError as exc:
        logger.warning("ccusage not runnable (%s): %s", argv[0], exc)
        return Err(f"ccusage not runnable: {argv[0]}")

    try:
        stdout, stderr = await asyncio.wait_for(
            process.communicate(), timeout=config.ccusage_timeout
        )
    except TimeoutError:
        process.kill()
        await process.wait()
        logger.warning("ccusage %s timed out after %.0fs", report, config.ccusage_timeout)
        return Err(f"ccusage {report} timed out after {config.ccusage_timeout:g}s")

    if process.returncode != 0:
        detail = stderr.decode("utf-8", errors="replace").strip()
        logger.warning("ccusage %s exited with %s: %s", report, process.returncode, detail)
        return Err(f"ccusage {report} exited with {process.returncode}")

    return decode_output(report, stdout.decode("utf-8", errors="replace"))


def decode_output(report: str, output: str) -> Result[dict[str, object], str]:
    """Parse ccusage stdout into a JSON object."""
    text = output.strip()
    if not text:
        return Err(f"ccusage {report} returned no data")
    try:
        payload = json.loads(text)
    except json.JSONDecodeError:
        logger.warning("Invalid JSON from ccusage %s", report)
        return Err(f"ccusage {report} returned invalid JSON")
    if not isinstance(payload, dict):
        return Err(f"ccusage {report} returned {type(payload).__name__}, expected object")
    return Ok(payload)
