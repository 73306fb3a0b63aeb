"""Typer CLI for cmdtrace: usage, monitor and render commands."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Annotated, NoReturn

import typer
from result import Err

from cmdtrace.config import Config
from cmdtrace.models.monitor import ClaudePlan
from cmdtrace.rendering.text_report import UsageView, block_summary, monitor_lines, usage_lines

app = typer.Typer(
    name="cmdtrace",
    help="Usage dashboards and transcript rendering for coding-assistant sessions.",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    ccusage: Annotated[
        str | None,
        typer.Option("--ccusage", help="Command used to run ccusage, e.g. 'npx ccusage@latest'"),
    ] = None,
    timeout: Annotated[
        float, typer.Option("--timeout", help="Seconds to wait for each ccusage report")
    ] = 15.0,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """Configure logging and the ccusage command for subcommands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = Config.with_command(ccusage, ccusage_timeout=timeout)


@app.command()
def usage(
    ctx: typer.Context,
    view: Annotated[UsageView, typer.Option("--view", help="Report granularity")] = UsageView.DAILY,
    limit: Annotated[int | None, typer.Option("--limit", help="Rows to show")] = None,
    show_all: Annotated[bool, typer.Option("--all", help="Show every row")] = False,
) -> None:
    """Show cost and token totals with per-day, per-month or per-block bars."""
    config: Config = ctx.obj
    asyncio.run(_do_usage(config, view, 0 if show_all else limit))


async def _do_usage(config: Config, view: UsageView, limit: int | None) -> None:
    """Load a snapshot and print it."""
    from cmdtrace.services.usage_service import UsageService

    result = await UsageService(config).load_snapshot()
    if isinstance(result, Err):
        _fail(f"ccusage failed: {result.err_value} (install with: npm install -g ccusage)")
    for line in usage_lines(result.ok_value, view, limit):
        typer.echo(line)


@app.command()
def monitor(
    ctx: typer.Context,
    plan: Annotated[
        ClaudePlan | None,
        typer.Option("--plan", help="Subscription plan (default: $CMDTRACE_PLAN or pro)"),
    ] = None,
) -> None:
    """Show the active 5-hour block against plan limits."""
    config: Config = ctx.obj
    asyncio.run(_do_monitor(config, plan or config.plan))


async def _do_monitor(config: Config, plan: ClaudePlan) -> None:
    """Load the active block and print it."""
    from cmdtrace.services.usage_service import UsageService

    result = await UsageService(config).load_monitor(plan)
    if isinstance(result, Err):
        _fail(f"ccusage failed: {result.err_value}")
    for line in monitor_lines(result.ok_value, plan):
        typer.echo(line)


@app.command()
def render(
    path: Annotated[Path, typer.Argument(help="Markdown file to parse", exists=True, dir_okay=False)],
    html: Annotated[bool, typer.Option("--html", help="Emit a styled HTML document")] = False,
) -> None:
    """Parse a Markdown file into blocks and print them or their HTML."""
    from cmdtrace.data.markdown_parser import parse_blocks
    from cmdtrace.rendering.markdown_html import render_markdown

    text = path.read_text(encoding="utf-8")
    if html:
        typer.echo(render_markdown(text))
        return
    for block in parse_blocks(text):
        typer.echo(block_summary(block))


def _fail(message: str) -> NoReturn:
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)
