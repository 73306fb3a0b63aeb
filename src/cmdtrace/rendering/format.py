"""Display formatting helpers for usage figures."""

from __future__ import annotations

import re

_DATE_SUFFIX = re.compile(r"-\d{8}$")


def format_tokens(count: int) -> str:
    """Format a token count with K/M suffixes for readability."""
    if count < 1000:
        return str(count)
    if count < 1_000_000:
        return f"{count / 1000:.1f}K"
    return f"{count / 1_000_000:.1f}M"


def format_cost(amount: float) -> str:
    """Format a dollar amount."""
    if 0 < amount < 0.01:
        return f"${amount:.4f}"
    return f"${amount:.2f}"


def format_day_label(date: str) -> str:
    """``2025-12-13`` -> ``12/13``."""
    parts = date.split("-")
    if len(parts) >= 3:
        return f"{parts[1]}/{parts[2]}"
    return date


def format_month_label(month: str) -> str:
    """``2025-12`` -> ``25/12``."""
    parts = month.split("-")
    if len(parts) >= 2:
        return f"{parts[0][-2:]}/{parts[1]}"
    return month


def format_block_time(timestamp: str) -> str:
    """``2025-12-13T10:00:00`` -> ``12/13 10:00``."""
    date_part, sep, time_part = timestamp.partition("T")
    if not sep:
        return timestamp
    date_bits = date_part.split("-")
    time_bits = time_part.split(":")
    if len(date_bits) >= 3 and len(time_bits) >= 2:
        return f"{date_bits[1]}/{date_bits[2]} {time_bits[0]}:{time_bits[1]}"
    return timestamp


def short_model_name(model: str) -> str:
    """Drop the ``claude-`` prefix and a trailing release date."""
    name = model.removeprefix("claude-")
    return _DATE_SUFFIX.sub("", name)


def fill_ratio(cost: float, max_cost: float) -> float:
    """Bar fill fraction for ``cost`` against the largest value shown."""
    if max_cost <= 0:
        return 0.0
    return min(1.0, max(0.0, cost / max_cost))


def cost_bar(cost: float, max_cost: float, width: int = 20) -> str:
    """Text bar of ``width`` cells filled in proportion to ``cost``."""
    filled = round(fill_ratio(cost, max_cost) * width)
    return "█" * filled + "·" * (width - filled)
