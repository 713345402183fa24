from __future__ import annotations

from typing import Any, Dict

from .models import SummaryStats


def format_percent(x: Any, precision: int = 1) -> str:
    try:
        return f"{float(x):.{precision}f}%"
    except (TypeError, ValueError):
        return "n/a"


def format_count(x: Any) -> str:
    try:
        return f"{int(x):,}"
    except (TypeError, ValueError):
        return "n/a"


def format_growth(x: Any) -> str:
    """Signed, thousands-separated change, e.g. ``+1,050`` or ``-12``."""
    try:
        val = int(x)
    except (TypeError, ValueError):
        return "n/a"
    prefix = "+" if val >= 0 else ""
    return f"{prefix}{val:,}"


def format_trend(x: Any, precision: int = 1) -> str:
    """Arrow plus magnitude, e.g. ``↑ 1.5%``; zero counts as up."""
    try:
        val = float(x)
    except (TypeError, ValueError):
        return "n/a"
    arrow = "↑" if val >= 0 else "↓"
    return f"{arrow} {abs(val):.{precision}f}%"


def format_summary(stats: SummaryStats) -> Dict[str, str]:
    """Display strings for the summary cards."""
    return {
        "Current Subscribers": format_count(stats.current_subscribers),
        "Subscriber Growth": f"{format_growth(stats.subscriber_growth)} ({format_trend(stats.subscriber_growth_percent)})",
        "Avg Open Rate": f"{format_percent(stats.avg_open_rate)} ({format_trend(stats.open_rate_trend)})",
        "Avg Click Rate": f"{format_percent(stats.avg_click_rate)} ({format_trend(stats.click_rate_trend)})",
        "Total Weeks": str(stats.total_weeks),
        "Best Open Rate Week": stats.best_open_rate_week,
        "Best Click Rate Week": stats.best_click_rate_week,
    }
