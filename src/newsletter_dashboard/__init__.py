"""
Newsletter dashboard metrics engine.

Normalizes loosely formatted weekly newsletter sheets (open rate, click rate,
subscribers) into an ordered series and derives the dashboard's summary and
trend statistics.
"""

from .core import calculate_summary_stats, parse_sheet_data, parse_week_date
from .models import DashboardView, SummaryStats, WeeklyMetric
from .pipeline import build_dashboard

__version__ = "0.1.0"

__all__ = [
    "DashboardView",
    "SummaryStats",
    "WeeklyMetric",
    "build_dashboard",
    "calculate_summary_stats",
    "parse_sheet_data",
    "parse_week_date",
]
