"""
Metrics engine for the newsletter dashboard.

Turns loosely formatted spreadsheet rows into an ordered weekly series and
derives summary, growth and monthly statistics from it. Everything here is
pure: no I/O, no caches.
"""

from .field_detector import FIELD_MATCHERS, detect_fields
from .value_normalizer import parse_number, parse_percent
from .date_resolver import EPOCH, parse_week_date
from .series_builder import parse_sheet_data, series_to_frame
from .summary import calculate_summary_stats
from .rollups import monthly_rollup, weekly_growth

__all__ = [
    "EPOCH",
    "FIELD_MATCHERS",
    "calculate_summary_stats",
    "detect_fields",
    "monthly_rollup",
    "parse_number",
    "parse_percent",
    "parse_sheet_data",
    "parse_week_date",
    "series_to_frame",
    "weekly_growth",
]
