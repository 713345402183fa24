"""Week label to calendar date resolution, used only for ordering rows.

Accepted shapes:
  - ``M/D/YYYY`` and ``M/D/YY`` (two-digit years pivot at 50)
  - ``M/D`` with the year inferred from ``today``
  - anything a date parser understands (``2024-01-15``, ``Jan 15, 2024``)

Overflowing month or day values carry forward, so ``2/30/24`` is March 1st.

Unparseable labels resolve to :data:`EPOCH` so they sort first instead of
failing the batch. Year inference for ``M/D`` is a heuristic: a month more
than ``rollback_months`` ahead of today is assumed to belong to last year.
"""
from __future__ import annotations

import logging
import re
import warnings
from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence

import pandas as pd

logger = logging.getLogger(__name__)

EPOCH = date(1970, 1, 1)
TWO_DIGIT_YEAR_PIVOT = 50
YEAR_ROLLBACK_MONTHS = 2

# Tried in order before falling back to pandas' parser.
DATE_FORMATS: List[str] = [
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%b %d, %Y",
    "%B %d, %Y",
    "%d %b %Y",
]

_INT_RX = re.compile(r"^\s*([+-]?\d+)")


def _leading_int(text: str) -> Optional[int]:
    m = _INT_RX.match(text)
    return int(m.group(1)) if m else None


def expand_year(year: int, pivot: int = TWO_DIGIT_YEAR_PIVOT) -> int:
    if year < 100:
        return year + (2000 if year < pivot else 1900)
    return year


def infer_year(month: int, today: date, rollback_months: int = YEAR_ROLLBACK_MONTHS) -> int:
    """Year for a label that carries only month and day (1-based ``month``)."""
    if month > today.month + rollback_months:
        return today.year - 1
    return today.year


def _build_date(year: int, month: int, day: int) -> Optional[date]:
    """Calendar date with overflowing month and day carried forward (2/30 -> 3/1)."""
    try:
        carry_year, month_index = divmod(year * 12 + month - 1, 12)
        return date(carry_year, month_index + 1, 1) + timedelta(days=day - 1)
    except (ValueError, OverflowError):
        return None


def parse_free_date(text: str, formats: Optional[Sequence[str]] = None) -> Optional[date]:
    """Parse a label with no ``/`` structure; ``None`` when nothing understands it."""
    s = str(text).strip()
    if not s:
        return None
    for fmt in formats or DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    with warnings.catch_warnings():
        # pandas warns when it has to guess a format per element
        warnings.simplefilter("ignore")
        parsed = pd.to_datetime(s, errors="coerce")
    if parsed is None or pd.isna(parsed):
        return None
    return parsed.date()


def parse_week_date(
    week: str,
    today: Optional[date] = None,
    pivot: int = TWO_DIGIT_YEAR_PIVOT,
    rollback_months: int = YEAR_ROLLBACK_MONTHS,
    formats: Optional[Sequence[str]] = None,
) -> date:
    label = "" if week is None else str(week)
    parts = label.split("/")

    if len(parts) >= 2:
        month = _leading_int(parts[0])
        day = _leading_int(parts[1])
        if month is None or day is None:
            logger.debug("Week label %r has no numeric month/day; using epoch", label)
            return EPOCH
        if len(parts) >= 3:
            year = _leading_int(parts[2])
            if year is None:
                logger.debug("Week label %r has no numeric year; using epoch", label)
                return EPOCH
            year = expand_year(year, pivot)
        else:
            year = infer_year(month, today or date.today(), rollback_months)
        resolved = _build_date(year, month, day)
    else:
        resolved = parse_free_date(label, formats)

    if resolved is None:
        logger.debug("Could not resolve week label %r; using epoch", label)
        return EPOCH
    return resolved
