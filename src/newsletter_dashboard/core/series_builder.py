"""Assemble a sheet's rows into a chronologically ordered weekly series."""
from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List, Mapping, Optional, Sequence

import pandas as pd

from ..models import NOT_FOUND, RawTable, WeeklyMetric
from .date_resolver import TWO_DIGIT_YEAR_PIVOT, YEAR_ROLLBACK_MONTHS, parse_week_date
from .field_detector import detect_fields
from .value_normalizer import parse_number, parse_percent

logger = logging.getLogger(__name__)

SERIES_COLUMNS = ["week", "open_rate", "click_rate", "subscribers", "week_date"]


def _cell(row: Sequence[object], idx: int) -> str:
    if idx == NOT_FOUND or idx >= len(row):
        return ""
    value = row[idx]
    return "" if value is None else str(value)


def parse_sheet_data(
    raw_data: Optional[RawTable],
    matchers: Optional[Mapping[str, Iterable[str]]] = None,
    today: Optional[date] = None,
    pivot: int = TWO_DIGIT_YEAR_PIVOT,
    rollback_months: int = YEAR_ROLLBACK_MONTHS,
    formats: Optional[Sequence[str]] = None,
) -> List[WeeklyMetric]:
    """Return one :class:`WeeklyMetric` per data row, sorted by resolved week date.

    Rows with an empty week cell are dropped. Rows resolving to the same date keep
    their source order (``sorted`` is stable). Missing columns yield zeros.
    """

    if not raw_data or len(raw_data) < 2:
        return []

    columns = detect_fields(raw_data[0], matchers)
    rows: List[WeeklyMetric] = []
    dropped = 0
    for row in raw_data[1:]:
        week = _cell(row, columns.week)
        if not week:
            dropped += 1
            continue
        rows.append(
            WeeklyMetric(
                week=week,
                open_rate=parse_percent(_cell(row, columns.open_rate)),
                click_rate=parse_percent(_cell(row, columns.click_rate)),
                subscribers=parse_number(_cell(row, columns.subscribers)),
            )
        )
    if dropped:
        logger.debug("Dropped %d row(s) with an empty week cell", dropped)

    today = today or date.today()
    return sorted(rows, key=lambda m: parse_week_date(m.week, today, pivot, rollback_months, formats))


def series_to_frame(
    series: Sequence[WeeklyMetric],
    today: Optional[date] = None,
    pivot: int = TWO_DIGIT_YEAR_PIVOT,
    rollback_months: int = YEAR_ROLLBACK_MONTHS,
    formats: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    """Tabulate a series with its resolved ``week_date`` for pandas aggregations."""
    today = today or date.today()
    records = [
        {
            "week": m.week,
            "open_rate": float(m.open_rate),
            "click_rate": float(m.click_rate),
            "subscribers": int(m.subscribers),
            "week_date": pd.Timestamp(parse_week_date(m.week, today, pivot, rollback_months, formats)),
        }
        for m in series
    ]
    return pd.DataFrame.from_records(records, columns=SERIES_COLUMNS)
