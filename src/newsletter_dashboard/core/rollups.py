"""Derived chart series: week-over-week growth and calendar-month rollups."""
from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence

from ..models import MonthlyMetric, WeeklyGrowth, WeeklyMetric
from .date_resolver import TWO_DIGIT_YEAR_PIVOT, YEAR_ROLLBACK_MONTHS
from .series_builder import series_to_frame


def weekly_growth(data: Sequence[WeeklyMetric]) -> List[WeeklyGrowth]:
    """Subscriber change versus the previous week, starting from the second week."""
    out: List[WeeklyGrowth] = []
    for prev, item in zip(data, data[1:]):
        growth = item.subscribers - prev.subscribers
        out.append(WeeklyGrowth(week=item.week, growth=growth, is_positive=growth >= 0))
    return out


def monthly_rollup(
    data: Sequence[WeeklyMetric],
    today: Optional[date] = None,
    pivot: int = TWO_DIGIT_YEAR_PIVOT,
    rollback_months: int = YEAR_ROLLBACK_MONTHS,
    formats: Optional[Sequence[str]] = None,
) -> List[MonthlyMetric]:
    """Average rates and subscriber movement per resolved calendar month.

    Months are ordered chronologically. Subscriber growth inside a month is the
    last week's count minus the first week's count, so a single-week month
    reports 0. Pass the same date settings used to sort the series so weeks
    land in the month they were ordered by.
    """

    if not data:
        return []
    df = series_to_frame(data, today, pivot, rollback_months, formats)
    # keep series order inside each month; groupby(sort=True) orders months
    df["month"] = df["week_date"].dt.strftime("%Y-%m")
    grouped = df.groupby("month", sort=True).agg(
        avg_open_rate=("open_rate", "mean"),
        avg_click_rate=("click_rate", "mean"),
        first_subscribers=("subscribers", "first"),
        last_subscribers=("subscribers", "last"),
        weeks=("week", "size"),
    )
    return [
        MonthlyMetric(
            month=str(month),
            avg_open_rate=float(row.avg_open_rate),
            avg_click_rate=float(row.avg_click_rate),
            subscriber_growth=int(row.last_subscribers - row.first_subscribers),
            weeks=int(row.weeks),
        )
        for month, row in grouped.iterrows()
    ]
