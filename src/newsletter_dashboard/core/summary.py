"""Aggregate and trend statistics over an ordered weekly series.

Growth compares the latest week with the week ``window`` positions earlier
(clamped to the first week). Trends compare the mean of the last ``window``
weeks with the mean of the ``window`` weeks before them; with no earlier
window the trend is 0. Nothing is rounded here.
"""
from __future__ import annotations

from typing import Callable, List, Sequence, Tuple

from ..models import NO_WEEK, SummaryStats, WeeklyMetric

TREND_WINDOW = 4


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def baseline_index(n: int, window: int = TREND_WINDOW) -> int:
    return max(0, n - (window + 1))


def trailing_windows(values: Sequence[float], window: int = TREND_WINDOW) -> Tuple[List[float], List[float]]:
    """Split ``values`` into (recent, previous) trailing windows."""
    n = len(values)
    recent = list(values[max(0, n - window):])
    previous = list(values[max(0, n - 2 * window):max(0, n - window)])
    return recent, previous


def window_trend(values: Sequence[float], window: int = TREND_WINDOW) -> float:
    recent, previous = trailing_windows(values, window)
    if not recent or not previous:
        return 0.0
    return _mean(recent) - _mean(previous)


def best_week(series: Sequence[WeeklyMetric], metric: Callable[[WeeklyMetric], float]) -> str:
    """Week label of the first element reaching the maximum of ``metric``."""
    if not series:
        return NO_WEEK
    best = max(metric(m) for m in series)
    for m in series:
        if metric(m) == best:
            return m.week or NO_WEEK
    return NO_WEEK


def calculate_summary_stats(data: Sequence[WeeklyMetric], window: int = TREND_WINDOW) -> SummaryStats:
    if not data:
        return SummaryStats()

    n = len(data)
    current = data[-1].subscribers
    baseline = data[baseline_index(n, window)].subscribers
    growth = current - baseline
    growth_pct = (growth / baseline) * 100 if baseline > 0 else 0.0

    open_rates = [m.open_rate for m in data]
    click_rates = [m.click_rate for m in data]

    return SummaryStats(
        current_subscribers=current,
        subscriber_growth=growth,
        subscriber_growth_percent=growth_pct,
        avg_open_rate=_mean(open_rates),
        avg_click_rate=_mean(click_rates),
        open_rate_trend=window_trend(open_rates, window),
        click_rate_trend=window_trend(click_rates, window),
        total_weeks=n,
        best_open_rate_week=best_week(data, lambda m: m.open_rate),
        best_click_rate_week=best_week(data, lambda m: m.click_rate),
    )
