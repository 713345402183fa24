"""Value types shared by the metrics engine and its callers."""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import List, Optional, Sequence

RawTable = Sequence[Sequence[str]]

NOT_FOUND = -1
NO_WEEK = "-"


@dataclass(frozen=True)
class ColumnIndices:
    """Column positions detected from a header row (``-1`` when absent)."""

    week: int = NOT_FOUND
    open_rate: int = NOT_FOUND
    click_rate: int = NOT_FOUND
    subscribers: int = NOT_FOUND

    def missing(self) -> List[str]:
        return [f.name for f in fields(self) if getattr(self, f.name) == NOT_FOUND]


@dataclass(frozen=True)
class WeeklyMetric:
    """One normalized weekly observation; ``week`` is the label as received."""

    week: str
    open_rate: float
    click_rate: float
    subscribers: int


@dataclass(frozen=True)
class SummaryStats:
    current_subscribers: int = 0
    subscriber_growth: int = 0
    subscriber_growth_percent: float = 0.0
    avg_open_rate: float = 0.0
    avg_click_rate: float = 0.0
    open_rate_trend: float = 0.0
    click_rate_trend: float = 0.0
    total_weeks: int = 0
    best_open_rate_week: str = NO_WEEK
    best_click_rate_week: str = NO_WEEK


@dataclass(frozen=True)
class WeeklyGrowth:
    week: str
    growth: int
    is_positive: bool


@dataclass(frozen=True)
class MonthlyMetric:
    month: str
    avg_open_rate: float
    avg_click_rate: float
    subscriber_growth: int
    weeks: int


@dataclass(frozen=True)
class SheetOverview:
    total_rows: int
    columns: int
    sheets: int


@dataclass
class DashboardView:
    """Container holding everything the presentation layer renders for one sheet."""

    sheet: Optional[str]
    series: List[WeeklyMetric] = field(default_factory=list)
    summary: SummaryStats = field(default_factory=SummaryStats)
    weekly_growth: List[WeeklyGrowth] = field(default_factory=list)
    monthly: List[MonthlyMetric] = field(default_factory=list)
    overview: Optional[SheetOverview] = None
    last_updated: Optional[str] = None
