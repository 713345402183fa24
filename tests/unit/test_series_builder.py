"""Unit tests for turning raw sheet rows into an ordered weekly series."""
from datetime import date

import pandas as pd

from newsletter_dashboard.core.date_resolver import parse_week_date
from newsletter_dashboard.core.series_builder import SERIES_COLUMNS, parse_sheet_data, series_to_frame
from newsletter_dashboard.models import WeeklyMetric

HEADERS = ["Week", "Open Rate", "Click Rate", "Subscribers"]
TODAY = date(2024, 6, 1)


def test_end_to_end_rows():
    table = [HEADERS, ["1/1/24", "45%", "5%", "1,000"], ["1/8/24", "50%", "6%", "1,050"]]
    assert parse_sheet_data(table) == [
        WeeklyMetric(week="1/1/24", open_rate=45, click_rate=5, subscribers=1000),
        WeeklyMetric(week="1/8/24", open_rate=50, click_rate=6, subscribers=1050),
    ]


def test_too_short_tables_are_empty():
    assert parse_sheet_data([]) == []
    assert parse_sheet_data(None) == []
    assert parse_sheet_data([HEADERS]) == []


def test_rows_are_sorted_by_date_not_source_order():
    table = [
        HEADERS,
        ["3/4/24", "40%", "4%", "1,200"],
        ["1/1/24", "45%", "5%", "1,000"],
        ["12/25/23", "30%", "3%", "900"],
    ]
    weeks = [m.week for m in parse_sheet_data(table)]
    assert weeks == ["12/25/23", "1/1/24", "3/4/24"]


def test_equal_dates_keep_source_order():
    table = [HEADERS, ["01/08/2024", "10%", "1%", "1"], ["1/8/24", "20%", "2%", "2"], ["1/1/24", "30%", "3%", "3"]]
    series = parse_sheet_data(table)
    assert [m.week for m in series] == ["1/1/24", "01/08/2024", "1/8/24"]


def test_duplicate_week_labels_are_not_merged():
    table = [HEADERS, ["1/1/24", "45%", "5%", "1,000"], ["1/1/24", "46%", "5%", "1,001"]]
    series = parse_sheet_data(table)
    assert len(series) == 2
    assert [m.subscribers for m in series] == [1000, 1001]


def test_rows_without_week_are_dropped():
    table = [HEADERS, ["", "45%", "5%", "1,000"], ["1/8/24", "50%", "6%", "1,050"], [None, "1%", "1%", "1"]]
    assert [m.week for m in parse_sheet_data(table)] == ["1/8/24"]


def test_whitespace_week_is_kept_and_sorts_first():
    table = [HEADERS, ["1/8/24", "50%", "6%", "1,050"], ["  ", "1%", "1%", "1"]]
    assert [m.week for m in parse_sheet_data(table)] == ["  ", "1/8/24"]


def test_missing_columns_default_to_zero():
    table = [["Week", "Open Rate"], ["1/1/24", "45%"]]
    assert parse_sheet_data(table) == [WeeklyMetric(week="1/1/24", open_rate=45, click_rate=0, subscribers=0)]


def test_no_week_column_yields_empty_series():
    table = [["Date", "Open Rate"], ["1/1/24", "45%"]]
    assert parse_sheet_data(table) == []


def test_ragged_rows_are_padded_with_blanks():
    table = [HEADERS, ["1/1/24", "45%"], ["1/8/24"]]
    series = parse_sheet_data(table)
    assert series[0] == WeeklyMetric(week="1/1/24", open_rate=45, click_rate=0, subscribers=0)
    assert series[1].open_rate == 0


def test_unparseable_week_sorts_first():
    table = [HEADERS, ["1/1/24", "45%", "5%", "1,000"], ["TBD", "1%", "1%", "1"]]
    assert [m.week for m in parse_sheet_data(table)] == ["TBD", "1/1/24"]


def test_week_label_kept_verbatim():
    table = [HEADERS, [" 1/1/24 ", "45%", "5%", "1,000"]]
    assert parse_sheet_data(table)[0].week == " 1/1/24 "


def test_year_inference_uses_today():
    table = [HEADERS, ["1/5", "1%", "1%", "1"], ["12/29", "2%", "2%", "2"]]
    series = parse_sheet_data(table, today=date(2025, 1, 10))
    assert [m.week for m in series] == ["12/29", "1/5"]


def test_custom_matchers():
    table = [["Date", "Opens", "Clicks", "Recipients"], ["1/1/24", "45%", "5%", "1,000"]]
    series = parse_sheet_data(table, matchers={"week": ["date"], "subscribers": ["recipient"]})
    assert series == [WeeklyMetric(week="1/1/24", open_rate=45, click_rate=5, subscribers=1000)]


def test_sort_invariant_holds_for_mixed_labels():
    table = [
        HEADERS,
        ["5/6/24", "1%", "1%", "1"],
        ["2024-02-05", "1%", "1%", "1"],
        ["nonsense", "1%", "1%", "1"],
        ["3/11", "1%", "1%", "1"],
        ["Jan 1, 2024", "1%", "1%", "1"],
    ]
    series = parse_sheet_data(table, today=TODAY)
    dates = [parse_week_date(m.week, TODAY) for m in series]
    assert all(a <= b for a, b in zip(dates, dates[1:]))


def test_series_to_frame():
    series = [
        WeeklyMetric(week="1/1/24", open_rate=45.0, click_rate=5.0, subscribers=1000),
        WeeklyMetric(week="1/8/24", open_rate=50.0, click_rate=6.0, subscribers=1050),
    ]
    df = series_to_frame(series)
    assert list(df.columns) == SERIES_COLUMNS
    assert df["week_date"].tolist() == [pd.Timestamp("2024-01-01"), pd.Timestamp("2024-01-08")]
    assert df["subscribers"].tolist() == [1000, 1050]


def test_series_to_frame_empty():
    df = series_to_frame([])
    assert df.empty
    assert list(df.columns) == SERIES_COLUMNS


def test_series_to_frame_uses_date_settings():
    series = [WeeklyMetric(week="1/1/40", open_rate=1.0, click_rate=1.0, subscribers=1)]
    assert series_to_frame(series)["week_date"].tolist() == [pd.Timestamp("2040-01-01")]
    assert series_to_frame(series, pivot=30)["week_date"].tolist() == [pd.Timestamp("1940-01-01")]
