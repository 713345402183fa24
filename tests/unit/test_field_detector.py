"""Unit tests for header-to-column detection."""
from newsletter_dashboard.core.field_detector import FIELD_MATCHERS, detect_fields, find_column
from newsletter_dashboard.models import NOT_FOUND, ColumnIndices


def test_detects_standard_headers():
    cols = detect_fields(["Week", "Open Rate", "Click Rate", "Subscribers"])
    assert cols == ColumnIndices(week=0, open_rate=1, click_rate=2, subscribers=3)
    assert cols.missing() == []


def test_case_and_whitespace_insensitive():
    cols = detect_fields(["  CLICK %", "open rate ", "WEEK OF", "Total Subs"])
    assert cols == ColumnIndices(week=2, open_rate=1, click_rate=0, subscribers=3)


def test_subscriber_aliases():
    assert detect_fields(["Week", "Audience Size"]).subscribers == 1
    assert detect_fields(["Week", "List size"]).subscribers == 1
    assert detect_fields(["Week", "Subscribed"]).subscribers == 1


def test_first_matching_column_wins():
    cols = detect_fields(["Week", "Opens", "Open Rate", "Unique Opens"])
    assert cols.open_rate == 1


def test_missing_columns_report_not_found():
    cols = detect_fields(["Date", "Open Rate"])
    assert cols.week == NOT_FOUND
    assert cols.click_rate == NOT_FOUND
    assert cols.subscribers == NOT_FOUND
    assert cols.missing() == ["week", "click_rate", "subscribers"]


def test_none_headers_are_tolerated():
    cols = detect_fields([None, "Week"])
    assert cols.week == 1


def test_matcher_override_keeps_other_defaults():
    cols = detect_fields(["Date", "Open Rate", "Recipients"], {"week": ["date"], "subscribers": ["recipient"]})
    assert cols == ColumnIndices(week=0, open_rate=1, click_rate=NOT_FOUND, subscribers=2)
    # defaults untouched
    assert FIELD_MATCHERS["week"] == ["week"]


def test_find_column_lowercases_needles():
    assert find_column(["week", "open rate"], ["OPEN"]) == 1
    assert find_column([], ["open"]) == NOT_FOUND
