"""Dashboard pipeline: sheet payload → weekly series → summary, growth, monthly.

Responsibilities:
- Pick the sheet to show (requested, configured default, or first)
- Run the metrics engine with the configured header matchers and date rules
- Return a :class:`DashboardView`, or print it from the CLI

The caller owns refresh timing (``dashboard.refresh_interval_seconds``) and
may re-run :func:`build_dashboard` on every fetched snapshot.
"""
from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd
from pydantic import ValidationError

from .common.config_validator import DashboardConfig, load_dashboard_config
from .core.rollups import monthly_rollup, weekly_growth
from .core.series_builder import parse_sheet_data
from .core.summary import calculate_summary_stats
from .formatters import format_count, format_percent, format_summary
from .ingestion_utils import SheetFetchError, SheetSnapshot, active_sheet_name, read_snapshot, select_sheet, sheet_overview
from .logging_utils import ROOT_LOGGER, get_logger, log_error, log_system_event, log_warning
from .models import DashboardView

LOGGER_NAME = f"{ROOT_LOGGER}.pipeline"


def build_dashboard(
    snapshot: SheetSnapshot,
    sheet: Optional[str] = None,
    config: Optional[DashboardConfig] = None,
    today: Optional[date] = None,
) -> DashboardView:
    """Build everything the dashboard renders for one sheet of ``snapshot``."""

    config = config or DashboardConfig()
    logger = logging.getLogger(LOGGER_NAME)
    today = today or date.today()

    requested = sheet or config.dashboard.default_sheet
    name = active_sheet_name(snapshot, requested)
    if requested and name != requested:
        log_warning(logger, f"Sheet '{requested}' not found; showing '{name}'")
    table = select_sheet(snapshot, name)

    series = parse_sheet_data(
        table,
        matchers=config.headers,
        today=today,
        pivot=config.dates.two_digit_year_pivot,
        rollback_months=config.dates.year_rollback_months,
        formats=config.dates.date_formats,
    )
    logger.info("Sheet '%s': %d row(s) in, %d week(s) parsed", name, max(len(table) - 1, 0), len(series))

    return DashboardView(
        sheet=name,
        series=series,
        summary=calculate_summary_stats(series, window=config.dashboard.trend_window),
        weekly_growth=weekly_growth(series),
        monthly=monthly_rollup(
            series,
            today,
            pivot=config.dates.two_digit_year_pivot,
            rollback_months=config.dates.year_rollback_months,
            formats=config.dates.date_formats,
        ),
        overview=sheet_overview(snapshot),
        last_updated=snapshot.last_updated,
    )


def view_to_dict(view: DashboardView) -> Dict[str, Any]:
    return asdict(view)


def render_text(view: DashboardView) -> str:
    lines: List[str] = [f"Newsletter Dashboard: {view.sheet or 'no sheet'}"]
    if view.last_updated:
        lines.append(f"Last updated: {view.last_updated}")
    for title, value in format_summary(view.summary).items():
        lines.append(f"{title}: {value}")
    if view.series:
        lines.append("")
        lines.append("Week | Open Rate | Click Rate | Subscribers")
        for m in view.series:
            lines.append(f"{m.week} | {format_percent(m.open_rate)} | {format_percent(m.click_rate)} | {format_count(m.subscribers)}")
    return "\n".join(lines)


def build_arg_parser() -> argparse.ArgumentParser:
    """Create a CLI argument parser for the dashboard summary."""

    parser = argparse.ArgumentParser(description="Newsletter dashboard metrics summary")
    parser.add_argument("input", help="CSV export or JSON sheet payload")
    parser.add_argument("--sheet", default=None, help="Sheet to summarize (defaults to the first)")
    parser.add_argument("--config", default=None, help="Path to a YAML configuration file")
    parser.add_argument("--json", action="store_true", help="Print the full view as JSON")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point."""

    parser = build_arg_parser()
    args = parser.parse_args(argv)

    try:
        config = load_dashboard_config(args.config)
    except (OSError, ValidationError) as exc:
        log_error(logging.getLogger(ROOT_LOGGER), f"Invalid configuration {args.config}: {exc}")
        return 1

    logger = get_logger(ROOT_LOGGER, config)
    log_system_event(logger, f"Summarizing {args.input}")
    try:
        snapshot = read_snapshot(args.input)
        view = build_dashboard(snapshot, sheet=args.sheet, config=config)
    except (FileNotFoundError, SheetFetchError, ValidationError, pd.errors.ParserError, ValueError) as exc:
        log_error(logger, str(exc))
        return 1

    if args.json:
        print(json.dumps(view_to_dict(view), indent=2, ensure_ascii=False))
    else:
        print(render_text(view))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
