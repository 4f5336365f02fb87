"""CLI utilities for parsing event ranges from options."""

from datetime import date, datetime, time, timedelta

import typer

from notecal.codec.frontmatter import parse_time


def parse_time_option(value: str | None, option: str) -> time | None:
    """Parse an HH:MM option value, raising a usage error if malformed."""
    if value is None:
        return None
    parsed = parse_time(value)
    if parsed is None:
        raise typer.BadParameter(f"Expected HH:MM, got '{value}'", param_hint=option)
    return parsed


def build_range(
    on: date,
    end_date: date | None,
    start: time | None,
    end: time | None,
    all_day: bool,
) -> tuple[date | datetime, date | datetime | None, bool]:
    """
    Build a widget-style range from command line options.

    All-day ranges get an exclusive end, the way the calendar widget reports
    a selection or a drop.

    Returns:
        Tuple of (start, end, all_day)
    """
    if end_date is not None and end_date < on:
        raise typer.BadParameter("End date is before the start date", param_hint="--end-date")

    if all_day or start is None:
        last_day = end_date or on
        exclusive_end = last_day + timedelta(days=1) if last_day > on else None
        return on, exclusive_end, True

    start_dt = datetime.combine(on, start)
    end_dt = datetime.combine(end_date or on, end) if end is not None else None
    if end_dt is not None and end_dt < start_dt:
        raise typer.BadParameter("End is before start", param_hint="--end")
    return start_dt, end_dt, False
