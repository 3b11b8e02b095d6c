"""Date parsing and range helpers."""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Optional, Tuple

import typer

from runlog.core.constants import DATE_FORMAT, MONTH_FORMAT

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_MONTH_RE = re.compile(r"^\d{4}-\d{2}$")


def parse_date(value: str) -> date:
    """Parse a zero-padded YYYY-MM-DD date string, rejecting other widths."""
    if not _DATE_RE.match(value):
        raise ValueError(f"Invalid date '{value}'. Expected format: YYYY-MM-DD")
    return datetime.strptime(value, DATE_FORMAT).date()


def parse_month(value: str) -> Tuple[str, str]:
    """Parse YYYY-MM into zero-padded (year, month) strings."""
    raw = value.strip()
    if not _MONTH_RE.match(raw):
        raise ValueError(f"Invalid month '{value}'. Expected format: YYYY-MM")
    parsed = datetime.strptime(raw, MONTH_FORMAT)
    return f"{parsed.year:04d}", f"{parsed.month:02d}"


def validate_date(value: Optional[str]) -> Optional[str]:
    """Typer callback that validates YYYY-MM-DD format for date options."""
    if value is None:
        return value
    try:
        parse_date(value)
    except ValueError:
        raise typer.BadParameter(
            f"Invalid date '{value}'. Expected format: YYYY-MM-DD (e.g. 2024-05-01)"
        )
    return value


def validate_month(value: Optional[str]) -> Optional[str]:
    """Typer callback that validates YYYY-MM format for month options."""
    if value is None:
        return value
    try:
        parse_month(value)
    except ValueError:
        raise typer.BadParameter(
            f"Invalid month '{value}'. Expected format: YYYY-MM (e.g. 2024-01)"
        )
    return value.strip()


def today_str(today: Optional[date] = None) -> str:
    """Wall-clock date as YYYY-MM-DD."""
    return (today or date.today()).strftime(DATE_FORMAT)


def resolve_week_range(
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    this_week: bool = False,
    last_week: bool = False,
    today: Optional[date] = None,
) -> Tuple[date, date]:
    """Resolve report flags into a concrete inclusive start/end pair."""
    now = today or date.today()

    if start_date or end_date:
        if not (start_date and end_date):
            raise ValueError("Provide both --start-date and --end-date")
        start, end = parse_date(start_date), parse_date(end_date)
        if end < start:
            raise ValueError("End date is earlier than start date")
        return start, end

    this_week_start = now - timedelta(days=now.weekday())
    if last_week:
        start = this_week_start - timedelta(days=7)
        return start, start + timedelta(days=6)

    # Default and --this-week: Monday..Sunday containing today.
    return this_week_start, this_week_start + timedelta(days=6)


def resolve_month(
    month: Optional[str] = None,
    this_month: bool = False,
    today: Optional[date] = None,
) -> Tuple[str, str]:
    """Resolve report flags into zero-padded (year, month)."""
    if month and this_month:
        raise ValueError("Use either --month or --this-month, not both")
    if month:
        return parse_month(month)
    now = today or date.today()
    return f"{now.year:04d}", f"{now.month:02d}"
