from datetime import date

import pytest
import typer

from runlog.utils.date_ranges import (
    parse_date,
    parse_month,
    resolve_month,
    resolve_week_range,
    today_str,
    validate_date,
    validate_month,
)


def test_parse_date_accepts_padded_dates() -> None:
    assert parse_date("2024-05-07") == date(2024, 5, 7)


@pytest.mark.parametrize("value", ["2024-5-7", "2024-05-7", "20240507", "2024-13-01", "2024-02-30", ""])
def test_parse_date_rejects_other_shapes(value: str) -> None:
    with pytest.raises(ValueError):
        parse_date(value)


def test_parse_month() -> None:
    assert parse_month("2024-05") == ("2024", "05")
    assert parse_month(" 2023-12 ") == ("2023", "12")
    with pytest.raises(ValueError):
        parse_month("2024-5")
    with pytest.raises(ValueError):
        parse_month("2024-13")


def test_validate_date() -> None:
    assert validate_date(None) is None
    assert validate_date("2026-01-05") == "2026-01-05"
    with pytest.raises(typer.BadParameter):
        validate_date("01-05-2026")


def test_validate_month() -> None:
    assert validate_month(None) is None
    assert validate_month("2026-01") == "2026-01"
    with pytest.raises(typer.BadParameter):
        validate_month("January")


def test_today_str(fixed_today: date) -> None:
    assert today_str(fixed_today) == "2024-05-07"


def test_resolve_week_defaults_to_current_week(fixed_today: date) -> None:
    start, end = resolve_week_range(today=fixed_today)
    assert start.isoformat() == "2024-05-06"
    assert end.isoformat() == "2024-05-12"
    assert resolve_week_range(this_week=True, today=fixed_today) == (start, end)


def test_resolve_last_week(fixed_today: date) -> None:
    start, end = resolve_week_range(last_week=True, today=fixed_today)
    assert start.isoformat() == "2024-04-29"
    assert end.isoformat() == "2024-05-05"


def test_resolve_with_explicit_start_end() -> None:
    start, end = resolve_week_range(start_date="2024-01-01", end_date="2024-01-31")
    assert start.isoformat() == "2024-01-01"
    assert end.isoformat() == "2024-01-31"


def test_resolve_requires_both_explicit_dates() -> None:
    with pytest.raises(ValueError):
        resolve_week_range(start_date="2024-01-01")


def test_resolve_rejects_end_before_start() -> None:
    with pytest.raises(ValueError):
        resolve_week_range(start_date="2024-02-01", end_date="2024-01-01")


def test_resolve_month(fixed_today: date) -> None:
    assert resolve_month(today=fixed_today) == ("2024", "05")
    assert resolve_month(month="2023-11", today=fixed_today) == ("2023", "11")
    assert resolve_month(this_month=True, today=fixed_today) == ("2024", "05")


def test_resolve_month_rejects_both_flags(fixed_today: date) -> None:
    with pytest.raises(ValueError):
        resolve_month(month="2023-11", this_month=True, today=fixed_today)
