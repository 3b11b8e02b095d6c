"""Distance report commands."""

from __future__ import annotations

from typing import Callable, Dict, Optional

import typer

from runlog.commands.common import (
    display_name,
    fail,
    get_state,
    group_option,
    open_directory,
    open_store,
    print_json_payload,
    require_authorized,
    user_option,
)
from runlog.core.constants import MONTH_ABBREVIATIONS
from runlog.core.state import CLIState
from runlog.core.store import AggregationError, NotFoundError, WorkoutStore
from runlog.utils.date_ranges import (
    resolve_month,
    resolve_week_range,
    validate_date,
    validate_month,
)

app = typer.Typer(help="Total distance reports")


def _print_totals(
    state: CLIState,
    title: str,
    period: Dict[str, str],
    totals: Dict[int, str],
) -> None:
    directory = open_directory(state)
    rows = [(uid, display_name(directory, uid), totals[uid]) for uid in sorted(totals)]

    if state.json_output:
        print_json_payload(
            state,
            {
                "period": period,
                "totals": [
                    {"userId": uid, "name": name, "distance": distance}
                    for uid, name, distance in rows
                ],
            },
        )
        return

    if state.plain_output:
        typer.echo("user\tdistance_km")
        for _, name, distance in rows:
            typer.echo(f"{name}\t{distance}")
        return

    state.console.print(title)
    for _, name, distance in rows:
        state.console.print(f"User: {name}, Total Distance: {distance}KM")


def _open_authorized(state: CLIState, user_id: int) -> WorkoutStore:
    require_authorized(state, open_directory(state), user_id)
    return open_store(state)


def _aggregate_or_fail(
    state: CLIState,
    store: WorkoutStore,
    run: Callable[[WorkoutStore], Dict[int, str]],
) -> Dict[int, str]:
    try:
        return run(store)
    except NotFoundError:
        fail(state, "No workout history exists, please submit images to begin!")
    except AggregationError as exc:
        fail(state, f"Error getting total distance for user: {exc}")


@app.command("week")
def week_command(
    ctx: typer.Context,
    group_id: int = group_option(),
    user_id: int = user_option(),
    start_date: Optional[str] = typer.Option(None, help="Start date YYYY-MM-DD", callback=validate_date),
    end_date: Optional[str] = typer.Option(None, help="End date YYYY-MM-DD", callback=validate_date),
    this_week: bool = typer.Option(False, help="Monday to Sunday of the current week (default)"),
    last_week: bool = typer.Option(False, help="Monday to Sunday of the previous week"),
) -> None:
    """Total distance per user over a date range."""
    state = get_state(ctx)
    store = _open_authorized(state, user_id)
    try:
        start, end = resolve_week_range(
            start_date=start_date,
            end_date=end_date,
            this_week=this_week,
            last_week=last_week,
        )
    except ValueError as exc:
        fail(state, str(exc), code=2)

    start_str, end_str = start.isoformat(), end.isoformat()
    totals = _aggregate_or_fail(
        state,
        store,
        lambda store: store.aggregate_by_range(group_id, start_str, end_str),
    )
    _print_totals(
        state,
        f"Total Distance for each user ({start_str} to {end_str}):",
        {"start": start_str, "end": end_str},
        totals,
    )


@app.command("month")
def month_command(
    ctx: typer.Context,
    group_id: int = group_option(),
    user_id: int = user_option(),
    month: Optional[str] = typer.Option(None, help="Month YYYY-MM", callback=validate_month),
    this_month: bool = typer.Option(False, help="Current month (default)"),
) -> None:
    """Total distance per user for a calendar month."""
    state = get_state(ctx)
    store = _open_authorized(state, user_id)
    try:
        year_str, month_str = resolve_month(month=month, this_month=this_month)
    except ValueError as exc:
        fail(state, str(exc), code=2)

    totals = _aggregate_or_fail(
        state,
        store,
        lambda store: store.aggregate_by_month(group_id, month_str, year_str),
    )
    _print_totals(
        state,
        f"Total Distance for each user in {MONTH_ABBREVIATIONS[month_str]} {year_str}:",
        {"month": month_str, "year": year_str},
        totals,
    )
