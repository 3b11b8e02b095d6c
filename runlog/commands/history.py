"""Workout history and delete commands."""

from __future__ import annotations

from typing import Dict

import typer
from rich.table import Table

from runlog.commands.common import (
    display_name,
    entries_payload,
    fail,
    get_state,
    group_option,
    open_directory,
    open_store,
    print_json_payload,
    require_authorized,
    user_option,
)
from runlog.core.models import WorkoutEntry
from runlog.core.persistence import PersistenceError
from runlog.core.store import NotFoundError
from runlog.utils.date_ranges import validate_date


def history_command(
    ctx: typer.Context,
    group_id: int = group_option(),
    user_id: int = user_option(),
    show_all: bool = typer.Option(False, "--all", help="Show every user in the group"),
) -> None:
    """Show your logged workouts, or the whole group's with --all."""
    state = get_state(ctx)
    directory = open_directory(state)
    require_authorized(state, directory, user_id)
    store = open_store(state)

    try:
        if show_all:
            workouts: Dict[int, Dict[str, WorkoutEntry]] = store.get_all(group_id)
        else:
            workouts = {user_id: store.get(group_id, user_id)}
    except NotFoundError:
        fail(state, "No workout history exists, please submit images to begin!")

    names = {uid: display_name(directory, uid) for uid in workouts}

    if state.json_output:
        print_json_payload(
            state,
            {
                "groupId": group_id,
                "users": [
                    {
                        "userId": uid,
                        "name": names[uid],
                        "workouts": entries_payload(workouts[uid]),
                    }
                    for uid in sorted(workouts)
                ],
            },
        )
        return

    if state.plain_output:
        typer.echo("user\tdate\tdistance_km\tpace")
        for uid in sorted(workouts):
            for day, entry in sorted(workouts[uid].items()):
                typer.echo(f"{names[uid]}\t{day}\t{entry.distance}\t{entry.pace}")
        return

    total = sum(len(entries) for entries in workouts.values())
    table = Table(title=f"Workouts ({total} total)")
    table.add_column("User")
    table.add_column("Date")
    table.add_column("Distance", justify="right")
    table.add_column("Pace")
    for uid in sorted(workouts):
        for day, entry in sorted(workouts[uid].items()):
            table.add_row(names[uid], day, f"{entry.distance} km", entry.pace)
    state.console.print(table)


def delete_command(
    ctx: typer.Context,
    day: str = typer.Argument(..., help="Workout date YYYY-MM-DD", callback=validate_date),
    group_id: int = group_option(),
    user_id: int = user_option(),
    force: bool = typer.Option(False, "--force", help="Skip confirmation prompt"),
) -> None:
    """Delete your workout entry for a date."""
    state = get_state(ctx)
    require_authorized(state, open_directory(state), user_id)
    store = open_store(state)

    if not force:
        confirmed = typer.confirm(f"Delete workout on {day}?", default=False)
        if not confirmed:
            raise typer.Exit(code=0)

    try:
        deleted = store.delete(group_id, user_id, day)
    except PersistenceError as exc:
        fail(state, f"Error saving workout data: {exc}")

    payload = {"status": "deleted" if deleted else "not_found", "date": day}
    if state.json_output:
        print_json_payload(state, payload)
        return

    if state.plain_output:
        typer.echo(f"status\t{payload['status']}")
        typer.echo(f"date\t{day}")
        return

    if deleted:
        state.console.print("Workout entry deleted successfully.")
    else:
        state.console.print("No workout entry found for the provided date.")
