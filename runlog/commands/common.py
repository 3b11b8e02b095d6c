"""Shared command helpers."""

from __future__ import annotations

import json
from typing import Any, Dict, NoReturn

import typer

from runlog.core.models import WorkoutEntry
from runlog.core.persistence import PersistenceError
from runlog.core.state import CLIState
from runlog.core.store import WorkoutStore
from runlog.core.users import UserDirectory, UserNotFoundError

GROUP_ENV = "RUNLOG_GROUP_ID"
USER_ENV = "RUNLOG_USER_ID"


def group_option() -> Any:
    return typer.Option(..., "--group", "-g", envvar=GROUP_ENV, help="Group id")


def user_option() -> Any:
    return typer.Option(..., "--user", "-u", envvar=USER_ENV, help="User id")


def get_state(ctx: typer.Context) -> CLIState:
    """Extract validated CLI state from Typer context."""
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=2)
    return state


def print_json_payload(state: CLIState, payload: Any) -> None:
    """Print JSON payload with plain-mode fallback for piping."""
    if state.plain_output:
        typer.echo(json.dumps(payload, separators=(",", ":")))
        return
    state.console.print_json(data=payload)


def fail(state: CLIState, message: str, code: int = 1) -> NoReturn:
    """Report an error in the active output mode and exit."""
    if state.json_output:
        print_json_payload(state, {"status": "error", "message": message})
    elif state.plain_output:
        typer.echo("status\terror")
        typer.echo(f"message\t{message}")
    else:
        state.console.print(message)
    raise typer.Exit(code=code)


def open_store(state: CLIState) -> WorkoutStore:
    """Load the workout store from the configured data directory."""
    try:
        return WorkoutStore(state.workouts_path)
    except PersistenceError as exc:
        fail(state, f"Error loading workout data: {exc}")


def open_directory(state: CLIState) -> UserDirectory:
    """Load the user directory from the configured data directory."""
    try:
        return UserDirectory(state.users_path)
    except PersistenceError as exc:
        fail(state, f"Error loading user data: {exc}")


def require_authorized(state: CLIState, directory: UserDirectory, user_id: int) -> None:
    """Exit unless the user has registered."""
    if not directory.is_authorized(user_id):
        fail(state, "You are not authorized to use runlog, use `runlog register` first.")


def display_name(directory: UserDirectory, user_id: int) -> str:
    """Resolve a display name, falling back to the numeric id."""
    try:
        return directory.resolve(user_id)
    except UserNotFoundError:
        return str(user_id)


def entries_payload(entries: Dict[str, WorkoutEntry]) -> Dict[str, Dict[str, str]]:
    """Date-sorted JSON-friendly view of one user's entries."""
    return {day: entries[day].to_dict() for day in sorted(entries)}
