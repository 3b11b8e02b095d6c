"""User registration commands."""

from __future__ import annotations

import typer

from runlog.commands.common import (
    fail,
    get_state,
    open_directory,
    print_json_payload,
    user_option,
)
from runlog.core.auth import check_secret
from runlog.core.config import resolve_secret
from runlog.core.persistence import PersistenceError
from runlog.core.users import UserExistsError


def register_command(
    ctx: typer.Context,
    user_id: int = user_option(),
    name: str = typer.Option(..., "--name", help="Display name used in reports"),
    password: str = typer.Option(
        ...,
        "--password",
        prompt="What is the secret password?",
        hide_input=True,
        help="Shared registration secret",
    ),
) -> None:
    """Register a user id with a display name."""
    state = get_state(ctx)
    directory = open_directory(state)

    if not check_secret(password, resolve_secret(state.config)):
        fail(state, "Invalid password.")

    try:
        directory.register(user_id, name)
    except UserExistsError:
        fail(state, f"User {user_id} is already registered.")
    except ValueError as exc:
        fail(state, str(exc), code=2)
    except PersistenceError as exc:
        fail(state, f"Error saving user data: {exc}")

    payload = {"status": "registered", "userId": user_id, "name": name.strip()}
    if state.json_output:
        print_json_payload(state, payload)
        return

    if state.plain_output:
        typer.echo("status\tregistered")
        typer.echo(f"user_id\t{user_id}")
        typer.echo(f"name\t{payload['name']}")
        return

    state.console.print(f"Welcome {payload['name']}! You can now log workouts.")


def users_command(ctx: typer.Context) -> None:
    """List registered users."""
    state = get_state(ctx)
    users = open_directory(state).list_users()

    if state.json_output:
        print_json_payload(
            state,
            {"users": [{"userId": uid, "name": users[uid]} for uid in sorted(users)]},
        )
        return

    if state.plain_output:
        typer.echo("user_id\tname")
        for uid in sorted(users):
            typer.echo(f"{uid}\t{users[uid]}")
        return

    if not users:
        state.console.print("No registered users.")
        return
    for uid in sorted(users):
        state.console.print(f"{users[uid]} ({uid})")
