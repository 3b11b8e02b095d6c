"""Entry point for runlog."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from runlog import __version__
from runlog.commands import report as report_commands
from runlog.commands.history import delete_command, history_command
from runlog.commands.ingest import ingest_command
from runlog.commands.users import register_command, users_command
from runlog.core.config import ConfigError, default_config_path, load_config
from runlog.core.log import configure_logging
from runlog.core.state import CLIState

app = typer.Typer(
    add_completion=False,
    help="Log running workouts from app screenshots and report group distance totals",
    invoke_without_command=True,
)


def _build_state(
    config_path: Path,
    json_output: bool,
    plain_output: bool,
    verbose: bool,
    quiet: bool,
) -> CLIState:
    try:
        cfg = load_config(config_path)
    except ConfigError as exc:
        typer.echo(f"Config error: {exc}")
        raise typer.Exit(code=2)

    configure_logging(cfg, verbose=verbose, quiet=quiet)
    return CLIState(
        json_output=json_output,
        plain_output=plain_output,
        verbose=verbose,
        quiet=quiet,
        config_path=config_path,
        config=cfg,
        console=Console(quiet=quiet, no_color=plain_output, highlight=not plain_output),
    )


@app.callback()
def main_callback(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Print results as JSON"),
    plain_output: bool = typer.Option(
        False, "--plain", help="Print tab-separated text for scripts"
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", help="Config file (TOML, or JSON by suffix)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug details to stderr"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    version: bool = typer.Option(False, "--version", help="Print the runlog version"),
) -> None:
    """Load config and logging, then hand state to the subcommand."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if json_output and plain_output:
        typer.echo("Options --json and --plain are mutually exclusive.")
        raise typer.Exit(code=2)

    ctx.obj = _build_state(
        (config or default_config_path()).expanduser().resolve(),
        json_output=json_output,
        plain_output=plain_output,
        verbose=verbose,
        quiet=quiet,
    )

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


app.command("register")(register_command)
app.command("users")(users_command)
app.command("ingest")(ingest_command)
app.command("history")(history_command)
app.command("delete")(delete_command)
app.add_typer(report_commands.app, name="report")


def main() -> None:
    app(prog_name="runlog")


if __name__ == "__main__":
    main()
