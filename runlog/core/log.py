"""Logging setup for the CLI process."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from rich.console import Console
from rich.logging import RichHandler

_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def resolve_level(config: Dict[str, Any], verbose: bool = False, quiet: bool = False) -> int:
    """Pick the root log level: CLI flags beat config."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    raw = str(config.get("logging", {}).get("level") or "WARNING").upper()
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(
    config: Dict[str, Any],
    verbose: bool = False,
    quiet: bool = False,
    console: Optional[Console] = None,
) -> logging.Logger:
    """Install a rich stderr handler and an optional file handler on the package logger."""
    logger = logging.getLogger("runlog")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    level = resolve_level(config, verbose=verbose, quiet=quiet)
    logger.setLevel(level)
    logger.propagate = False

    rich_handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    rich_handler.setLevel(level)
    logger.addHandler(rich_handler)

    log_file = str(config.get("logging", {}).get("file") or "")
    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        file_handler.setLevel(logging.DEBUG)
        logger.addHandler(file_handler)
        # The file keeps full detail regardless of console verbosity.
        logger.setLevel(logging.DEBUG)

    return logger
