"""Per-invocation state shared by runlog commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from rich.console import Console

from runlog.core.config import resolve_users_path, resolve_workouts_path


@dataclass
class CLIState:
    """Output mode, loaded config and console for one runlog invocation."""

    json_output: bool
    plain_output: bool
    verbose: bool
    quiet: bool
    config_path: Path
    config: Dict[str, Any]
    console: Console

    @property
    def workouts_path(self) -> Path:
        return resolve_workouts_path(self.config)

    @property
    def users_path(self) -> Path:
        return resolve_users_path(self.config)
