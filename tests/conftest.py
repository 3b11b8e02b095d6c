from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest
from typer.testing import CliRunner

from runlog.core.store import WorkoutStore
from runlog.core.users import UserDirectory

APPLE_WORKOUT_TEXT = """Outdoor Run
Workout Time 0:28:36
Distance 5.20km
Active Kilocalories 320KCAL
Total Kilocalories 380KCAL
Avg. Pace 5'30"/km
"""

RUNKEEPER_TEXT = """Running
5.01
km
Distance
6:12
min/km
Avg. pace
31:05
time
Calories
412
"""


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def apple_text() -> str:
    return APPLE_WORKOUT_TEXT


@pytest.fixture()
def runkeeper_text() -> str:
    return RUNKEEPER_TEXT


@pytest.fixture()
def fixed_today() -> date:
    return date(2024, 5, 7)


@pytest.fixture()
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.delenv("RUNLOG_DATA_DIR", raising=False)
    monkeypatch.delenv("RUNLOG_GROUP_ID", raising=False)
    monkeypatch.delenv("RUNLOG_USER_ID", raising=False)
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture()
def store(data_dir: Path) -> WorkoutStore:
    return WorkoutStore(data_dir / "workouts.json")


@pytest.fixture()
def directory(data_dir: Path) -> UserDirectory:
    return UserDirectory(data_dir / "users.json")


@pytest.fixture()
def cli_config(tmp_path: Path, data_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("RUNLOG_TEST_SECRET", "open-sesame")
    path = tmp_path / "config.toml"
    path.write_text(
        f"""
[storage]
data_dir = "{data_dir.as_posix()}"

[auth]
secret_env = "RUNLOG_TEST_SECRET"

[logging]
level = "CRITICAL"
""".strip()
        + "\n"
    )
    return path


@pytest.fixture()
def write_text_file(tmp_path: Path):
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content)
        return path

    return _write
