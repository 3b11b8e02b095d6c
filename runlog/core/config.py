"""Configuration loading."""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # Python 3.9-3.10
    import tomli as tomllib  # type: ignore[no-redef]

from runlog.core.constants import DEFAULT_SECRET_ENV


class ConfigError(RuntimeError):
    """Raised when the runlog config file cannot be read or parsed."""


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def expand_path(path_str: str) -> Path:
    """Absolute path with ~ and $VARS expanded."""
    return Path(os.path.expandvars(path_str)).expanduser().resolve()


def default_data_dir() -> Path:
    """Where workouts.json and users.json live unless configured otherwise."""
    raw = os.getenv("RUNLOG_DATA_DIR", "~/.local/share/runlog")
    return expand_path(raw)


def default_config_path() -> Path:
    """RUNLOG_CONFIG_FILE, else ~/.config/runlog/config.toml."""
    raw = os.getenv("RUNLOG_CONFIG_FILE", "~/.config/runlog/config.toml")
    return expand_path(raw)


def _default_config() -> Dict[str, Any]:
    return {
        "storage": {
            "data_dir": str(default_data_dir()),
            "workouts_file": "workouts.json",
            "users_file": "users.json",
        },
        "auth": {
            "secret_env": DEFAULT_SECRET_ENV,
        },
        "classification": {
            "rules": {},
        },
        "ocr": {
            "tesseract_cmd": "",
            "lang": "eng",
        },
        "download": {
            "timeout_seconds": 30,
            "max_retries": 3,
        },
        "logging": {
            "level": "WARNING",
            "file": "",
        },
    }


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc

    # JSON only when the suffix says so; everything else is TOML.
    if path.suffix.lower() == ".json":
        try:
            loaded = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    else:
        try:
            loaded = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigError(f"{path} must hold a table of runlog settings")
    return loaded


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Runlog defaults with the config file, if any, merged on top."""
    cfg_path = path or default_config_path()
    if not cfg_path.exists():
        return _default_config()
    return _deep_merge(_default_config(), _read_config(cfg_path))


def resolve_data_dir(config: Dict[str, Any]) -> Path:
    """Resolve the data directory, env var first."""
    raw = os.getenv("RUNLOG_DATA_DIR") or config.get("storage", {}).get("data_dir")
    if not raw:
        return default_data_dir()
    return expand_path(str(raw))


def resolve_workouts_path(config: Dict[str, Any]) -> Path:
    """Path of the workout hierarchy JSON document."""
    name = config.get("storage", {}).get("workouts_file") or "workouts.json"
    return resolve_data_dir(config) / str(name)


def resolve_users_path(config: Dict[str, Any]) -> Path:
    """Path of the user directory JSON document."""
    name = config.get("storage", {}).get("users_file") or "users.json"
    return resolve_data_dir(config) / str(name)


def resolve_secret(config: Dict[str, Any]) -> Optional[str]:
    """Read the shared registration secret from the configured env var."""
    env_name = config.get("auth", {}).get("secret_env") or DEFAULT_SECRET_ENV
    value = os.getenv(str(env_name))
    return value or None
