"""Whole-document JSON persistence shared by the workout store and user directory."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)


class PersistenceError(RuntimeError):
    """Raised when a JSON document cannot be created, read or written."""


def ensure_document(path: Path, root_key: str) -> None:
    """Create an empty ``{root_key: {}}`` document when the file is absent."""
    if path.exists():
        return
    logger.debug("Data file %s does not exist, creating it", path)
    write_document(path, root_key, {})


def read_document(path: Path, root_key: str) -> Dict[str, Any]:
    """Read the mapping stored under ``root_key``; an empty file reads as empty."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PersistenceError(f"Error reading {path}: {exc}") from exc

    if not text.strip():
        return {}

    try:
        loaded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PersistenceError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise PersistenceError(f"{path} must contain an object at the root")
    payload = loaded.get(root_key) or {}
    if not isinstance(payload, dict):
        raise PersistenceError(f"{path}: '{root_key}' must be an object")
    return payload


def write_document(path: Path, root_key: str, payload: Dict[str, Any]) -> None:
    """Encode the whole document, then atomically replace the file."""
    try:
        encoded = json.dumps({root_key: payload}, indent=2, sort_keys=True) + "\n"
    except (TypeError, ValueError) as exc:
        raise PersistenceError(f"Error encoding data for {path}: {exc}") from exc

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(
            prefix=f".{path.name}-", suffix=".tmp", dir=str(path.parent)
        )
    except OSError as exc:
        raise PersistenceError(f"Error creating {path}: {exc}") from exc

    tmp_path = Path(temp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(encoded)
        os.replace(tmp_path, path)
    except OSError as exc:
        raise PersistenceError(f"Error writing {path}: {exc}") from exc
    finally:
        tmp_path.unlink(missing_ok=True)
    logger.debug("Saved data to %s", path)
