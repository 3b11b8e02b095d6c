"""Workout screenshot ingestion command."""

from __future__ import annotations

import contextlib
import tempfile
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Sequence

import typer

from runlog.commands.common import (
    fail,
    get_state,
    group_option,
    open_directory,
    open_store,
    print_json_payload,
    require_authorized,
    user_option,
)
from runlog.core.classify import variant_rules_from_config
from runlog.core.constants import VARIANT_LABELS
from runlog.core.download import DownloadError, download_image
from runlog.core.extract import EXTRACTORS, ExtractionError
from runlog.core.models import ExtractedWorkout, VariantRule
from runlog.core.ocr import RecognitionError, TesseractRecognizer
from runlog.core.persistence import PersistenceError
from runlog.core.pipeline import ingest_image, ingest_text, parse_workout_text
from runlog.core.state import CLIState
from runlog.core.store import WorkoutStore


def _workout_payload(workout: ExtractedWorkout, stored: bool) -> Dict[str, Any]:
    return {
        "status": "logged" if stored else "parsed",
        "variant": workout.variant,
        "date": workout.date,
        "distance": workout.entry.distance,
        "pace": workout.entry.pace,
        "totalTime": workout.total_time,
        "calories": workout.calories,
    }


@contextlib.contextmanager
def _image_source(state: CLIState, image: Optional[Path], url: Optional[str]) -> Iterator[Path]:
    """Yield a local image path, downloading --url into a temp dir first."""
    if not url:
        if image is None:
            raise typer.BadParameter("Provide an IMAGE path, --url, or --text-file")
        yield image
        return

    download_cfg = state.config.get("download", {})
    with tempfile.TemporaryDirectory(prefix="runlog-") as tmp_dir:
        try:
            path = download_image(
                url,
                Path(tmp_dir) / "image.jpg",
                timeout_seconds=int(download_cfg.get("timeout_seconds", 30)),
                max_retries=int(download_cfg.get("max_retries", 3)),
            )
        except DownloadError as exc:
            fail(state, f"Error processing image. Please try again. ({exc})")
        yield path


def _from_text_file(
    state: CLIState,
    text_file: Path,
    store: WorkoutStore,
    group_id: int,
    user_id: int,
    rules: Sequence[VariantRule],
    dry_run: bool,
) -> ExtractedWorkout:
    try:
        text = text_file.read_text(encoding="utf-8")
    except OSError as exc:
        fail(state, f"Error reading text file: {exc}")

    if dry_run:
        return parse_workout_text(text, rules=rules)
    return ingest_text(text, store=store, group_id=group_id, user_id=user_id, rules=rules)


def _from_image(
    state: CLIState,
    image: Optional[Path],
    url: Optional[str],
    store: WorkoutStore,
    group_id: int,
    user_id: int,
    rules: Sequence[VariantRule],
    dry_run: bool,
) -> ExtractedWorkout:
    recognizer = TesseractRecognizer.from_config(state.config)
    with _image_source(state, image, url) as path:
        try:
            if dry_run:
                return parse_workout_text(recognizer.recognize_text(path), rules=rules)
            _, workout = ingest_image(
                path,
                recognizer,
                store=store,
                group_id=group_id,
                user_id=user_id,
                rules=rules,
            )
            return workout
        except RecognitionError as exc:
            fail(state, f"Error processing image. Please try again. ({exc})")


def ingest_command(
    ctx: typer.Context,
    image: Optional[Path] = typer.Argument(None, help="Workout summary screenshot"),
    group_id: int = group_option(),
    user_id: int = user_option(),
    url: Optional[str] = typer.Option(None, "--url", help="Download the screenshot from a URL"),
    text_file: Optional[Path] = typer.Option(
        None, "--text-file", help="Use already recognized text instead of running OCR"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Parse without storing"),
) -> None:
    """Log a workout from an app summary screenshot."""
    state = get_state(ctx)
    directory = open_directory(state)
    require_authorized(state, directory, user_id)
    store = open_store(state)
    rules = variant_rules_from_config(state.config, extractors=EXTRACTORS.keys())

    try:
        if text_file is not None:
            workout = _from_text_file(state, text_file, store, group_id, user_id, rules, dry_run)
        else:
            workout = _from_image(state, image, url, store, group_id, user_id, rules, dry_run)
    except ExtractionError as exc:
        fail(state, f"Error extracting workout details. Please try again. ({exc})")
    except PersistenceError as exc:
        fail(state, f"Error saving workout data: {exc}")

    payload = _workout_payload(workout, stored=not dry_run)
    if state.json_output:
        print_json_payload(state, payload)
        return

    if state.plain_output:
        for key, value in payload.items():
            if value is not None:
                typer.echo(f"{key}\t{value}")
        return

    heading = "Workout logged!" if not dry_run else "Workout parsed (not stored)"
    state.console.print(f"{heading} ({VARIANT_LABELS.get(workout.variant, workout.variant)})")
    state.console.print(f"Date: {workout.date}")
    state.console.print(f"Distance: {workout.entry.distance}KM")
    state.console.print(f"Avg Pace: {workout.entry.pace}")
    if workout.total_time:
        state.console.print(f"Total Time: {workout.total_time}")
    if workout.calories:
        state.console.print(f"Calories: {workout.calories}")
