from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from runlog.core.extract import ExtractionError, UnrecognizedFormatError
from runlog.core.models import VariantRule, WorkoutEntry
from runlog.core.ocr import RecognitionError
from runlog.core.pipeline import ingest_image, ingest_text, parse_workout_text
from runlog.core.store import NotFoundError, WorkoutStore


class FakeRecognizer:
    def __init__(self, text: str = "", error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.seen: list[Path] = []

    def recognize_text(self, image_path: Path) -> str:
        self.seen.append(image_path)
        if self.error:
            raise self.error
        return self.text


def test_parse_workout_text_apple(apple_text: str, fixed_today: date) -> None:
    workout = parse_workout_text(apple_text, today=fixed_today)
    assert workout.variant == "apple_workout"
    assert workout.entry == WorkoutEntry(distance="5.20", pace="5'30\"/km")


def test_parse_workout_text_unknown_format() -> None:
    with pytest.raises(UnrecognizedFormatError):
        parse_workout_text("a photo of a cat")


def test_parse_workout_text_missing_fields() -> None:
    text = "Workout Time Distance Active Kilocalories Total Kilocalories"
    with pytest.raises(ExtractionError):
        parse_workout_text(text)


def test_parse_workout_text_reports_configured_variant_name() -> None:
    rules = [VariantRule(name="strava", keywords=("Strava",), extractor="apple_workout")]
    workout = parse_workout_text("Strava 4.20km 5:10/km", rules=rules)
    assert workout.variant == "strava"
    assert workout.entry.distance == "4.20"


def test_ingest_text_stores_entry(store: WorkoutStore, runkeeper_text: str, fixed_today: date) -> None:
    workout = ingest_text(runkeeper_text, store=store, group_id=1, user_id=2, today=fixed_today)
    assert store.get(1, 2) == {"2024-05-07": workout.entry}


def test_ingest_text_failure_does_not_mutate(store: WorkoutStore) -> None:
    with pytest.raises(UnrecognizedFormatError):
        ingest_text("nothing useful", store=store, group_id=1, user_id=2)
    with pytest.raises(NotFoundError):
        store.get_all(1)


def test_ingest_image_uses_recognizer(
    store: WorkoutStore, apple_text: str, fixed_today: date, tmp_path: Path
) -> None:
    recognizer = FakeRecognizer(text=apple_text)
    image = tmp_path / "image.jpg"
    text, workout = ingest_image(
        image, recognizer, store=store, group_id=1, user_id=2, today=fixed_today
    )
    assert recognizer.seen == [image]
    assert text == apple_text
    assert store.get(1, 2)["2024-05-07"] == workout.entry


def test_ingest_image_propagates_recognition_error(store: WorkoutStore, tmp_path: Path) -> None:
    recognizer = FakeRecognizer(error=RecognitionError("no such file"))
    with pytest.raises(RecognitionError):
        ingest_image(tmp_path / "missing.jpg", recognizer, store=store, group_id=1, user_id=2)
