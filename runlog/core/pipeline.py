"""Screenshot ingestion: recognize, classify, extract, store."""

from __future__ import annotations

import dataclasses
import logging
from datetime import date
from pathlib import Path
from typing import Optional, Protocol, Sequence, Tuple

from runlog.core.classify import VARIANT_RULES, match_variant
from runlog.core.extract import EXTRACTORS, ExtractionError, UnrecognizedFormatError
from runlog.core.models import ExtractedWorkout, VariantRule
from runlog.core.store import WorkoutStore

logger = logging.getLogger(__name__)


class TextRecognizer(Protocol):
    """Anything that turns an image file into recognized text."""

    def recognize_text(self, image_path: Path) -> str:
        ...


def parse_workout_text(
    text: str,
    rules: Sequence[VariantRule] = VARIANT_RULES,
    today: Optional[date] = None,
) -> ExtractedWorkout:
    """Classify recognized text and extract a normalized workout.

    Raises ``UnrecognizedFormatError`` when no layout matches and
    ``ExtractionError`` when the layout matches but fields are missing.
    """
    rule = match_variant(text, rules)
    if rule is None:
        raise UnrecognizedFormatError("No extractable workout format found in image text")

    extractor = EXTRACTORS.get(rule.extractor)
    if extractor is None:
        raise UnrecognizedFormatError(f"No extractor registered for {rule.extractor!r}")

    extracted = extractor(text, today)
    if extracted is None:
        raise ExtractionError("Could not extract workout details")

    if extracted.variant != rule.name:
        extracted = dataclasses.replace(extracted, variant=rule.name)
    logger.debug("Parsed %s workout: %s", rule.name, extracted.entry)
    return extracted


def ingest_text(
    text: str,
    store: WorkoutStore,
    group_id: int,
    user_id: int,
    rules: Sequence[VariantRule] = VARIANT_RULES,
    today: Optional[date] = None,
) -> ExtractedWorkout:
    """Parse text and insert the resulting entry for (group, user, today)."""
    extracted = parse_workout_text(text, rules=rules, today=today)
    if not store.insert(group_id, user_id, extracted.date, extracted.entry):
        raise ExtractionError("Invalid workout details, nothing was stored")
    return extracted


def ingest_image(
    image_path: Path,
    recognizer: TextRecognizer,
    store: WorkoutStore,
    group_id: int,
    user_id: int,
    rules: Sequence[VariantRule] = VARIANT_RULES,
    today: Optional[date] = None,
) -> Tuple[str, ExtractedWorkout]:
    """Run the full pipeline on an image; returns (recognized_text, workout)."""
    text = recognizer.recognize_text(image_path)
    extracted = ingest_text(
        text, store=store, group_id=group_id, user_id=user_id, rules=rules, today=today
    )
    return text, extracted
