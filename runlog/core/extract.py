"""Workout field extraction from recognized screenshot text."""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import Callable, Dict, Optional

from runlog.core.constants import APPLE_WORKOUT, RUNKEEPER
from runlog.core.models import ExtractedWorkout, WorkoutEntry
from runlog.utils.date_ranges import today_str

logger = logging.getLogger(__name__)

_APPLE_DISTANCE_RE = re.compile(r"\d+\.\d+[a-zA-Z]*")
_APPLE_PACE_RE = re.compile(r"\d{1,2}[':]\d{2}\"?/[a-zA-Z]*")

_RUNKEEPER_DISTANCE_RE = re.compile(r"\b\d+\.\d+\b")
_RUNKEEPER_TIME_RE = re.compile(r"\b\d{1,2}:\d{2}\b")
# A bare integer: not part of a decimal or a time token.
_RUNKEEPER_CALORIES_RE = re.compile(r"(?<![\d.:])\d+(?![\d.:])")

_ALPHA_RE = re.compile(r"[a-zA-Z]+")


class ExtractionError(RuntimeError):
    """Raised when workout details cannot be pulled from recognized text."""


class UnrecognizedFormatError(ExtractionError):
    """Raised when no known screenshot layout matches the text."""


def clean_distance(raw: str) -> str:
    """Strip a trailing comma and unit letters, leaving a bare decimal string."""
    cleaned = raw[:-1] if raw.endswith(",") else raw
    return _ALPHA_RE.sub("", cleaned)


def _first(pattern: "re.Pattern[str]", text: str) -> str:
    match = pattern.search(text)
    return match.group(0) if match else ""


def extract_apple_workout(text: str, today: Optional[date] = None) -> Optional[ExtractedWorkout]:
    """Extract distance and pace from an Apple Workout summary."""
    distance = _first(_APPLE_DISTANCE_RE, text)
    pace = _first(_APPLE_PACE_RE, text)
    logger.debug("Apple workout distance=%r pace=%r", distance, pace)

    if not distance or not pace:
        logger.warning("Could not extract Apple workout details")
        return None

    return ExtractedWorkout(
        variant=APPLE_WORKOUT,
        date=today_str(today),
        entry=WorkoutEntry(distance=clean_distance(distance), pace=pace),
    )


def extract_runkeeper(text: str, today: Optional[date] = None) -> Optional[ExtractedWorkout]:
    """Extract distance, pace, total time and calories from a RunKeeper summary.

    The first ``M:SS`` token is the pace and the second the elapsed time.
    """
    distance = _first(_RUNKEEPER_DISTANCE_RE, text)
    times = _RUNKEEPER_TIME_RE.findall(text)
    calories = _first(_RUNKEEPER_CALORIES_RE, text)
    logger.debug(
        "RunKeeper distance=%r times=%r calories=%r", distance, times, calories
    )

    if len(times) < 2 or not calories or not distance:
        logger.warning("Could not extract RunKeeper workout details")
        return None

    return ExtractedWorkout(
        variant=RUNKEEPER,
        date=today_str(today),
        entry=WorkoutEntry(distance=clean_distance(distance), pace=times[0]),
        total_time=times[1],
        calories=calories,
    )


Extractor = Callable[[str, Optional[date]], Optional[ExtractedWorkout]]

EXTRACTORS: Dict[str, Extractor] = {
    APPLE_WORKOUT: extract_apple_workout,
    RUNKEEPER: extract_runkeeper,
}
