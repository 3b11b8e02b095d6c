"""Lightweight data models used across commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class WorkoutEntry:
    """One normalized workout record for a user on a date."""

    distance: str
    pace: str

    def to_dict(self) -> Dict[str, str]:
        return {"distance": self.distance, "pace": self.pace}

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "WorkoutEntry":
        return cls(
            distance=str(payload.get("distance") or ""),
            pace=str(payload.get("pace") or ""),
        )


@dataclass(frozen=True)
class ExtractedWorkout:
    """Workout fields pulled out of recognized screenshot text."""

    variant: str
    date: str
    entry: WorkoutEntry
    total_time: Optional[str] = None
    calories: Optional[str] = None


@dataclass(frozen=True)
class VariantRule:
    """Keyword rule selecting which extractor handles a screenshot layout."""

    name: str
    keywords: Tuple[str, ...]
    extractor: str
