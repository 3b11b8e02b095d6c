"""Workout record store: group -> user -> date -> entry, persisted as JSON."""

from __future__ import annotations

import logging
import threading
from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, Tuple

from runlog.core.models import WorkoutEntry
from runlog.core.persistence import (
    PersistenceError,
    ensure_document,
    read_document,
    write_document,
)
from runlog.utils.date_ranges import parse_date

logger = logging.getLogger(__name__)

ROOT_KEY = "workouts"

WorkoutKey = Tuple[int, int, str]


class StoreError(RuntimeError):
    """Base class for workout store failures."""


class NotFoundError(StoreError):
    """Raised when a group has no recorded workouts."""


class AggregationError(StoreError):
    """Raised when stored data cannot be summed (bad distance or date)."""


def _decode(payload: Dict[str, Any]) -> Dict[WorkoutKey, WorkoutEntry]:
    entries: Dict[WorkoutKey, WorkoutEntry] = {}
    try:
        for group_key, users in payload.items():
            for user_key, dates in users.items():
                for day, raw_entry in dates.items():
                    key = (int(group_key), int(user_key), str(day))
                    entries[key] = WorkoutEntry.from_dict(raw_entry)
    except (AttributeError, TypeError, ValueError) as exc:
        raise PersistenceError(f"Malformed workout data: {exc}") from exc
    return entries


def _encode(entries: Dict[WorkoutKey, WorkoutEntry]) -> Dict[str, Dict[str, Dict[str, Dict[str, str]]]]:
    nested: Dict[str, Dict[str, Dict[str, Dict[str, str]]]] = {}
    for (group_id, user_id, day), entry in entries.items():
        nested.setdefault(str(group_id), {}).setdefault(str(user_id), {})[day] = entry.to_dict()
    return nested


class WorkoutStore:
    """Concurrency-safe workout store with write-through JSON persistence.

    Entries live in one flat map keyed by ``(group_id, user_id, date)``, so a
    group or user with no entries simply has no keys; there are no empty
    branches to clean up after a delete. Every operation holds a single lock
    for its whole duration, including the disk write, and in-memory state is
    replaced only after the write succeeds.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._lock = threading.Lock()
        self._entries: Dict[WorkoutKey, WorkoutEntry] = {}
        self.reload()

    def reload(self) -> None:
        """Replace in-memory state with the persisted document."""
        with self._lock:
            ensure_document(self.path, ROOT_KEY)
            self._entries = _decode(read_document(self.path, ROOT_KEY))
            logger.debug("Loaded %d workout entries from %s", len(self._entries), self.path)

    def _commit(self, entries: Dict[WorkoutKey, WorkoutEntry]) -> None:
        write_document(self.path, ROOT_KEY, _encode(entries))
        self._entries = entries

    def _group_items(self, group_id: int) -> Iterator[Tuple[WorkoutKey, WorkoutEntry]]:
        for key, entry in self._entries.items():
            if key[0] == group_id:
                yield key, entry

    def _has_group(self, group_id: int) -> bool:
        return any(key[0] == group_id for key in self._entries)

    def insert(self, group_id: int, user_id: int, day: str, entry: WorkoutEntry) -> bool:
        """Insert or overwrite the entry for (group, user, day).

        Returns False without touching memory or disk when distance or pace
        is empty.
        """
        if not entry.distance or not entry.pace:
            logger.warning("Invalid workout details %s, no insertion performed", entry)
            return False
        parse_date(day)

        with self._lock:
            updated = dict(self._entries)
            updated[(group_id, user_id, day)] = entry
            self._commit(updated)
        logger.info("Workout entry stored for group=%s user=%s date=%s", group_id, user_id, day)
        return True

    def get(self, group_id: int, user_id: int) -> Dict[str, WorkoutEntry]:
        """Return date -> entry for one user; empty when the user has none."""
        with self._lock:
            if not self._has_group(group_id):
                logger.warning("No workouts found for group: %s", group_id)
                raise NotFoundError(f"No workouts found for group: {group_id}")
            return {
                day: entry
                for (_, uid, day), entry in self._group_items(group_id)
                if uid == user_id
            }

    def get_all(self, group_id: int) -> Dict[int, Dict[str, WorkoutEntry]]:
        """Return user -> date -> entry for a whole group."""
        with self._lock:
            result: Dict[int, Dict[str, WorkoutEntry]] = {}
            for (_, uid, day), entry in self._group_items(group_id):
                result.setdefault(uid, {})[day] = entry
        if not result:
            logger.warning("No workouts found for group: %s", group_id)
            raise NotFoundError(f"No workouts found for group: {group_id}")
        return result

    def delete(self, group_id: int, user_id: int, day: str) -> bool:
        """Remove one entry; returns False (no error, no write) when absent."""
        key = (group_id, user_id, day)
        with self._lock:
            if key not in self._entries:
                logger.debug("No workout entry to delete for %s", key)
                return False
            updated = dict(self._entries)
            del updated[key]
            self._commit(updated)
        logger.info("Deleted workout entry for group=%s user=%s date=%s", group_id, user_id, day)
        return True

    def _aggregate(self, group_id: int, include: Callable[[date], bool]) -> Dict[int, str]:
        with self._lock:
            if not self._has_group(group_id):
                logger.warning("No workouts found for group: %s", group_id)
                raise NotFoundError(f"No workouts found for group: {group_id}")

            totals: Dict[int, float] = {}
            for (_, uid, day), entry in self._group_items(group_id):
                totals.setdefault(uid, 0.0)
                try:
                    parsed = parse_date(day)
                except ValueError as exc:
                    raise AggregationError(f"Error parsing date {day!r}: {exc}") from exc
                if not include(parsed):
                    continue
                try:
                    totals[uid] += float(entry.distance)
                except ValueError as exc:
                    raise AggregationError(
                        f"Error parsing distance {entry.distance!r}: {exc}"
                    ) from exc

        return {uid: f"{total:.2f}" for uid, total in totals.items()}

    def aggregate_by_range(self, group_id: int, start_date: str, end_date: str) -> Dict[int, str]:
        """Total distance per user for start_date <= date <= end_date."""
        start, end = parse_date(start_date), parse_date(end_date)
        return self._aggregate(group_id, lambda day: start <= day <= end)

    def aggregate_by_month(self, group_id: int, month: str, year: str) -> Dict[int, str]:
        """Total distance per user for one calendar month (``"MM"``, ``"YYYY"``)."""
        if len(month) != 2 or not month.isdigit() or not 1 <= int(month) <= 12:
            raise ValueError(f"Invalid month '{month}'. Expected two digits 01-12")
        if len(year) != 4 or not year.isdigit():
            raise ValueError(f"Invalid year '{year}'. Expected four digits")
        month_num, year_num = int(month), int(year)
        return self._aggregate(
            group_id, lambda day: day.month == month_num and day.year == year_num
        )
