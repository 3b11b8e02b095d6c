"""Static constants and mappings for runlog."""

from __future__ import annotations

DATE_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"

APPLE_WORKOUT = "apple_workout"
RUNKEEPER = "runkeeper"
UNKNOWN_VARIANT = "unknown"

# Ordered by priority: the first rule whose keywords are all present wins.
VARIANT_KEYWORDS = [
    (
        APPLE_WORKOUT,
        ["Workout", "Time", "Distance", "Active Kilocalories", "Total Kilocalories"],
    ),
    (RUNKEEPER, ["km", "time", "min/km", "Calories"]),
]

VARIANT_LABELS = {
    APPLE_WORKOUT: "Apple Workout",
    RUNKEEPER: "RunKeeper",
    UNKNOWN_VARIANT: "Unknown",
}

MONTH_ABBREVIATIONS = {
    "01": "JAN",
    "02": "FEB",
    "03": "MAR",
    "04": "APR",
    "05": "MAY",
    "06": "JUN",
    "07": "JUL",
    "08": "AUG",
    "09": "SEP",
    "10": "OCT",
    "11": "NOV",
    "12": "DEC",
}

DEFAULT_SECRET_ENV = "RUNLOG_SECRET_PASSWORD"
