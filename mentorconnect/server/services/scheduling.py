"""
Scheduling rules.

Interval overlap for bookings and validation of weekly availability slots.
Intervals are half-open: ``[start, end)``. Back-to-back intervals do not overlap.
"""

import re
from datetime import datetime
from typing import Iterable, TypeVar

T = TypeVar("T", datetime, str)

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class SlotValidationError(ValueError):
    """Raised when availability input breaks a scheduling rule."""


def intervals_overlap(start_a: T, end_a: T, start_b: T, end_b: T) -> bool:
    """True iff ``[start_a, end_a)`` and ``[start_b, end_b)`` share any instant."""
    return start_a < end_b and start_b < end_a


def normalize_day(day: str) -> str:
    """Return the canonical weekday name, accepting any letter case."""
    candidate = day.strip().capitalize()
    if candidate not in WEEKDAYS:
        raise SlotValidationError(f"Invalid day '{day}'. Expected one of: {', '.join(WEEKDAYS)}")
    return candidate


def validate_slots(slots: Iterable[tuple[str, str]]) -> list[dict[str, str]]:
    """Check a day's slots and return them sorted by start time.

    Each slot must use ``HH:MM`` (24h) with start before end, and no two slots
    of the day may overlap.

    Raises:
        SlotValidationError: On the first rule violation found.
    """
    ordered = sorted(slots)
    for start, end in ordered:
        if not _TIME_RE.match(start) or not _TIME_RE.match(end):
            raise SlotValidationError(f"Invalid time in slot {start}-{end}; use HH:MM")
        if start >= end:
            raise SlotValidationError(f"Slot {start}-{end} must start before it ends")

    # Sorted by start, so checking neighbours is enough
    for (start_a, end_a), (start_b, end_b) in zip(ordered, ordered[1:]):
        if intervals_overlap(start_a, end_a, start_b, end_b):
            raise SlotValidationError(f"Slots {start_a}-{end_a} and {start_b}-{end_b} overlap")

    return [{"start": start, "end": end} for start, end in ordered]
