"""Composite log keys.

Every loggable fact is addressed by (week, day, task index, kind) and stored
under a flat string key. The format is shared with existing stored documents
and must stay stable:

- completion flag: ``w{week}_{Day}_{index}``      e.g. ``w3_Monday_0``
- value entry:     ``w{week}_val_{Day}_{index}``  e.g. ``w3_val_Monday_0``

Integers are canonical (ASCII digits, no sign, no leading zeros), so every
tuple maps to exactly one key.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

MIN_WEEK = 1
MAX_WEEK = 16

_VALUE_MARKER = "val"


class Day(StrEnum):
    """Active training days of the plan."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    SATURDAY = "Saturday"


class EntryKind(StrEnum):
    COMPLETION = "completion"
    VALUE = "value"


@dataclass(frozen=True, slots=True)
class LogKey:
    week: int
    day: Day
    task_index: int
    kind: EntryKind

    def encode(self) -> str:
        return encode_key(self.week, self.day, self.task_index, self.kind)


@dataclass(frozen=True, slots=True)
class DecodeFailure:
    """Returned (never raised) when a stored key does not parse."""

    key: Any
    reason: str


def _coerce_day(day: Day | str) -> Day:
    try:
        return Day(day)
    except ValueError:
        raise ValueError(f"Unknown training day: {day!r}") from None


def encode_key(week: int, day: Day | str, task_index: int, kind: EntryKind | str) -> str:
    """Build the flat key for a composite key; invalid input raises ValueError."""
    if isinstance(week, bool) or not isinstance(week, int) or not MIN_WEEK <= week <= MAX_WEEK:
        raise ValueError(f"Week must be an integer in {MIN_WEEK}..{MAX_WEEK}, got {week!r}")
    if isinstance(task_index, bool) or not isinstance(task_index, int) or task_index < 0:
        raise ValueError(f"Task index must be a non-negative integer, got {task_index!r}")
    day = _coerce_day(day)
    kind = EntryKind(kind)
    if kind is EntryKind.VALUE:
        return f"w{week}_{_VALUE_MARKER}_{day.value}_{task_index}"
    return f"w{week}_{day.value}_{task_index}"


def _parse_canonical_int(raw: str) -> int | None:
    if not raw or not raw.isascii() or not raw.isdigit():
        return None
    if len(raw) > 1 and raw[0] == "0":
        return None
    return int(raw)


def decode_key(key: Any) -> LogKey | DecodeFailure:
    """Parse a flat key. Never raises; malformed keys yield a DecodeFailure."""
    if not isinstance(key, str):
        return DecodeFailure(key, "key is not a string")
    if not key.startswith("w"):
        return DecodeFailure(key, "missing week prefix")

    parts = key[1:].split("_")
    if len(parts) == 3:
        kind = EntryKind.COMPLETION
        week_raw, day_raw, index_raw = parts
    elif len(parts) == 4:
        if parts[1] != _VALUE_MARKER:
            return DecodeFailure(key, f"unknown kind marker {parts[1]!r}")
        kind = EntryKind.VALUE
        week_raw, _, day_raw, index_raw = parts
    else:
        return DecodeFailure(key, f"expected 3 or 4 fields, got {len(parts)}")

    week = _parse_canonical_int(week_raw)
    if week is None:
        return DecodeFailure(key, f"week {week_raw!r} is not an integer")
    if not MIN_WEEK <= week <= MAX_WEEK:
        return DecodeFailure(key, f"week {week} out of range")
    try:
        day = Day(day_raw)
    except ValueError:
        return DecodeFailure(key, f"unknown day {day_raw!r}")
    task_index = _parse_canonical_int(index_raw)
    if task_index is None:
        return DecodeFailure(key, f"task index {index_raw!r} is not an integer")

    return LogKey(week=week, day=day, task_index=task_index, kind=kind)
