"""Personal-best derivation.

Personal bests are never stored. They are recomputed from the whole log on
every change; at 16 weeks of a handful of values that full scan stays cheap.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from .curriculum import TRACKED_EXERCISES, Direction, TrackedExercise
from .keys import EntryKind
from .log import LogStore

# Leading number like "82.5", "-3", ".5", "1e2"; trailing text is ignored ("100kg").
_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


@dataclass(frozen=True, slots=True)
class PersonalBest:
    """Best value for one exercise. value/week are None until something qualifies."""

    value: float | None = None
    week: int | None = None

    @property
    def has_value(self) -> bool:
        return self.value is not None

    def as_dict(self) -> dict[str, Any]:
        return {"value": self.value, "week": self.week}


def parse_number(raw: Any) -> float | None:
    """Parse the leading number of a logged value, or None when there is none."""
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, (int, float)):
        number = float(raw)
    else:
        match = _LEADING_NUMBER.match(str(raw))
        if match is None:
            return None
        try:
            number = float(match.group(1))
        except ValueError:
            return None
    if not math.isfinite(number):
        return None
    return number


def _qualifies(exercise: TrackedExercise, candidate: float, held: float | None) -> bool:
    if exercise.direction is Direction.LOWER_IS_BETTER:
        # Zero or negative times are logging errors, never a best.
        return candidate > 0 and (held is None or candidate < held)
    return candidate > (0 if held is None else held)


def derive_personal_bests(
    log: LogStore,
    exercises: Iterable[TrackedExercise] = TRACKED_EXERCISES,
) -> dict[str, PersonalBest]:
    """Return exercise key -> PersonalBest for every tracked exercise.

    Candidates are visited in ascending week order and only a strictly better
    value replaces the held record, so on a tie the earliest week wins.
    """
    exercises = tuple(exercises)
    bindings = {(ex.day, ex.task_index): ex for ex in exercises}
    best: dict[str, PersonalBest] = {ex.key: PersonalBest() for ex in exercises}

    candidates = []
    for key, payload in log.decoded():
        if key.kind is not EntryKind.VALUE:
            continue
        exercise = bindings.get((key.day, key.task_index))
        if exercise is None:
            continue
        number = parse_number(payload)
        if number is None:
            continue
        candidates.append((key.week, exercise, number))

    candidates.sort(key=lambda c: c[0])
    for week, exercise, number in candidates:
        if _qualifies(exercise, number, best[exercise.key].value):
            best[exercise.key] = PersonalBest(value=number, week=week)
    return best
