"""Static 16-week curriculum.

Read-only table consumed by the log: phases, day plans, the long-run
distance table and the tracked-exercise bindings used for personal bests.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from .keys import MAX_WEEK, MIN_WEEK, Day


@dataclass(frozen=True, slots=True)
class Phase:
    name: str
    weeks: tuple[int, ...]


@dataclass(frozen=True, slots=True)
class Task:
    name: str
    subtext: str = ""
    has_input: bool = False


@dataclass(frozen=True, slots=True)
class DayPlan:
    day: Day
    title: str
    tasks: tuple[Task, ...]


class Direction(StrEnum):
    HIGHER_IS_BETTER = "max"
    LOWER_IS_BETTER = "min"


@dataclass(frozen=True, slots=True)
class TrackedExercise:
    key: str
    label: str
    day: Day
    task_index: int
    direction: Direction
    unit: str


PHASES: tuple[Phase, ...] = (
    Phase("Adaptation", (1, 2, 3, 4)),
    Phase("Strength", (5, 6, 7, 8)),
    Phase("Peak", (9, 10, 11, 12)),
    Phase("Maintenance", (13, 14, 15, 16)),
)

# Index 0 is unused so the table reads by week number.
_LONG_RUN_KM = (0, 8, 10, 12, 6, 12, 14, 16, 8, 18, 21, 24, 12, 20, 15, 10, 5)
_LONG_RUN_FALLBACK_KM = 5

TRACKED_EXERCISES: tuple[TrackedExercise, ...] = (
    TrackedExercise("squat", "Squat", Day.MONDAY, 0, Direction.HIGHER_IS_BETTER, "kg"),
    TrackedExercise("deadlift", "Deadlift", Day.MONDAY, 1, Direction.HIGHER_IS_BETTER, "kg"),
    TrackedExercise("bench", "Bench", Day.THURSDAY, 0, Direction.HIGHER_IS_BETTER, "kg"),
    TrackedExercise("ohp", "OH Press", Day.THURSDAY, 2, Direction.HIGHER_IS_BETTER, "kg"),
    TrackedExercise("run5k", "Recovery Run (5-7km)", Day.TUESDAY, 0, Direction.LOWER_IS_BETTER, "min"),
)


def phase_for_week(week: int) -> Phase | None:
    return next((p for p in PHASES if week in p.weeks), None)


def long_run_distance_km(week: int) -> int:
    if MIN_WEEK <= week <= MAX_WEEK:
        return _LONG_RUN_KM[week] or _LONG_RUN_FALLBACK_KM
    return _LONG_RUN_FALLBACK_KM


def day_plans(week: int) -> tuple[DayPlan, ...]:
    """Day-by-day plan for a week. Only the long run varies between weeks."""
    return (
        DayPlan(
            Day.MONDAY,
            "Lower Body",
            (
                Task("Back Squats (3x8)", "Input max weight (kg)", True),
                Task("Deadlifts (3x5)", "Input max weight (kg)", True),
                Task("Walking Lunges (3x10)", "Stability focus", True),
                Task("Plank & Abs", "Core finishing"),
            ),
        ),
        DayPlan(
            Day.TUESDAY,
            "Easy Run",
            (
                Task("Recovery Run (5-7km)", "Input time (min) for PB", True),
                Task("Mobility Work", "Calves & Hips"),
            ),
        ),
        DayPlan(
            Day.WEDNESDAY,
            "The Long Run",
            (
                Task(f"Long Run: {long_run_distance_km(week)}km", "Keep a steady rhythm", True),
                Task("Active Recovery", "Walk/Stretch"),
            ),
        ),
        DayPlan(
            Day.THURSDAY,
            "Upper Body",
            (
                Task("Bench Press (3x8)", "Input weight (kg)", True),
                Task("Bent Over Rows (3x10)", "Input weight (kg)", True),
                Task("Overhead Press (3x10)", "Input weight (kg)", True),
                Task("Pull-ups (3xMax)", "Lats", True),
            ),
        ),
        DayPlan(
            Day.SATURDAY,
            "HIIT Hybrid",
            (
                Task("6 Rounds: 5m TM / 5m Exercises", "Total 60 min session"),
                Task("Treadmill Speed", "Target 10-12km/h+", True),
                Task("Bulletproof Circuit", "KB/Pushups/Copenhagens"),
            ),
        ),
    )


def task_for(week: int, day: Day | str, task_index: int) -> Task | None:
    day = Day(day)
    plan = next((p for p in day_plans(week) if p.day is day), None)
    if plan is None or not 0 <= task_index < len(plan.tasks):
        return None
    return plan.tasks[task_index]
