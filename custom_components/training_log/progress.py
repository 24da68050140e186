"""Per-week completion state rebuilt from the log."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .curriculum import day_plans, long_run_distance_km, phase_for_week
from .keys import Day, EntryKind
from .log import LogStore


@dataclass(frozen=True, slots=True)
class TaskProgress:
    index: int
    name: str
    subtext: str
    has_input: bool
    completed: bool
    value: str


@dataclass(frozen=True, slots=True)
class DayProgress:
    day: Day
    title: str
    tasks: tuple[TaskProgress, ...]

    @property
    def completed(self) -> int:
        return sum(1 for t in self.tasks if t.completed)


@dataclass(frozen=True, slots=True)
class WeekProgress:
    week: int
    phase: str
    long_run_km: int
    days: tuple[DayProgress, ...]

    @property
    def completed(self) -> int:
        return sum(d.completed for d in self.days)

    @property
    def total(self) -> int:
        return sum(len(d.tasks) for d in self.days)

    @property
    def percent(self) -> float:
        if not self.total:
            return 0.0
        return round(100.0 * self.completed / self.total, 1)

    def as_dict(self) -> dict[str, Any]:
        return {
            "week": self.week,
            "phase": self.phase,
            "long_run_km": self.long_run_km,
            "completed": self.completed,
            "total": self.total,
            "percent": self.percent,
            "days": [
                {
                    "day": d.day.value,
                    "title": d.title,
                    "tasks": [
                        {
                            "index": t.index,
                            "name": t.name,
                            "subtext": t.subtext,
                            "has_input": t.has_input,
                            "completed": t.completed,
                            "value": t.value,
                        }
                        for t in d.tasks
                    ],
                }
                for d in self.days
            ],
        }


def week_progress(log: LogStore, week: int) -> WeekProgress:
    """Completion flags and values for every planned task in a week."""
    # One pass over the week's decodable entries instead of a lookup per task.
    week_entries = {(k.day, k.task_index, k.kind): v for k, v in log.entries_for_week(week).items()}

    days: list[DayProgress] = []
    for plan in day_plans(week):
        tasks = []
        for index, task in enumerate(plan.tasks):
            raw_value = week_entries.get((plan.day, index, EntryKind.VALUE))
            tasks.append(
                TaskProgress(
                    index=index,
                    name=task.name,
                    subtext=task.subtext,
                    has_input=task.has_input,
                    completed=bool(week_entries.get((plan.day, index, EntryKind.COMPLETION), False)),
                    value="" if raw_value is None or isinstance(raw_value, bool) else str(raw_value),
                )
            )
        days.append(DayProgress(day=plan.day, title=plan.title, tasks=tuple(tasks)))

    phase = phase_for_week(week)
    return WeekProgress(
        week=week,
        phase=phase.name if phase else "",
        long_run_km=long_run_distance_km(week),
        days=tuple(days),
    )
