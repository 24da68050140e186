from __future__ import annotations

from custom_components.training_log.curriculum import long_run_distance_km, phase_for_week, task_for
from custom_components.training_log.keys import Day
from custom_components.training_log.log import LogStore
from custom_components.training_log.progress import week_progress


def _day(progress, day: Day):
    return next(d for d in progress.days if d.day is day)


def test_empty_week_lists_every_planned_task() -> None:
    progress = week_progress(LogStore.empty(), 1)
    assert [d.day for d in progress.days] == [Day.MONDAY, Day.TUESDAY, Day.WEDNESDAY, Day.THURSDAY, Day.SATURDAY]
    assert progress.total == 15
    assert progress.completed == 0
    assert progress.percent == 0.0
    assert progress.phase == "Adaptation"


def test_week_state_is_rebuilt_from_the_log() -> None:
    log = (
        LogStore.empty()
        .set_completion(3, Day.MONDAY, 0, True)
        .set_value(3, Day.MONDAY, 0, "85")
        .set_completion(3, Day.SATURDAY, 2, True)
        .set_completion(3, Day.WEDNESDAY, 1, False)
        # Other weeks must not leak in.
        .set_completion(4, Day.MONDAY, 1, True)
    )
    progress = week_progress(log, 3)

    monday = _day(progress, Day.MONDAY)
    assert monday.tasks[0].completed is True
    assert monday.tasks[0].value == "85"
    assert monday.tasks[1].completed is False
    assert _day(progress, Day.SATURDAY).tasks[2].completed is True
    assert progress.completed == 2
    assert progress.percent == round(100 * 2 / 15, 1)


def test_long_run_follows_the_distance_table() -> None:
    progress = week_progress(LogStore.empty(), 11)
    assert progress.long_run_km == 24
    assert _day(progress, Day.WEDNESDAY).tasks[0].name == "Long Run: 24km"
    assert progress.phase == "Peak"


def test_payload_shape() -> None:
    payload = week_progress(LogStore.empty().set_completion(16, Day.TUESDAY, 1, True), 16).as_dict()
    assert payload["week"] == 16
    assert payload["phase"] == "Maintenance"
    assert payload["completed"] == 1
    tuesday = next(d for d in payload["days"] if d["day"] == "Tuesday")
    assert tuesday["tasks"][1] == {
        "index": 1,
        "name": "Mobility Work",
        "subtext": "Calves & Hips",
        "has_input": False,
        "completed": True,
        "value": "",
    }


def test_curriculum_lookups() -> None:
    assert long_run_distance_km(1) == 8
    assert long_run_distance_km(16) == 5
    assert long_run_distance_km(40) == 5
    assert phase_for_week(8).name == "Strength"
    assert phase_for_week(17) is None
    assert task_for(2, Day.THURSDAY, 2).name == "Overhead Press (3x10)"
    assert task_for(2, "Tuesday", 0).has_input is True
    assert task_for(2, Day.TUESDAY, 5) is None
