from __future__ import annotations

import math

from custom_components.training_log.curriculum import Direction, TrackedExercise
from custom_components.training_log.keys import Day
from custom_components.training_log.log import LogStore
from custom_components.training_log.personal_bests import PersonalBest, derive_personal_bests, parse_number

EXERCISES = ("squat", "deadlift", "bench", "ohp", "run5k")


def _log(*values: tuple[int, Day, int, str]) -> LogStore:
    log = LogStore.empty()
    for week, day, index, value in values:
        log = log.set_value(week, day, index, value)
    return log


def test_empty_log_has_no_data_for_every_exercise() -> None:
    bests = derive_personal_bests(LogStore.empty())
    assert set(bests) == set(EXERCISES)
    for best in bests.values():
        assert best == PersonalBest(value=None, week=None)
        assert not best.has_value


def test_reset_then_derive_yields_no_data() -> None:
    log = _log((1, Day.MONDAY, 0, "60"), (1, Day.TUESDAY, 0, "30")).reset()
    assert all(not b.has_value for b in derive_personal_bests(log).values())


def test_strength_best_is_the_maximum() -> None:
    log = _log((1, Day.MONDAY, 0, "60"), (2, Day.MONDAY, 0, "40"), (3, Day.MONDAY, 0, "80"))
    assert derive_personal_bests(log)["squat"] == PersonalBest(value=80.0, week=3)


def test_run_best_is_the_fastest_time() -> None:
    log = _log((1, Day.TUESDAY, 0, "30"), (2, Day.TUESDAY, 0, "25"), (3, Day.TUESDAY, 0, "28"))
    assert derive_personal_bests(log)["run5k"] == PersonalBest(value=25.0, week=2)


def test_bindings_follow_day_and_task_index() -> None:
    log = _log(
        (4, Day.MONDAY, 1, "140"),
        (5, Day.THURSDAY, 0, "90"),
        (6, Day.THURSDAY, 2, "50"),
        # Rows and lunges are logged but not tracked.
        (6, Day.THURSDAY, 1, "500"),
        (6, Day.MONDAY, 2, "500"),
    )
    bests = derive_personal_bests(log)
    assert bests["deadlift"] == PersonalBest(140.0, 4)
    assert bests["bench"] == PersonalBest(90.0, 5)
    assert bests["ohp"] == PersonalBest(50.0, 6)
    assert not bests["squat"].has_value


def test_non_numeric_value_is_ignored() -> None:
    log = _log((1, Day.MONDAY, 0, "70"), (2, Day.MONDAY, 0, "felt great"))
    assert derive_personal_bests(log)["squat"] == PersonalBest(70.0, 1)

    only_note = _log((2, Day.MONDAY, 0, "felt great"))
    assert not derive_personal_bests(only_note)["squat"].has_value


def test_non_positive_run_times_never_count() -> None:
    log = _log((1, Day.TUESDAY, 0, "0"), (2, Day.TUESDAY, 0, "-5"))
    assert not derive_personal_bests(log)["run5k"].has_value

    log = log.set_value(3, Day.TUESDAY, 0, "31")
    assert derive_personal_bests(log)["run5k"] == PersonalBest(31.0, 3)


def test_zero_or_negative_weights_do_not_count() -> None:
    log = _log((1, Day.THURSDAY, 0, "0"), (2, Day.THURSDAY, 0, "-20"))
    assert not derive_personal_bests(log)["bench"].has_value


def test_tie_goes_to_the_earliest_week_regardless_of_order() -> None:
    forward = _log((2, Day.MONDAY, 0, "100"), (9, Day.MONDAY, 0, "100"))
    backward = _log((9, Day.MONDAY, 0, "100"), (2, Day.MONDAY, 0, "100"))
    assert derive_personal_bests(forward)["squat"] == PersonalBest(100.0, 2)
    assert derive_personal_bests(backward)["squat"] == PersonalBest(100.0, 2)

    runs = _log((12, Day.TUESDAY, 0, "24"), (5, Day.TUESDAY, 0, "24"))
    assert derive_personal_bests(runs)["run5k"] == PersonalBest(24.0, 5)


def test_leading_number_with_unit_counts() -> None:
    log = _log((1, Day.MONDAY, 0, "100kg"), (2, Day.TUESDAY, 0, " 26.5 min"))
    bests = derive_personal_bests(log)
    assert bests["squat"] == PersonalBest(100.0, 1)
    assert bests["run5k"] == PersonalBest(26.5, 2)


def test_bad_keys_and_completion_flags_are_skipped() -> None:
    log = LogStore(
        {
            "w1_Monday_0": True,
            "w17_val_Monday_0": "500",
            "w3_val_Monday": "500",
            "garbage": "500",
            "w2_val_Monday_0": "75",
        }
    )
    assert derive_personal_bests(log)["squat"] == PersonalBest(75.0, 2)


def test_custom_bindings() -> None:
    speed = TrackedExercise("speed", "Treadmill", Day.SATURDAY, 1, Direction.HIGHER_IS_BETTER, "km/h")
    log = _log((1, Day.SATURDAY, 1, "11"), (2, Day.SATURDAY, 1, "12.5"))
    assert derive_personal_bests(log, [speed]) == {"speed": PersonalBest(12.5, 2)}


def test_parse_number() -> None:
    assert parse_number("82.5") == 82.5
    assert parse_number("  .5") == 0.5
    assert parse_number("1e2 reps") == 100.0
    assert parse_number("-3") == -3.0
    assert parse_number(90) == 90.0
    assert parse_number("felt great") is None
    assert parse_number("") is None
    assert parse_number(True) is None
    assert parse_number(None) is None
    assert parse_number("inf") is None
    assert parse_number(math.nan) is None
