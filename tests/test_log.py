from __future__ import annotations

from custom_components.training_log.keys import Day
from custom_components.training_log.log import LogStore


def test_unset_keys_resolve_to_defaults() -> None:
    log = LogStore.empty()
    assert log.get_completion(1, Day.MONDAY, 0) is False
    assert log.get_value(1, Day.MONDAY, 0) == ""
    assert len(log) == 0


def test_writes_return_new_store_and_leave_previous_store_untouched() -> None:
    log = LogStore.empty()
    checked = log.set_completion(2, Day.TUESDAY, 1, True)
    valued = checked.set_value(2, Day.TUESDAY, 0, "27.5")

    assert log.get_completion(2, Day.TUESDAY, 1) is False
    assert checked.get_completion(2, Day.TUESDAY, 1) is True
    assert checked.get_value(2, Day.TUESDAY, 0) == ""
    assert valued.get_value(2, Day.TUESDAY, 0) == "27.5"
    assert valued.as_dict() == {"w2_Tuesday_1": True, "w2_val_Tuesday_0": "27.5"}


def test_write_replaces_existing_payload() -> None:
    log = LogStore.empty().set_value(1, Day.MONDAY, 0, "60").set_value(1, Day.MONDAY, 0, "65 felt heavy")
    assert log.get_value(1, Day.MONDAY, 0) == "65 felt heavy"
    assert len(log) == 1


def test_toggle_flips_completion() -> None:
    log = LogStore.empty().toggle_completion(4, "Saturday", 2)
    assert log.get_completion(4, Day.SATURDAY, 2) is True
    assert log.toggle_completion(4, Day.SATURDAY, 2).get_completion(4, Day.SATURDAY, 2) is False


def test_value_entries_keep_free_text() -> None:
    log = LogStore.empty().set_value(5, Day.THURSDAY, 3, "felt great")
    assert log.get_value(5, Day.THURSDAY, 3) == "felt great"


def test_replace_all_leaves_no_residue() -> None:
    log = LogStore.empty().set_value(1, Day.MONDAY, 0, "60").set_completion(1, Day.MONDAY, 0, True)
    snapshot = {"w9_val_Thursday_0": "70", "w9_Thursday_0": True}

    replaced = log.replace_all(snapshot)

    assert replaced == snapshot
    assert replaced.get_value(1, Day.MONDAY, 0) == ""
    assert replaced.get_completion(1, Day.MONDAY, 0) is False
    assert replaced.get_value(9, Day.THURSDAY, 0) == "70"


def test_replace_all_copies_the_snapshot() -> None:
    snapshot = {"w1_Monday_0": True}
    log = LogStore.empty().replace_all(snapshot)
    snapshot["w1_Monday_1"] = True
    assert "w1_Monday_1" not in log


def test_reset_clears_everything() -> None:
    log = LogStore.empty().set_value(3, Day.MONDAY, 1, "120").set_completion(3, Day.MONDAY, 1, True)
    cleared = log.reset()
    assert len(cleared) == 0
    assert cleared.get_value(3, Day.MONDAY, 1) == ""
    assert cleared.get_completion(3, Day.MONDAY, 1) is False


def test_unknown_keys_are_carried_but_not_decoded() -> None:
    log = LogStore({"w1_Monday_0": True, "legacy_setting": "x", 42: "dropped"})
    assert log.as_dict() == {"w1_Monday_0": True, "legacy_setting": "x"}
    assert [key.encode() for key, _ in log.decoded()] == ["w1_Monday_0"]


def test_non_text_value_payloads() -> None:
    log = LogStore({"w1_val_Monday_0": 80, "w1_val_Monday_1": True})
    assert log.get_value(1, Day.MONDAY, 0) == "80"
    assert log.get_value(1, Day.MONDAY, 1) == ""


def test_entries_for_week() -> None:
    log = LogStore.empty().set_value(1, Day.MONDAY, 0, "60").set_value(2, Day.MONDAY, 0, "62")
    week_two = log.entries_for_week(2)
    assert [(k.week, k.day, v) for k, v in week_two.items()] == [(2, Day.MONDAY, "62")]
