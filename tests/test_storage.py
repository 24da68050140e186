from __future__ import annotations

import asyncio
import copy
from collections.abc import Callable
from typing import Any

import pytest

from custom_components.training_log import storage
from custom_components.training_log.keys import Day
from custom_components.training_log.session import TrainingLogSession
from custom_components.training_log.storage import TrainingLogStore
from custom_components.training_log.sync import LogSnapshot, SyncFailure

PROFILE = "p"


class _FakeStore:
    """Stand-in for helpers.storage.Store; reads and writes yield like executor jobs."""

    disk: dict[str, Any] = {}
    fail_load: Exception | None = None
    fail_save: Exception | None = None
    writes: list[dict[str, Any]] = []

    def __init__(self, hass: Any, version: int, key: str) -> None:
        self.key = key

    async def async_load(self) -> Any:
        await asyncio.sleep(0)
        if self.fail_load is not None:
            raise self.fail_load
        return copy.deepcopy(self.disk.get(self.key))

    async def async_save(self, data: dict[str, Any]) -> None:
        await asyncio.sleep(0)
        if self.fail_save is not None:
            raise self.fail_save
        self.disk[self.key] = copy.deepcopy(data)
        self.writes.append(copy.deepcopy(data))


@pytest.fixture
def fake_store(monkeypatch: pytest.MonkeyPatch) -> type[_FakeStore]:
    store_cls = type("_Store", (_FakeStore,), {"disk": {}, "writes": [], "fail_load": None, "fail_save": None})
    signals: dict[str, list[Callable[..., None]]] = {}

    def _connect(hass: Any, signal: str, target: Callable[..., None]) -> Callable[[], None]:
        signals.setdefault(signal, []).append(target)
        return lambda: signals[signal].remove(target)

    def _send(hass: Any, signal: str, *args: Any) -> None:
        for target in list(signals.get(signal, [])):
            target(*args)

    monkeypatch.setattr(storage, "Store", store_cls)
    monkeypatch.setattr(storage, "async_dispatcher_connect", _connect)
    monkeypatch.setattr(storage, "async_dispatcher_send", _send)
    return store_cls


def _key(profile: str = PROFILE) -> str:
    return f"training_log_{profile}"


async def _drain() -> None:
    for _ in range(20):
        await asyncio.sleep(0)


def test_load_without_file_returns_none(fake_store: type[_FakeStore]) -> None:
    async def _run() -> None:
        assert await TrainingLogStore(object()).async_load(PROFILE) is None

    asyncio.run(_run())


def test_load_cleans_stored_entries(fake_store: type[_FakeStore]) -> None:
    fake_store.disk[_key()] = {
        "rev": "7",
        "logs": {"w1_Monday_0": True, "w1_val_Monday_0": "100", "junk": [1, 2], "w2_val_Monday_0": {"v": 1}},
    }

    async def _run() -> None:
        snapshot = await TrainingLogStore(object()).async_load(PROFILE)
        assert snapshot == LogSnapshot(entries={"w1_Monday_0": True, "w1_val_Monday_0": "100"}, rev=7)

    asyncio.run(_run())


def test_load_error_becomes_sync_failure(fake_store: type[_FakeStore]) -> None:
    fake_store.fail_load = OSError("disk gone")

    async def _run() -> None:
        with pytest.raises(SyncFailure, match="disk gone"):
            await TrainingLogStore(object()).async_load(PROFILE)

    asyncio.run(_run())


def test_every_save_bumps_rev(fake_store: type[_FakeStore]) -> None:
    fake_store.disk[_key()] = {"schema": 1, "rev": 3, "logs": {}}

    async def _run() -> None:
        store = TrainingLogStore(object())
        first = await store.async_save(PROFILE, {"w1_Monday_0": True})
        second = await store.async_save(PROFILE, {"w1_Monday_0": True, "bad": None})
        assert (first.rev, second.rev) == (4, 5)
        assert second.entries == {"w1_Monday_0": True}
        assert fake_store.disk[_key()]["rev"] == 5
        assert fake_store.disk[_key()]["logs"] == {"w1_Monday_0": True}
        assert store.updated_at(PROFILE)

    asyncio.run(_run())


def test_overlapping_saves_get_distinct_revs_in_write_order(fake_store: type[_FakeStore]) -> None:
    async def _run() -> None:
        store = TrainingLogStore(object())
        first, second = await asyncio.gather(
            store.async_save(PROFILE, {"w1_val_Monday_0": "60"}),
            store.async_save(PROFILE, {"w1_val_Thursday_0": "80"}),
        )
        assert sorted([first.rev, second.rev]) == [1, 2]
        assert [w["rev"] for w in fake_store.writes] == [1, 2]
        latest = first if first.rev == 2 else second
        assert fake_store.disk[_key()]["logs"] == dict(latest.entries)
        assert await store.async_load(PROFILE) == latest

    asyncio.run(_run())


def test_failed_save_raises_and_keeps_previous_state(fake_store: type[_FakeStore]) -> None:
    fake_store.disk[_key()] = {"schema": 1, "rev": 2, "logs": {"w1_Monday_0": True}}

    async def _run() -> None:
        store = TrainingLogStore(object())
        fake_store.fail_save = OSError("read-only")
        with pytest.raises(SyncFailure):
            await store.async_save(PROFILE, {})
        assert await store.async_load(PROFILE) == LogSnapshot(entries={"w1_Monday_0": True}, rev=2)

        fake_store.fail_save = None
        assert (await store.async_save(PROFILE, {})).rev == 3

    asyncio.run(_run())


def test_saves_reach_every_subscriber_of_the_profile(fake_store: type[_FakeStore]) -> None:
    async def _run() -> None:
        store = TrainingLogStore(object())
        seen_a: list[LogSnapshot] = []
        seen_b: list[LogSnapshot] = []
        other: list[LogSnapshot] = []
        store.async_subscribe(PROFILE, seen_a.append)
        unsub_b = store.async_subscribe(PROFILE, seen_b.append)
        store.async_subscribe("someone_else", other.append)

        saved = await store.async_save(PROFILE, {"w1_Monday_0": True})
        unsub_b()
        await store.async_save(PROFILE, {})

        assert [s.rev for s in seen_a] == [1, 2]
        assert seen_b == [saved]
        assert other == []

    asyncio.run(_run())


def test_sessions_sharing_a_profile_converge_on_the_stored_log(fake_store: type[_FakeStore]) -> None:
    async def _run() -> None:
        store = TrainingLogStore(object())
        a = TrainingLogSession(store)
        b = TrainingLogSession(store)
        await a.async_set_identity(PROFILE)
        await b.async_set_identity(PROFILE)

        await asyncio.gather(
            a.async_set_value(1, Day.MONDAY, 0, "60"),
            b.async_set_value(1, Day.THURSDAY, 0, "80"),
        )
        await _drain()

        stored = await store.async_load(PROFILE)
        assert stored is not None
        assert stored.rev == 2
        assert a.rev == b.rev == stored.rev
        assert a.log.as_dict() == b.log.as_dict() == dict(stored.entries)
        assert not a.has_pending_changes
        assert not b.has_pending_changes

        # The next edit builds on what both now hold.
        await a.async_set_completion(1, Day.SATURDAY, 0, True)
        await _drain()
        assert b.log.as_dict() == a.log.as_dict() == fake_store.disk[_key()]["logs"]
        assert b.get_completion(1, Day.SATURDAY, 0) is True

    asyncio.run(_run())
