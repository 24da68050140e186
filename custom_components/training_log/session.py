"""Training log session.

A session is the single owner of one profile's LogStore inside this process.
Local edits apply to the working copy at once; persisting and applying remote
snapshots then run one at a time under a FIFO lock, which is the ordered
update stream both sides share.

Revisions come from the sync adapter. The revision of every successful save
is recorded before the lock is released, so echoes of our own saves and
snapshots older than the last applied one are ignored instead of rolling the
working copy back.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from .keys import Day
from .log import LogStore
from .personal_bests import PersonalBest, derive_personal_bests
from .progress import WeekProgress, week_progress
from .sync import LogSnapshot, SyncAdapter, SyncFailure

_LOGGER = logging.getLogger(__name__)


class TrainingLogSession:
    """Working copy of a training log mirrored to a sync adapter."""

    def __init__(self, adapter: SyncAdapter) -> None:
        self._adapter = adapter
        self._log = LogStore.empty()
        self._user_id: str | None = None
        self._rev = 0
        # Local change counter vs. the last counter value that reached storage.
        self._generation = 0
        self._saved_generation = 0
        # False until storage has been read for the bound profile; no save may
        # overwrite history that was never seen.
        self._loaded = False
        self._lock = asyncio.Lock()
        self._listeners: list[Callable[[], None]] = []
        self._unsub: Callable[[], None] | None = None
        self._remote_tasks: set[asyncio.Task] = set()
        self.sync_warning: str | None = None

    @property
    def user_id(self) -> str | None:
        return self._user_id

    @property
    def log(self) -> LogStore:
        return self._log

    @property
    def rev(self) -> int:
        return self._rev

    @property
    def has_pending_changes(self) -> bool:
        return self._generation > self._saved_generation

    # Listeners

    def async_add_listener(self, callback: Callable[[], None]) -> Callable[[], None]:
        self._listeners.append(callback)

        def _remove() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return _remove

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback()

    def _set_warning(self, message: str) -> None:
        _LOGGER.warning("Training log sync failed for profile %s: %s", self._user_id, message)
        self.sync_warning = message
        self._notify()

    def _clear_warning(self) -> None:
        if self.sync_warning is not None:
            self.sync_warning = None
            self._notify()

    # Identity / lifecycle

    async def async_set_identity(self, user_id: str | None) -> None:
        """Bind the session to a profile: subscribe, then load its snapshot."""
        user_id = str(user_id or "").strip()
        if not user_id or user_id == self._user_id:
            return
        self._unsubscribe()
        if self._user_id is not None:
            # Nothing of the previous profile may leak into the new one.
            self._log = LogStore.empty()
            self._saved_generation = self._generation
        self._user_id = user_id
        self._rev = 0
        self._loaded = False
        self._unsub = self._adapter.async_subscribe(user_id, self.handle_remote_snapshot)

        async with self._lock:
            loaded = await self._async_load()
        if loaded:
            self._clear_warning()
        self._notify()

    async def _async_load(self) -> bool:
        """Read the stored snapshot into the working copy. Caller holds the lock.

        Stored history wins over edits made before the first successful load;
        with nothing stored yet, those edits are kept and saved next.
        """
        try:
            snapshot = await self._adapter.async_load(self._user_id)
        except SyncFailure as err:
            self._set_warning(f"load failed: {err}")
            return False
        self._loaded = True
        if snapshot is None:
            _LOGGER.debug("No stored log for profile %s; starting empty", self._user_id)
            if not self.has_pending_changes:
                self._apply_snapshot(LogSnapshot())
            return True
        if self.has_pending_changes:
            _LOGGER.warning(
                "Stored log for profile %s replaces %s unsaved local change(s)",
                self._user_id,
                self._generation - self._saved_generation,
            )
        self._apply_snapshot(snapshot)
        return True

    async def async_stop(self) -> None:
        self._unsubscribe()

    def _unsubscribe(self) -> None:
        if self._unsub:
            self._unsub()
            self._unsub = None
        for task in list(self._remote_tasks):
            task.cancel()
        self._remote_tasks.clear()

    # Reads

    def get_completion(self, week: int, day: Day | str, task_index: int) -> bool:
        return self._log.get_completion(week, day, task_index)

    def get_value(self, week: int, day: Day | str, task_index: int) -> str:
        return self._log.get_value(week, day, task_index)

    def personal_bests(self) -> dict[str, PersonalBest]:
        return derive_personal_bests(self._log)

    def week_progress(self, week: int) -> WeekProgress:
        return week_progress(self._log, week)

    # Mutations

    async def async_set_completion(self, week: int, day: Day | str, task_index: int, completed: bool) -> LogStore:
        return await self._async_mutate(lambda log: log.set_completion(week, day, task_index, completed))

    async def async_toggle_completion(self, week: int, day: Day | str, task_index: int) -> LogStore:
        return await self._async_mutate(lambda log: log.toggle_completion(week, day, task_index))

    async def async_set_value(self, week: int, day: Day | str, task_index: int, value: str) -> LogStore:
        return await self._async_mutate(lambda log: log.set_value(week, day, task_index, value))

    async def async_reset(self) -> LogStore:
        """Wipe the whole log, locally and in storage."""
        return await self._async_mutate(lambda log: log.reset())

    async def _async_mutate(self, change: Callable[[LogStore], LogStore]) -> LogStore:
        if self._user_id is None:
            _LOGGER.debug("No profile bound yet; ignoring log change")
            return self._log
        self._log = change(self._log)
        self._generation += 1
        result = self._log
        self._notify()
        await self.async_flush()
        return result

    async def async_flush(self) -> bool:
        """Persist the current working copy if it has unsaved changes.

        Whatever is current when the lock is acquired gets written, so a save
        queued behind newer edits never writes a stale copy. If the profile
        was never loaded, the load is retried first and nothing is saved until
        it succeeds. Returns False if the adapter failed; the local copy is
        kept for the next attempt.
        """
        if self._user_id is None:
            return True
        async with self._lock:
            if not self._loaded:
                log = self._log
                if not await self._async_load():
                    return False
                if self._log is not log:
                    self._notify()
            if not self.has_pending_changes:
                self._clear_warning()
                return True
            generation = self._generation
            try:
                snapshot = await self._adapter.async_save(self._user_id, self._log.as_dict())
            except SyncFailure as err:
                self._set_warning(f"save failed: {err}")
                return False
            self._saved_generation = max(self._saved_generation, generation)
            self._rev = max(self._rev, snapshot.rev)
        self._clear_warning()
        return True

    # Remote snapshots

    def handle_remote_snapshot(self, snapshot: LogSnapshot) -> None:
        """Subscription callback; queues the snapshot on the ordered stream."""
        task = asyncio.get_running_loop().create_task(self._async_apply_remote(snapshot))
        self._remote_tasks.add(task)
        task.add_done_callback(self._remote_tasks.discard)

    async def _async_apply_remote(self, snapshot: LogSnapshot) -> None:
        async with self._lock:
            if snapshot.rev <= self._rev:
                _LOGGER.debug("Ignoring snapshot rev=%s (have rev=%s)", snapshot.rev, self._rev)
                return
            self._loaded = True
            changed = self._apply_snapshot(snapshot)
        if changed:
            self._notify()

    def _apply_snapshot(self, snapshot: LogSnapshot) -> bool:
        """Replace the working copy wholesale. Caller holds the lock."""
        self._rev = max(self._rev, snapshot.rev)
        # Stored state is authoritative once seen; pending local edits are dropped.
        self._saved_generation = self._generation
        if self._log.as_dict() == dict(snapshot.entries):
            return False
        self._log = self._log.replace_all(snapshot.entries)
        return True
