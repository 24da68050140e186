"""Storage for Training Log (.storage).

One Store file per profile, schema v1:
- logs: flat mapping of log keys to payloads (see keys.py), the sync format
- rev: monotonic revision, bumped on every save; saves of one profile are
  serialized so every save gets its own rev
- updated_at: ISO timestamp of the last save

Every save is broadcast on the dispatcher so all sessions bound to the same
profile (other config entries, the websocket UI) see it, the writer included.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

from homeassistant.core import HomeAssistant, callback
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.dispatcher import async_dispatcher_connect, async_dispatcher_send
from homeassistant.helpers.storage import Store

from .const import DOMAIN, SIGNAL_LOG_UPDATED
from .sync import LogSnapshot, SnapshotCallback, SyncFailure

_LOGGER = logging.getLogger(__name__)

_STORAGE_VERSION = 1


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


def _signal(user_id: str) -> str:
    return f"{SIGNAL_LOG_UPDATED}_{user_id}"


def _clean_entries(raw: Any) -> dict[str, Any]:
    if not isinstance(raw, dict):
        return {}
    return {str(k): v for k, v in raw.items() if isinstance(v, (bool, str, int, float))}


class TrainingLogStore:
    """Home Assistant backed sync adapter, shared by all entries of the domain."""

    def __init__(self, hass: HomeAssistant) -> None:
        self._hass = hass
        self._stores: dict[str, Store[dict[str, Any]]] = {}
        self._data: dict[str, dict[str, Any]] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def _lock_for(self, user_id: str) -> asyncio.Lock:
        return self._locks.setdefault(user_id, asyncio.Lock())

    def _store_for(self, user_id: str) -> Store[dict[str, Any]]:
        store = self._stores.get(user_id)
        if store is None:
            store = Store(self._hass, _STORAGE_VERSION, f"{DOMAIN}_{user_id}")
            self._stores[user_id] = store
        return store

    async def _async_state(self, user_id: str) -> dict[str, Any] | None:
        if user_id not in self._data:
            try:
                loaded = await self._store_for(user_id).async_load()
            except (HomeAssistantError, OSError, ValueError) as err:
                raise SyncFailure(str(err)) from err
            if not isinstance(loaded, dict):
                return None
            loaded.setdefault("schema", 1)
            loaded["rev"] = int(loaded.get("rev") or 0)
            loaded["logs"] = _clean_entries(loaded.get("logs"))
            loaded.setdefault("updated_at", "")
            # A save may have claimed a newer state while the file was read.
            return self._data.setdefault(user_id, loaded)
        return self._data[user_id]

    async def async_load(self, user_id: str) -> LogSnapshot | None:
        state = await self._async_state(user_id)
        if state is None:
            return None
        return LogSnapshot(entries=dict(state["logs"]), rev=int(state["rev"]))

    async def async_save(self, user_id: str, entries: Mapping[str, Any]) -> LogSnapshot:
        logs = _clean_entries(dict(entries))
        async with self._lock_for(user_id):
            state = await self._async_state(user_id) or {}
            next_state = {
                "schema": 1,
                "rev": int(state.get("rev") or 0) + 1,
                "updated_at": _now_iso(),
                "logs": logs,
            }
            # Claim the revision before writing.
            self._data[user_id] = next_state
            try:
                await self._store_for(user_id).async_save(next_state)
            except (HomeAssistantError, OSError, ValueError) as err:
                if state:
                    self._data[user_id] = state
                else:
                    self._data.pop(user_id, None)
                raise SyncFailure(str(err)) from err
        snapshot = LogSnapshot(entries=dict(logs), rev=next_state["rev"])
        _LOGGER.debug("Saved log for profile %s (rev=%s, %s entries)", user_id, snapshot.rev, len(snapshot.entries))
        async_dispatcher_send(self._hass, _signal(user_id), snapshot)
        return snapshot

    @callback
    def async_subscribe(self, user_id: str, callback_: SnapshotCallback) -> Callable[[], None]:
        # Run in the event loop; a plain function would be sent to the executor.
        @callback
        def _forward(snapshot: LogSnapshot) -> None:
            callback_(snapshot)

        return async_dispatcher_connect(self._hass, _signal(user_id), _forward)

    def updated_at(self, user_id: str) -> str:
        state = self._data.get(user_id) or {}
        return str(state.get("updated_at") or "")
