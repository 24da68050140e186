"""Coordinator for Training Log."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.dispatcher import async_dispatcher_send
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator

from .const import (
    CONF_PROFILE_ID,
    CONF_START_WEEK,
    DEFAULT_START_WEEK,
    DOMAIN,
    SIGNAL_WEEK_CHANGED,
)
from .keys import MAX_WEEK, MIN_WEEK
from .session import TrainingLogSession
from .storage import TrainingLogStore
from .ws_state import public_state

_LOGGER = logging.getLogger(__name__)


def clamp_week(value: Any) -> int:
    try:
        week = int(value)
    except (TypeError, ValueError):
        return DEFAULT_START_WEEK
    return max(MIN_WEEK, min(MAX_WEEK, week))


class TrainingLogCoordinator(DataUpdateCoordinator[dict[str, Any]]):
    """Owns the log session of one config entry and publishes derived state."""

    def __init__(self, hass: HomeAssistant, entry: ConfigEntry, store: TrainingLogStore) -> None:
        self.entry = entry
        self.store = store
        self.session = TrainingLogSession(store)
        self.current_week = clamp_week(
            entry.options.get(CONF_START_WEEK, entry.data.get(CONF_START_WEEK, DEFAULT_START_WEEK))
        )
        self._remove_session_listener = self.session.async_add_listener(self._handle_session_changed)

        super().__init__(
            hass,
            logger=_LOGGER,
            name=f"{DOMAIN}_{entry.entry_id}",
            # Periodic refresh retries saves that failed earlier.
            update_interval=timedelta(minutes=5),
        )

    @property
    def profile_id(self) -> str:
        opts = self.entry.options or {}
        data = self.entry.data or {}
        return str(opts.get(CONF_PROFILE_ID, data.get(CONF_PROFILE_ID, "")) or "").strip()

    def build_state(self, *, week: int | None = None) -> dict[str, Any]:
        return public_state(self.session, week=clamp_week(week if week is not None else self.current_week))

    async def _async_update_data(self) -> dict[str, Any]:
        # Identity may only be known after setup; binding is a no-op once done.
        if self.session.user_id is None and self.profile_id:
            await self.session.async_set_identity(self.profile_id)
        # Retries a failed load first, then any save that is still pending.
        await self.session.async_flush()
        return self.build_state()

    @callback
    def _handle_session_changed(self) -> None:
        self.async_set_updated_data(self.build_state())

    @callback
    def async_set_week(self, week: int) -> None:
        week = clamp_week(week)
        if week == self.current_week:
            return
        self.current_week = week
        self.async_set_updated_data(self.build_state())
        async_dispatcher_send(self.hass, f"{SIGNAL_WEEK_CHANGED}_{self.entry.entry_id}")

    async def async_shutdown(self) -> None:
        self._remove_session_listener()
        await self.session.async_stop()
        await super().async_shutdown()
