"""Number platform for Training Log."""

from __future__ import annotations

from homeassistant.components.number import NumberEntity, NumberMode
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.dispatcher import async_dispatcher_connect
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import DOMAIN, SIGNAL_WEEK_CHANGED
from .coordinator import TrainingLogCoordinator
from .entity import device_info_from_entry
from .keys import MAX_WEEK, MIN_WEEK


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    coordinator: TrainingLogCoordinator = hass.data[DOMAIN][entry.entry_id]
    async_add_entities([SelectedWeekNumber(entry, coordinator)])


class SelectedWeekNumber(NumberEntity):
    """Week of the plan the log controls and progress sensor point at."""

    _attr_has_entity_name = True
    _attr_name = "Week"
    _attr_icon = "mdi:calendar-week"
    _attr_translation_key = "selected_week"
    _attr_native_min_value = MIN_WEEK
    _attr_native_max_value = MAX_WEEK
    _attr_native_step = 1
    _attr_mode = NumberMode.BOX

    def __init__(self, entry: ConfigEntry, coordinator: TrainingLogCoordinator) -> None:
        self._entry = entry
        self._coordinator = coordinator
        self._attr_unique_id = f"{entry.entry_id}_selected_week"
        self._attr_device_info = device_info_from_entry(entry)
        self._unsub = None

    async def async_added_to_hass(self) -> None:
        self._unsub = async_dispatcher_connect(
            self.hass,
            f"{SIGNAL_WEEK_CHANGED}_{self._entry.entry_id}",
            self._handle_week_changed,
        )

    async def async_will_remove_from_hass(self) -> None:
        if self._unsub:
            self._unsub()
            self._unsub = None

    @property
    def native_value(self) -> float:
        return float(self._coordinator.current_week)

    async def async_set_native_value(self, value: float) -> None:
        self._coordinator.async_set_week(int(value))
        self.async_write_ha_state()

    @callback
    def _handle_week_changed(self) -> None:
        self.async_write_ha_state()
