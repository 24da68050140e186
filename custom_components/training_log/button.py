"""Button platform for Training Log."""

from __future__ import annotations

from homeassistant.components.button import ButtonEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import DOMAIN
from .coordinator import TrainingLogCoordinator
from .entity import device_info_from_entry


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    coordinator: TrainingLogCoordinator = hass.data[DOMAIN][entry.entry_id]
    async_add_entities(
        [
            WeekStepButton(entry, coordinator, step=-1),
            WeekStepButton(entry, coordinator, step=1),
        ]
    )


class WeekStepButton(ButtonEntity):
    """Move the selected week back or forward by one (clamped to the plan)."""

    _attr_has_entity_name = True

    def __init__(self, entry: ConfigEntry, coordinator: TrainingLogCoordinator, *, step: int) -> None:
        self._entry = entry
        self._coordinator = coordinator
        self._step = step
        direction = "next" if step > 0 else "previous"
        self._attr_name = f"{direction.capitalize()} week"
        self._attr_icon = "mdi:chevron-right" if step > 0 else "mdi:chevron-left"
        self._attr_translation_key = f"{direction}_week"
        self._attr_unique_id = f"{entry.entry_id}_{direction}_week"
        self._attr_device_info = device_info_from_entry(entry)

    async def async_press(self) -> None:
        self._coordinator.async_set_week(self._coordinator.current_week + self._step)
