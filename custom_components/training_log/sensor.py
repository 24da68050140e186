"""Sensor platform for Training Log."""

from __future__ import annotations

from typing import Any

from homeassistant.components.sensor import SensorEntity, SensorStateClass
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import PERCENTAGE
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import DOMAIN
from .coordinator import TrainingLogCoordinator
from .curriculum import TRACKED_EXERCISES, Direction, TrackedExercise
from .entity import device_info_from_entry


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    coordinator: TrainingLogCoordinator = hass.data[DOMAIN][entry.entry_id]
    entities: list[SensorEntity] = [PersonalBestSensor(entry, coordinator, ex) for ex in TRACKED_EXERCISES]
    entities.append(WeekProgressSensor(entry, coordinator))
    async_add_entities(entities)


class PersonalBestSensor(CoordinatorEntity[TrainingLogCoordinator], SensorEntity):
    """Best logged value for one tracked exercise."""

    _attr_has_entity_name = True
    _attr_state_class = SensorStateClass.MEASUREMENT

    def __init__(self, entry: ConfigEntry, coordinator: TrainingLogCoordinator, exercise: TrackedExercise) -> None:
        super().__init__(coordinator)
        self._exercise = exercise
        self._attr_name = f"{exercise.label} personal best"
        self._attr_unique_id = f"{entry.entry_id}_pb_{exercise.key}"
        self._attr_translation_key = f"pb_{exercise.key}"
        self._attr_native_unit_of_measurement = exercise.unit
        self._attr_icon = "mdi:timer" if exercise.direction is Direction.LOWER_IS_BETTER else "mdi:dumbbell"
        self._attr_device_info = device_info_from_entry(entry)

    def _record(self) -> dict[str, Any]:
        data = self.coordinator.data or {}
        bests = data.get("personal_bests") if isinstance(data.get("personal_bests"), dict) else {}
        record = bests.get(self._exercise.key)
        return record if isinstance(record, dict) else {}

    @property
    def native_value(self) -> float | None:
        # None renders as "unknown", the no-data state.
        return self._record().get("value")

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        return {
            "achieved_week": self._record().get("week"),
            "day": self._exercise.day.value,
            "task_index": self._exercise.task_index,
        }


class WeekProgressSensor(CoordinatorEntity[TrainingLogCoordinator], SensorEntity):
    """Share of the selected week's tasks checked off."""

    _attr_has_entity_name = True
    _attr_name = "Week progress"
    _attr_icon = "mdi:calendar-check"
    _attr_translation_key = "week_progress"
    _attr_native_unit_of_measurement = PERCENTAGE

    def __init__(self, entry: ConfigEntry, coordinator: TrainingLogCoordinator) -> None:
        super().__init__(coordinator)
        self._attr_unique_id = f"{entry.entry_id}_week_progress"
        self._attr_device_info = device_info_from_entry(entry)

    def _week(self) -> dict[str, Any]:
        data = self.coordinator.data or {}
        week = data.get("week")
        return week if isinstance(week, dict) else {}

    @property
    def native_value(self) -> float | None:
        return self._week().get("percent")

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        data = self.coordinator.data or {}
        week = self._week()
        return {
            "week": week.get("week"),
            "phase": week.get("phase"),
            "long_run_km": week.get("long_run_km"),
            "completed": week.get("completed"),
            "total": week.get("total"),
            "days": week.get("days", []),
            "rev": data.get("rev"),
            "sync_warning": data.get("sync_warning"),
        }
