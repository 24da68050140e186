"""Services for Training Log."""

from __future__ import annotations

import voluptuous as vol

from homeassistant.core import HomeAssistant, ServiceCall, ServiceResponse, SupportsResponse

from .const import DOMAIN
from .coordinator import TrainingLogCoordinator
from .keys import MAX_WEEK, MIN_WEEK, Day
from .ws_state import personal_bests_payload

SERVICE_SET_TASK_COMPLETED = "set_task_completed"
SERVICE_SET_TASK_VALUE = "set_task_value"
SERVICE_RESET_LOG = "reset_log"
SERVICE_GET_LOG = "get_log"
SERVICE_GET_PERSONAL_BESTS = "get_personal_bests"
SERVICE_GET_WEEK = "get_week"

DAY_CHOICES = [d.value for d in Day]

_WEEK = vol.All(vol.Coerce(int), vol.Range(min=MIN_WEEK, max=MAX_WEEK))
_TASK_INDEX = vol.All(vol.Coerce(int), vol.Range(min=0))

_ENTRY_SCHEMA = vol.Schema({vol.Required("entry_id"): str})
_WEEK_SCHEMA = vol.Schema({vol.Required("entry_id"): str, vol.Optional("week"): _WEEK})
_SET_COMPLETED_SCHEMA = vol.Schema(
    {
        vol.Required("entry_id"): str,
        vol.Required("week"): _WEEK,
        vol.Required("day"): vol.In(DAY_CHOICES),
        vol.Required("task_index"): _TASK_INDEX,
        # Omitted = toggle.
        vol.Optional("completed"): bool,
    }
)
_SET_VALUE_SCHEMA = vol.Schema(
    {
        vol.Required("entry_id"): str,
        vol.Required("week"): _WEEK,
        vol.Required("day"): vol.In(DAY_CHOICES),
        vol.Required("task_index"): _TASK_INDEX,
        vol.Required("value"): vol.Coerce(str),
    }
)
_RESET_SCHEMA = vol.Schema({vol.Required("entry_id"): str, vol.Required("confirm"): bool})


def coordinator_for_entry(hass: HomeAssistant, entry_id: str) -> TrainingLogCoordinator | None:
    coordinator = hass.data.get(DOMAIN, {}).get(entry_id)
    return coordinator if isinstance(coordinator, TrainingLogCoordinator) else None


async def async_register(hass: HomeAssistant) -> None:
    async def _async_set_task_completed(call: ServiceCall) -> ServiceResponse:
        entry_id = str(call.data["entry_id"])
        coordinator = coordinator_for_entry(hass, entry_id)
        if coordinator is None:
            return {"ok": False, "error": "entry_not_found"}
        week = int(call.data["week"])
        day = str(call.data["day"])
        index = int(call.data["task_index"])
        if "completed" in call.data:
            await coordinator.session.async_set_completion(week, day, index, bool(call.data["completed"]))
        else:
            await coordinator.session.async_toggle_completion(week, day, index)
        return {
            "ok": True,
            "entry_id": entry_id,
            "completed": coordinator.session.get_completion(week, day, index),
            "sync_warning": coordinator.session.sync_warning,
        }

    async def _async_set_task_value(call: ServiceCall) -> ServiceResponse:
        entry_id = str(call.data["entry_id"])
        coordinator = coordinator_for_entry(hass, entry_id)
        if coordinator is None:
            return {"ok": False, "error": "entry_not_found"}
        week = int(call.data["week"])
        day = str(call.data["day"])
        index = int(call.data["task_index"])
        await coordinator.session.async_set_value(week, day, index, str(call.data["value"]))
        return {
            "ok": True,
            "entry_id": entry_id,
            "value": coordinator.session.get_value(week, day, index),
            "sync_warning": coordinator.session.sync_warning,
        }

    async def _async_reset_log(call: ServiceCall) -> ServiceResponse:
        entry_id = str(call.data["entry_id"])
        coordinator = coordinator_for_entry(hass, entry_id)
        if coordinator is None:
            return {"ok": False, "error": "entry_not_found"}
        if not call.data["confirm"]:
            return {"ok": False, "error": "not_confirmed"}
        await coordinator.session.async_reset()
        return {"ok": True, "entry_id": entry_id, "sync_warning": coordinator.session.sync_warning}

    async def _async_get_log(call: ServiceCall) -> ServiceResponse:
        entry_id = str(call.data["entry_id"])
        coordinator = coordinator_for_entry(hass, entry_id)
        if coordinator is None:
            return {"ok": False, "error": "entry_not_found"}
        return {"ok": True, "entry_id": entry_id, "rev": coordinator.session.rev, "logs": coordinator.session.log.as_dict()}

    async def _async_get_personal_bests(call: ServiceCall) -> ServiceResponse:
        entry_id = str(call.data["entry_id"])
        coordinator = coordinator_for_entry(hass, entry_id)
        if coordinator is None:
            return {"ok": False, "error": "entry_not_found"}
        return {"ok": True, "entry_id": entry_id, "personal_bests": personal_bests_payload(coordinator.session)}

    async def _async_get_week(call: ServiceCall) -> ServiceResponse:
        entry_id = str(call.data["entry_id"])
        coordinator = coordinator_for_entry(hass, entry_id)
        if coordinator is None:
            return {"ok": False, "error": "entry_not_found"}
        week = int(call.data.get("week") or coordinator.current_week)
        return {"ok": True, "entry_id": entry_id, "week": coordinator.session.week_progress(week).as_dict()}

    registrations = (
        (SERVICE_SET_TASK_COMPLETED, _async_set_task_completed, _SET_COMPLETED_SCHEMA, SupportsResponse.OPTIONAL),
        (SERVICE_SET_TASK_VALUE, _async_set_task_value, _SET_VALUE_SCHEMA, SupportsResponse.OPTIONAL),
        (SERVICE_RESET_LOG, _async_reset_log, _RESET_SCHEMA, SupportsResponse.OPTIONAL),
        (SERVICE_GET_LOG, _async_get_log, _ENTRY_SCHEMA, SupportsResponse.ONLY),
        (SERVICE_GET_PERSONAL_BESTS, _async_get_personal_bests, _ENTRY_SCHEMA, SupportsResponse.ONLY),
        (SERVICE_GET_WEEK, _async_get_week, _WEEK_SCHEMA, SupportsResponse.ONLY),
    )
    for service, handler, schema, supports_response in registrations:
        if not hass.services.has_service(DOMAIN, service):
            hass.services.async_register(
                DOMAIN,
                service,
                handler,
                schema=schema,
                supports_response=supports_response,
            )
