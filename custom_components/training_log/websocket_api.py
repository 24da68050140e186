"""Websocket API for Training Log."""

from __future__ import annotations

from typing import Any

import voluptuous as vol

from homeassistant.components import websocket_api
from homeassistant.core import HomeAssistant
from homeassistant.util import dt as dt_util

from .const import DOMAIN
from .coordinator import TrainingLogCoordinator, clamp_week
from .keys import MAX_WEEK, MIN_WEEK, Day
from .ws_state import public_state

_DAY_CHOICES = [d.value for d in Day]
_WEEK = vol.All(vol.Coerce(int), vol.Range(min=MIN_WEEK, max=MAX_WEEK))
_TASK_INDEX = vol.All(vol.Coerce(int), vol.Range(min=0))


def _runtime_payload(coordinator: TrainingLogCoordinator) -> dict[str, Any]:
    return {
        "now": dt_util.as_local(dt_util.utcnow()).isoformat(),
        "current_week": coordinator.current_week,
        "updated_at": coordinator.store.updated_at(coordinator.session.user_id or ""),
    }


def _coordinator_or_error(
    hass: HomeAssistant,
    connection: websocket_api.ActiveConnection,
    msg: dict[str, Any],
) -> TrainingLogCoordinator | None:
    entry_id = msg["entry_id"]
    coordinator = hass.data.get(DOMAIN, {}).get(entry_id)
    if not isinstance(coordinator, TrainingLogCoordinator):
        connection.send_error(msg["id"], "entry_not_found", f"No entry found for entry_id={entry_id}")
        return None
    return coordinator


def _send_state(
    connection: websocket_api.ActiveConnection,
    msg: dict[str, Any],
    coordinator: TrainingLogCoordinator,
    *,
    week: int | None = None,
) -> None:
    week = clamp_week(week if week is not None else coordinator.current_week)
    connection.send_result(
        msg["id"],
        {
            "entry_id": msg["entry_id"],
            "state": public_state(coordinator.session, week=week, runtime=_runtime_payload(coordinator)),
        },
    )


@websocket_api.websocket_command({vol.Required("type"): "training_log/list_entries"})
@websocket_api.async_response
async def ws_list_entries(
    hass: HomeAssistant,
    connection: websocket_api.ActiveConnection,
    msg: dict[str, Any],
) -> None:
    entries = hass.config_entries.async_entries(DOMAIN)
    payload = [{"entry_id": entry.entry_id, "title": entry.title} for entry in entries]
    connection.send_result(msg["id"], {"entries": payload})


@websocket_api.websocket_command(
    {
        vol.Required("type"): "training_log/get_state",
        vol.Required("entry_id"): str,
        vol.Optional("week"): _WEEK,
    }
)
@websocket_api.async_response
async def ws_get_state(
    hass: HomeAssistant,
    connection: websocket_api.ActiveConnection,
    msg: dict[str, Any],
) -> None:
    coordinator = _coordinator_or_error(hass, connection, msg)
    if coordinator is None:
        return
    _send_state(connection, msg, coordinator, week=msg.get("week"))


@websocket_api.websocket_command(
    {
        vol.Required("type"): "training_log/get_week",
        vol.Required("entry_id"): str,
        vol.Required("week"): _WEEK,
    }
)
@websocket_api.async_response
async def ws_get_week(
    hass: HomeAssistant,
    connection: websocket_api.ActiveConnection,
    msg: dict[str, Any],
) -> None:
    coordinator = _coordinator_or_error(hass, connection, msg)
    if coordinator is None:
        return
    progress = coordinator.session.week_progress(int(msg["week"]))
    connection.send_result(msg["id"], {"entry_id": msg["entry_id"], "week": progress.as_dict()})


@websocket_api.websocket_command(
    {
        vol.Required("type"): "training_log/set_completed",
        vol.Required("entry_id"): str,
        vol.Required("week"): _WEEK,
        vol.Required("day"): vol.In(_DAY_CHOICES),
        vol.Required("task_index"): _TASK_INDEX,
        vol.Optional("completed"): bool,
    }
)
@websocket_api.async_response
async def ws_set_completed(
    hass: HomeAssistant,
    connection: websocket_api.ActiveConnection,
    msg: dict[str, Any],
) -> None:
    coordinator = _coordinator_or_error(hass, connection, msg)
    if coordinator is None:
        return
    week, day, index = int(msg["week"]), str(msg["day"]), int(msg["task_index"])
    try:
        if "completed" in msg:
            await coordinator.session.async_set_completion(week, day, index, bool(msg["completed"]))
        else:
            await coordinator.session.async_toggle_completion(week, day, index)
    except ValueError as e:
        connection.send_error(msg["id"], "invalid_format", str(e))
        return
    _send_state(connection, msg, coordinator, week=week)


@websocket_api.websocket_command(
    {
        vol.Required("type"): "training_log/set_value",
        vol.Required("entry_id"): str,
        vol.Required("week"): _WEEK,
        vol.Required("day"): vol.In(_DAY_CHOICES),
        vol.Required("task_index"): _TASK_INDEX,
        vol.Required("value"): vol.Coerce(str),
    }
)
@websocket_api.async_response
async def ws_set_value(
    hass: HomeAssistant,
    connection: websocket_api.ActiveConnection,
    msg: dict[str, Any],
) -> None:
    coordinator = _coordinator_or_error(hass, connection, msg)
    if coordinator is None:
        return
    week = int(msg["week"])
    try:
        await coordinator.session.async_set_value(week, str(msg["day"]), int(msg["task_index"]), str(msg["value"]))
    except ValueError as e:
        connection.send_error(msg["id"], "invalid_format", str(e))
        return
    _send_state(connection, msg, coordinator, week=week)


@websocket_api.websocket_command(
    {
        vol.Required("type"): "training_log/reset",
        vol.Required("entry_id"): str,
    }
)
@websocket_api.async_response
async def ws_reset(
    hass: HomeAssistant,
    connection: websocket_api.ActiveConnection,
    msg: dict[str, Any],
) -> None:
    coordinator = _coordinator_or_error(hass, connection, msg)
    if coordinator is None:
        return
    await coordinator.session.async_reset()
    _send_state(connection, msg, coordinator)


def async_register(hass: HomeAssistant) -> None:
    websocket_api.async_register_command(hass, ws_list_entries)
    websocket_api.async_register_command(hass, ws_get_state)
    websocket_api.async_register_command(hass, ws_get_week)
    websocket_api.async_register_command(hass, ws_set_completed)
    websocket_api.async_register_command(hass, ws_set_value)
    websocket_api.async_register_command(hass, ws_reset)
