"""Diagnostics support for Training Log.

This file is picked up by Home Assistant automatically when present.
"""

from __future__ import annotations

from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from .const import CONF_PROFILE_ID, DOMAIN
from .coordinator import TrainingLogCoordinator


def _redact(value: Any) -> Any:
    if value is None:
        return None
    raw = str(value)
    if not raw:
        return ""
    if len(raw) <= 4:
        return "***"
    return f"{raw[:2]}***{raw[-2:]}"


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant,
    entry: ConfigEntry,
) -> dict[str, Any]:
    """Return diagnostics for a config entry (profile id redacted, log summarized)."""
    coordinator = hass.data.get(DOMAIN, {}).get(entry.entry_id)
    data = dict(entry.data)
    data[CONF_PROFILE_ID] = _redact(data.get(CONF_PROFILE_ID))
    options = dict(entry.options)
    if CONF_PROFILE_ID in options:
        options[CONF_PROFILE_ID] = _redact(options.get(CONF_PROFILE_ID))

    payload: dict[str, Any] = {
        "entry": {
            "entry_id": entry.entry_id,
            "title": entry.title,
            "version": entry.version,
            "data": data,
            "options": options,
        },
    }

    if isinstance(coordinator, TrainingLogCoordinator):
        session = coordinator.session
        payload["coordinator"] = {
            "last_update_success": bool(getattr(coordinator, "last_update_success", False)),
            "last_exception": repr(getattr(coordinator, "last_exception", None)),
            "current_week": coordinator.current_week,
        }
        payload["session"] = {
            "identity_bound": session.user_id is not None,
            "rev": session.rev,
            "entries": len(session.log),
            "pending_changes": session.has_pending_changes,
            "sync_warning": session.sync_warning,
        }

    return payload
