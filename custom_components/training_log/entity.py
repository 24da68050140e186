"""Entity helpers for Training Log."""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntry
from homeassistant.helpers.device_registry import DeviceEntryType, DeviceInfo

from .const import CONF_NAME, CONF_PROFILE_ID, DEFAULT_NAME, DOMAIN


def device_info_from_entry(entry: ConfigEntry) -> DeviceInfo:
    """One service device per entry; entries sharing a profile still get their own device."""
    name = entry.options.get(CONF_NAME, entry.data.get(CONF_NAME, DEFAULT_NAME))
    profile = entry.options.get(CONF_PROFILE_ID, entry.data.get(CONF_PROFILE_ID, ""))
    return DeviceInfo(
        identifiers={(DOMAIN, entry.entry_id)},
        name=str(name),
        entry_type=DeviceEntryType.SERVICE,
        manufacturer="Open source",
        model=f"16-week training log ({profile})" if profile else "16-week training log",
    )
