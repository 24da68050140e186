"""Constants for Training Log integration."""

from __future__ import annotations

from homeassistant.const import Platform

DOMAIN = "training_log"

PLATFORMS: list[Platform] = [
    Platform.BUTTON,
    Platform.SENSOR,
    Platform.NUMBER,
]

CONF_NAME = "name"
CONF_PROFILE_ID = "profile_id"
CONF_START_WEEK = "start_week"

DEFAULT_NAME = "Training Log"
DEFAULT_START_WEEK = 1

SIGNAL_LOG_UPDATED = f"{DOMAIN}_log_updated"
SIGNAL_WEEK_CHANGED = f"{DOMAIN}_week_changed"
