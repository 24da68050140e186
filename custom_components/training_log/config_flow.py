"""Config flow for Training Log."""

from __future__ import annotations

from typing import Any

import voluptuous as vol

from homeassistant import config_entries
from homeassistant.core import callback
from homeassistant.util import slugify

from .const import (
    CONF_NAME,
    CONF_PROFILE_ID,
    CONF_START_WEEK,
    DEFAULT_NAME,
    DEFAULT_START_WEEK,
    DOMAIN,
)
from .keys import MAX_WEEK, MIN_WEEK

_START_WEEK = vol.All(vol.Coerce(int), vol.Range(min=MIN_WEEK, max=MAX_WEEK))


def _entry_data(user_input: dict[str, Any]) -> dict[str, Any]:
    name = str(user_input.get(CONF_NAME, DEFAULT_NAME)).strip() or DEFAULT_NAME
    profile_id = str(user_input.get(CONF_PROFILE_ID) or "").strip() or slugify(name)
    return {
        CONF_NAME: name,
        CONF_PROFILE_ID: profile_id,
        CONF_START_WEEK: int(user_input.get(CONF_START_WEEK, DEFAULT_START_WEEK)),
    }


class TrainingLogConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Handle a config flow for Training Log."""

    VERSION = 1

    async def async_step_user(self, user_input: dict[str, Any] | None = None):
        if user_input is not None:
            data = _entry_data(user_input)
            await self.async_set_unique_id(data[CONF_NAME].lower())
            self._abort_if_unique_id_configured()
            return self.async_create_entry(title=data[CONF_NAME], data=data)

        schema = vol.Schema(
            {
                vol.Required(CONF_NAME, default=DEFAULT_NAME): str,
                # Entries with the same profile share one log.
                vol.Optional(CONF_PROFILE_ID, default=""): str,
                vol.Required(CONF_START_WEEK, default=DEFAULT_START_WEEK): _START_WEEK,
            }
        )
        return self.async_show_form(step_id="user", data_schema=schema)

    @staticmethod
    @callback
    def async_get_options_flow(config_entry):
        return TrainingLogOptionsFlow()


class TrainingLogOptionsFlow(config_entries.OptionsFlow):
    """Handle options for Training Log."""

    async def async_step_init(self, user_input: dict[str, Any] | None = None):
        if user_input is not None:
            return self.async_create_entry(title="", data=_entry_data(user_input))

        def _current(key: str, default: Any) -> Any:
            return self.config_entry.options.get(key, self.config_entry.data.get(key, default))

        schema = vol.Schema(
            {
                vol.Required(CONF_NAME, default=str(_current(CONF_NAME, DEFAULT_NAME))): str,
                vol.Optional(CONF_PROFILE_ID, default=str(_current(CONF_PROFILE_ID, ""))): str,
                vol.Required(CONF_START_WEEK, default=int(_current(CONF_START_WEEK, DEFAULT_START_WEEK))): _START_WEEK,
            }
        )
        return self.async_show_form(step_id="init", data_schema=schema)
