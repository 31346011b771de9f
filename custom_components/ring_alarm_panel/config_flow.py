"""Config flow for Ring Alarm Panel."""

from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol

from homeassistant import config_entries
from homeassistant.data_entry_flow import FlowResult
from homeassistant.helpers import config_validation as cv
from homeassistant.helpers.selector import selector

from .const import (
    CONF_COMPACT_MODE,
    CONF_ENTITY,
    CONF_SHOW_STATE_TEXT,
    CONF_TITLE,
    CONF_VACATION_ENTITY,
    DEFAULT_COMPACT_MODE,
    DEFAULT_SHOW_STATE_TEXT,
    DEFAULT_TITLE,
    DOMAIN,
)
from .runtime.controls import ALARM_DOMAIN
from .runtime.vacation import VACATION_DOMAIN, is_valid_vacation_entity

_LOGGER = logging.getLogger(__name__)


def _entity_selector(domain: str) -> dict[str, Any]:
    return selector({"entity": {"domain": domain}})


def _panel_schema(defaults: dict[str, Any] | None = None, include_entity: bool = True) -> vol.Schema:
    defaults = defaults or {}
    fields: dict[Any, Any] = {}
    if include_entity:
        fields[vol.Required(CONF_ENTITY, default=defaults.get(CONF_ENTITY, vol.UNDEFINED))] = (
            _entity_selector(ALARM_DOMAIN)
        )
    fields[
        vol.Optional(
            CONF_VACATION_ENTITY,
            description={"suggested_value": defaults.get(CONF_VACATION_ENTITY)},
        )
    ] = _entity_selector(VACATION_DOMAIN)
    fields[vol.Optional(CONF_TITLE, default=defaults.get(CONF_TITLE, DEFAULT_TITLE))] = cv.string
    fields[
        vol.Optional(
            CONF_SHOW_STATE_TEXT, default=defaults.get(CONF_SHOW_STATE_TEXT, DEFAULT_SHOW_STATE_TEXT)
        )
    ] = bool
    fields[
        vol.Optional(CONF_COMPACT_MODE, default=defaults.get(CONF_COMPACT_MODE, DEFAULT_COMPACT_MODE))
    ] = bool
    return vol.Schema(fields)


def validate_panel_input(user_input: dict[str, Any], check_entity: bool = True) -> dict[str, str]:
    errors: dict[str, str] = {}
    if check_entity:
        entity_id = str(user_input.get(CONF_ENTITY) or "")
        if not entity_id:
            errors[CONF_ENTITY] = "required"
        elif entity_id.split(".", 1)[0] != ALARM_DOMAIN:
            errors[CONF_ENTITY] = "invalid_domain"

    vacation = user_input.get(CONF_VACATION_ENTITY)
    if vacation and not is_valid_vacation_entity(vacation):
        errors[CONF_VACATION_ENTITY] = "invalid_vacation_entity"
    return errors


class RingAlarmPanelConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Handle a config flow for Ring Alarm Panel."""

    VERSION = 1
    MINOR_VERSION = 1

    async def async_step_user(self, user_input=None) -> FlowResult:
        if user_input is None:
            return self.async_show_form(step_id="user", data_schema=_panel_schema())

        errors = validate_panel_input(user_input)
        if errors:
            return self.async_show_form(
                step_id="user", data_schema=_panel_schema(user_input), errors=errors
            )

        await self.async_set_unique_id(user_input[CONF_ENTITY])
        self._abort_if_unique_id_configured()

        _LOGGER.debug("Creating %s entry for %s", DOMAIN, user_input[CONF_ENTITY])
        return self.async_create_entry(
            title=user_input.get(CONF_TITLE) or DEFAULT_TITLE,
            data={CONF_ENTITY: user_input[CONF_ENTITY]},
            options={key: value for key, value in user_input.items() if key != CONF_ENTITY},
        )

    @staticmethod
    def async_get_options_flow(config_entry: config_entries.ConfigEntry):
        return RingAlarmPanelOptionsFlowHandler(config_entry)


class RingAlarmPanelOptionsFlowHandler(config_entries.OptionsFlow):
    """Edit vacation entity and display flags."""

    def __init__(self, config_entry: config_entries.ConfigEntry) -> None:
        self.options = dict(config_entry.options)

    async def async_step_init(self, user_input=None) -> FlowResult:
        if user_input is None:
            return self.async_show_form(
                step_id="init", data_schema=_panel_schema(self.options, include_entity=False)
            )

        errors = validate_panel_input(user_input, check_entity=False)
        if errors:
            return self.async_show_form(
                step_id="init",
                data_schema=_panel_schema(user_input, include_entity=False),
                errors=errors,
            )

        return self.async_create_entry(title="", data=user_input)
