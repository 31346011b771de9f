"""Service registration for Ring Alarm Panel."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import voluptuous as vol
from homeassistant.core import HomeAssistant, ServiceCall
from homeassistant.exceptions import ServiceValidationError
from homeassistant.helpers import config_validation as cv

from .const import (
    ATTR_ACTION,
    ATTR_CONFIG_ENTRY_ID,
    DOMAIN,
    SERVICE_PRESS_ACTION,
    SERVICE_TOGGLE_VACATION,
)
from .runtime.controls import ControlActionType

if TYPE_CHECKING:
    from .coordinator import RingAlarmPanelCoordinator

_LOGGER = logging.getLogger(__name__)

PRESS_ACTION_SCHEMA = vol.Schema(
    {
        vol.Required(ATTR_CONFIG_ENTRY_ID): cv.string,
        vol.Required(ATTR_ACTION): vol.In([str(action) for action in ControlActionType]),
    }
)

TOGGLE_VACATION_SCHEMA = vol.Schema(
    {
        vol.Required(ATTR_CONFIG_ENTRY_ID): cv.string,
    }
)


def _coordinator_for(hass: HomeAssistant, entry_id: str) -> RingAlarmPanelCoordinator:
    data = hass.data.get(DOMAIN, {}).get(entry_id)
    if not isinstance(data, dict) or "coordinator" not in data:
        raise ServiceValidationError(f"Unknown {DOMAIN} config entry '{entry_id}'")
    return data["coordinator"]


async def async_register_services(hass: HomeAssistant) -> None:
    async def _handle_press_action(call: ServiceCall) -> None:
        coordinator = _coordinator_for(hass, call.data[ATTR_CONFIG_ENTRY_ID])
        action = ControlActionType(call.data[ATTR_ACTION])
        _LOGGER.info("Ring alarm panel press_action: %s", action)
        await coordinator.engine.async_press(action)

    async def _handle_toggle_vacation(call: ServiceCall) -> None:
        coordinator = _coordinator_for(hass, call.data[ATTR_CONFIG_ENTRY_ID])
        if coordinator.options.vacation_entity is None:
            raise ServiceValidationError("No vacation entity configured for this panel")
        _LOGGER.info("Ring alarm panel toggle_vacation: %s", coordinator.options.vacation_entity)
        await coordinator.engine.async_toggle_vacation()

    hass.services.async_register(
        DOMAIN, SERVICE_PRESS_ACTION, _handle_press_action, schema=PRESS_ACTION_SCHEMA
    )
    hass.services.async_register(
        DOMAIN, SERVICE_TOGGLE_VACATION, _handle_toggle_vacation, schema=TOGGLE_VACATION_SCHEMA
    )
