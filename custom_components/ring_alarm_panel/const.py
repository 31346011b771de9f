"""Constants for the Ring Alarm Panel integration."""

from __future__ import annotations

from homeassistant.const import Platform

DOMAIN = "ring_alarm_panel"
PLATFORMS: list[Platform] = [
    Platform.SENSOR,
    Platform.BINARY_SENSOR,
    Platform.BUTTON,
]

# Config keys
CONF_ENTITY = "entity"
CONF_VACATION_ENTITY = "vacation_entity"
CONF_TITLE = "title"
CONF_SHOW_STATE_TEXT = "show_state_text"
CONF_COMPACT_MODE = "compact_mode"

DEFAULT_TITLE = "Alarm"
DEFAULT_SHOW_STATE_TEXT = True
DEFAULT_COMPACT_MODE = False

# Timing
ERROR_CLEAR_SECONDS = 3.0
PROGRESS_TICK_SECONDS = 0.05

# Services
SERVICE_PRESS_ACTION = "press_action"
SERVICE_TOGGLE_VACATION = "toggle_vacation"
ATTR_CONFIG_ENTRY_ID = "config_entry_id"
ATTR_ACTION = "action"

DIAGNOSTICS_REDACT_KEYS = {
    "entity",
    "entity_id",
    "vacation_entity",
}
