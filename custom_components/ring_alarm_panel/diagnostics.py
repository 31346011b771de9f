"""Diagnostics support for Ring Alarm Panel."""

from __future__ import annotations

from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.redact import async_redact_data

from .const import DIAGNOSTICS_REDACT_KEYS, DOMAIN


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> dict[str, Any]:
    data = hass.data.get(DOMAIN, {}).get(entry.entry_id, {})
    coordinator = data.get("coordinator")
    view = getattr(coordinator, "data", None)

    payload = {
        "entry": {
            "title": entry.title,
            "version": entry.version,
            "minor_version": getattr(entry, "minor_version", None),
            "data": dict(entry.data),
            "options": dict(entry.options),
        },
        "runtime": {
            "view": view.as_dict() if view is not None else None,
            "ticking": coordinator.engine.is_ticking if coordinator else False,
        },
    }

    return async_redact_data(payload, DIAGNOSTICS_REDACT_KEYS)
