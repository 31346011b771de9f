"""Ring Alarm Panel sensors."""

from __future__ import annotations

from typing import Any

from homeassistant.components.sensor import SensorDeviceClass, SensorEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import PERCENTAGE
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from ..const import DOMAIN
from ..coordinator import RingAlarmPanelCoordinator
from ..runtime.alarm_state import AlarmStateValue
from .base import RingAlarmPanelEntity
from .registry import KEY_ALARM_STATE, KEY_TRANSITION_PROGRESS, build_registry


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    data = hass.data[DOMAIN][entry.entry_id]
    coordinator: RingAlarmPanelCoordinator = data["coordinator"]
    registry = build_registry(coordinator.options)
    entities: list[SensorEntity] = []
    for desc in registry.sensors:
        if desc.key == KEY_ALARM_STATE:
            entities.append(AlarmStateSensor(coordinator, entry, desc.key, desc.name))
        elif desc.key == KEY_TRANSITION_PROGRESS:
            entities.append(TransitionProgressSensor(coordinator, entry, desc.key, desc.name, desc.icon))
    async_add_entities(entities)


class AlarmStateSensor(RingAlarmPanelEntity, SensorEntity):
    """Display state of the alarm panel."""

    _attr_device_class = SensorDeviceClass.ENUM
    _attr_options = [str(value) for value in AlarmStateValue]

    @property
    def native_value(self) -> str | None:
        alarm_state = self.view.alarm_state
        return str(alarm_state.state) if alarm_state else None

    @property
    def icon(self) -> str | None:
        alarm_state = self.view.alarm_state
        return alarm_state.icon if alarm_state else "mdi:shield-off-outline"

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        view = self.view
        alarm_state = view.alarm_state
        attrs: dict[str, Any] = {
            "color": alarm_state.color if alarm_state else None,
            "label": alarm_state.label if alarm_state else None,
            "is_animated": alarm_state.is_animated if alarm_state else False,
            "entity_error": view.entity_error.as_dict() if view.entity_error else None,
        }
        attrs.update(view.display)
        return attrs


class TransitionProgressSensor(RingAlarmPanelEntity, SensorEntity):
    """Countdown progress of the current arming/disarming/entry transition."""

    _attr_native_unit_of_measurement = PERCENTAGE

    @property
    def native_value(self) -> int:
        return round(self.view.transition.progress)

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        transition = self.view.transition
        return {
            "is_transitioning": transition.is_transitioning,
            "target_action": str(transition.target_action) if transition.target_action else None,
            "remaining_seconds": transition.remaining_seconds,
            "total_duration": transition.total_duration,
        }
