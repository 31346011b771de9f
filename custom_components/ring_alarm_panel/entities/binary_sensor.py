"""Ring Alarm Panel binary sensors."""

from __future__ import annotations

from typing import Any

from homeassistant.components.binary_sensor import BinarySensorEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from ..const import DOMAIN
from ..coordinator import RingAlarmPanelCoordinator
from .base import RingAlarmPanelEntity
from .registry import KEY_TRANSITIONING, KEY_VACATION_MODE, build_registry


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    data = hass.data[DOMAIN][entry.entry_id]
    coordinator: RingAlarmPanelCoordinator = data["coordinator"]
    registry = build_registry(coordinator.options)
    entities: list[BinarySensorEntity] = []
    for desc in registry.binary_sensors:
        if desc.key == KEY_TRANSITIONING:
            entities.append(TransitioningBinarySensor(coordinator, entry, desc.key, desc.name, desc.icon))
        elif desc.key == KEY_VACATION_MODE:
            entities.append(VacationModeBinarySensor(coordinator, entry, desc.key, desc.name, desc.icon))
    async_add_entities(entities)


class TransitioningBinarySensor(RingAlarmPanelEntity, BinarySensorEntity):
    """On while the panel counts down towards a target state."""

    @property
    def is_on(self) -> bool:
        return self.view.transition.is_transitioning

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        target = self.view.transition.target_action
        return {"target_action": str(target) if target else None}


class VacationModeBinarySensor(RingAlarmPanelEntity, BinarySensorEntity):
    """Mirror of the vacation input_boolean."""

    @property
    def is_on(self) -> bool | None:
        vacation = self.view.vacation
        return vacation.is_active if vacation else None

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        view = self.view
        attrs: dict[str, Any] = view.vacation.as_dict() if view.vacation else {}
        attrs["vacation_error"] = view.vacation_error.as_dict() if view.vacation_error else None
        return attrs
