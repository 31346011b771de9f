"""Ring Alarm Panel buttons (disarm/arm home/arm away and vacation toggle)."""

from __future__ import annotations

from typing import Any

from homeassistant.components.button import ButtonEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from ..const import DOMAIN
from ..coordinator import RingAlarmPanelCoordinator
from ..runtime.controls import ControlActionType, display_for
from .base import RingAlarmPanelEntity
from .registry import build_registry

LOADING_ICON = "mdi:loading"


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    data = hass.data[DOMAIN][entry.entry_id]
    coordinator: RingAlarmPanelCoordinator = data["coordinator"]
    registry = build_registry(coordinator.options)
    entities: list[ButtonEntity] = []
    for desc in registry.buttons:
        if desc.action is None:
            entities.append(VacationToggleButton(coordinator, entry, desc.key, desc.name, desc.icon))
        else:
            entities.append(
                AlarmActionButton(coordinator, entry, desc.key, desc.name, desc.icon, desc.action)
            )
    async_add_entities(entities)


class AlarmActionButton(RingAlarmPanelEntity, ButtonEntity):
    """One alarm control action."""

    def __init__(
        self,
        coordinator: RingAlarmPanelCoordinator,
        entry: ConfigEntry,
        key: str,
        name: str,
        icon: str | None,
        action: ControlActionType,
    ) -> None:
        super().__init__(coordinator, entry, key, name, icon)
        self._action = action
        self._default_icon = icon

    @property
    def icon(self) -> str | None:
        state = self.view.button(self._action)
        if state is not None and state.is_loading:
            return LOADING_ICON
        return self._default_icon

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        state = self.view.button(self._action)
        attrs: dict[str, Any] = state.as_dict() if state else {}
        display = display_for(self._action)
        attrs["action"] = str(self._action)
        attrs["label"] = display.label
        attrs["active_color"] = display.active_color
        return attrs

    async def async_press(self) -> None:
        # disabled or in-flight presses are ignored by the engine
        await self.coordinator.engine.async_press(self._action)


class VacationToggleButton(RingAlarmPanelEntity, ButtonEntity):
    """Flips the configured vacation input_boolean."""

    def __init__(
        self,
        coordinator: RingAlarmPanelCoordinator,
        entry: ConfigEntry,
        key: str,
        name: str,
        icon: str | None,
    ) -> None:
        super().__init__(coordinator, entry, key, name, icon)
        self._default_icon = icon

    @property
    def icon(self) -> str | None:
        vacation = self.view.vacation
        if vacation is not None and vacation.is_loading:
            return LOADING_ICON
        return self._default_icon

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        view = self.view
        attrs: dict[str, Any] = view.vacation.as_dict() if view.vacation else {}
        attrs["vacation_error"] = view.vacation_error.as_dict() if view.vacation_error else None
        return attrs

    async def async_press(self) -> None:
        await self.coordinator.engine.async_toggle_vacation()
