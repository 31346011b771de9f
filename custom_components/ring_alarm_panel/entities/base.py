"""Base entities for Ring Alarm Panel."""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntry
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from ..const import DOMAIN
from ..coordinator import RingAlarmPanelCoordinator
from ..runtime.snapshot import PanelView


class RingAlarmPanelEntity(CoordinatorEntity[RingAlarmPanelCoordinator]):
    """Base class for Ring Alarm Panel entities."""

    _attr_has_entity_name = True

    def __init__(
        self,
        coordinator: RingAlarmPanelCoordinator,
        entry: ConfigEntry,
        key: str,
        name: str,
        icon: str | None = None,
    ) -> None:
        super().__init__(coordinator)
        self._entry = entry
        self._key = key
        self._attr_name = name
        self._attr_unique_id = f"{entry.entry_id}_{key}"
        if icon:
            self._attr_icon = icon

    @property
    def view(self) -> PanelView:
        return self.coordinator.data

    @property
    def device_info(self):
        return {
            "identifiers": {(DOMAIN, self._entry.entry_id)},
            "name": self.coordinator.options.title,
            "manufacturer": "Ring Alarm Panel",
            "model": "Alarm Panel View",
        }
