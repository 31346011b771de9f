"""Coordinator for the Ring Alarm Panel runtime."""

from __future__ import annotations

import logging

import voluptuous as vol
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import Event, HomeAssistant, State, callback
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator

from .const import DOMAIN
from .models import PanelOptions
from .runtime.contracts import CommandError, ServiceCommand, SnapshotChanged
from .runtime.engine import AlarmPanelEngine
from .runtime.snapshot import PanelView, RawSnapshot

_LOGGER = logging.getLogger(__name__)


def snapshot_from_state(state: State | None) -> RawSnapshot | None:
    if state is None:
        return None
    return RawSnapshot(
        entity_id=state.entity_id,
        state=state.state,
        attributes=dict(state.attributes),
        last_updated=state.last_updated,
    )


class RingAlarmPanelCoordinator(DataUpdateCoordinator[PanelView]):
    """Owns the alarm panel engine instance."""

    def __init__(self, hass: HomeAssistant, entry: ConfigEntry) -> None:
        super().__init__(
            hass=hass,
            logger=_LOGGER,
            name=DOMAIN,
            update_interval=None,  # push-based
        )
        self.entry = entry
        self.options = PanelOptions.from_entry(entry)
        self.engine = AlarmPanelEngine(
            self.options.entity,
            self._async_run_command,
            vacation_entity_id=self.options.vacation_entity,
            display=self.options.display(),
        )
        self._unsub_state_changed = None
        self._unsub_view = None
        self.data = self.engine.view

    async def _async_update_data(self) -> PanelView:
        """Return the current view; the engine pushes every change itself."""
        return self.engine.view

    async def async_initialize(self) -> None:
        """Seed the engine from current states and start listening."""
        self._unsub_view = self.engine.add_listener(self._handle_view)
        vacation_entity = self.options.vacation_entity
        self.engine.async_initialize(
            snapshot_from_state(self.hass.states.get(self.options.entity)),
            snapshot_from_state(self.hass.states.get(vacation_entity)) if vacation_entity else None,
        )
        self._subscribe_state_changes()

    async def async_shutdown(self) -> None:
        """Shutdown runtime."""
        self._unsubscribe_state_changes()
        if self._unsub_view:
            self._unsub_view()
            self._unsub_view = None
        await self.engine.async_shutdown()
        _LOGGER.debug("Ring alarm panel runtime shutdown")

    async def _async_run_command(self, command: ServiceCommand) -> None:
        _LOGGER.info("Calling %s.%s for %s", command.domain, command.service, command.entity_id)
        try:
            await self.hass.services.async_call(
                command.domain,
                command.service,
                command.data,
                blocking=True,
            )
        except (HomeAssistantError, vol.Invalid) as err:
            raise CommandError(str(err)) from err

    @callback
    def _handle_view(self, view: PanelView) -> None:
        self.data = view
        self.async_update_listeners()

    def _unsubscribe_state_changes(self) -> None:
        if self._unsub_state_changed:
            self._unsub_state_changed()
            self._unsub_state_changed = None

    def _subscribe_state_changes(self) -> None:
        tracked_entities = self.engine.tracked_entity_ids()

        @callback
        def _handle_state_changed(event: Event) -> None:
            entity_id = event.data.get("entity_id")
            if entity_id not in tracked_entities:
                return
            self.engine.handle_snapshot_changed(
                SnapshotChanged(
                    entity_id=entity_id,
                    snapshot=snapshot_from_state(event.data.get("new_state")),
                )
            )

        self._unsub_state_changed = self.hass.bus.async_listen("state_changed", _handle_state_changed)
