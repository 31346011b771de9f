"""Ring alarm panel runtime engine.

Single owner of the panel view. Snapshots come in as ``SnapshotChanged``
events, clicks come in through ``async_press``/``async_toggle_vacation``,
and every processed input (and every tick that moves the displayed progress)
publishes a fresh ``PanelView`` to the listeners. All mutation happens on the event loop.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import math
import time
from collections.abc import Callable
from typing import Any

from ..const import ERROR_CLEAR_SECONDS, PROGRESS_TICK_SECONDS
from .alarm_state import AlarmState, AlarmStateValue, map_state
from .buttons import ButtonStateStore
from .contracts import CommandError, CommandRunner, ServiceCommand, SnapshotChanged
from .controls import ALARM_DOMAIN, ControlActionType, active_action_for, service_for
from .snapshot import EntityError, EntityErrorType, PanelView, RawSnapshot
from .transition import TransitionState, TransitionStep, interpolate, next_transition
from .vacation import VACATION_DOMAIN, VacationToggle, toggle_service

_LOGGER = logging.getLogger(__name__)

ViewListener = Callable[[PanelView], None]


def _displayed(transition: TransitionState) -> tuple[int, int]:
    """Whole-number progress and seconds left, as shown on the panel."""
    return round(transition.progress), math.ceil(transition.remaining_seconds)


class AlarmPanelEngine:
    """Keeps alarm, transition, button and vacation state in sync."""

    def __init__(
        self,
        alarm_entity_id: str,
        run_command: CommandRunner,
        *,
        vacation_entity_id: str | None = None,
        display: dict[str, Any] | None = None,
        clock: Callable[[], float] = time.monotonic,
        tick_seconds: float = PROGRESS_TICK_SECONDS,
        error_clear_seconds: float = ERROR_CLEAR_SECONDS,
    ) -> None:
        self._alarm_entity_id = alarm_entity_id
        self._vacation_entity_id = vacation_entity_id
        self._run_command = run_command
        self._display = dict(display or {})
        self._clock = clock
        self._tick_seconds = tick_seconds
        self._error_clear_seconds = error_clear_seconds

        self._alarm_state: AlarmState | None = None
        self._entity_error: EntityError | None = None
        self._transition = TransitionState.empty()
        self._buttons = ButtonStateStore()
        self._vacation = VacationToggle() if vacation_entity_id else None
        self._vacation_error: EntityError | None = None

        self._last_remaining = 0.0
        self._last_update = 0.0
        self._last_clicked: ControlActionType | None = None

        self._tick_task: asyncio.Task[None] | None = None
        self._button_clear_handles: dict[ControlActionType, asyncio.TimerHandle] = {}
        self._vacation_clear_handle: asyncio.TimerHandle | None = None

        self._listeners: list[ViewListener] = []
        self._view = self._build_view()

    @property
    def view(self) -> PanelView:
        return self._view

    @property
    def alarm_entity_id(self) -> str:
        return self._alarm_entity_id

    @property
    def vacation_entity_id(self) -> str | None:
        return self._vacation_entity_id

    @property
    def is_ticking(self) -> bool:
        return self._tick_task is not None and not self._tick_task.done()

    def tracked_entity_ids(self) -> set[str]:
        """Entities whose changes must be fed to the engine."""
        tracked = {self._alarm_entity_id}
        if self._vacation_entity_id:
            tracked.add(self._vacation_entity_id)
        return tracked

    def add_listener(self, listener: ViewListener) -> Callable[[], None]:
        """Register a view listener; returns the unsubscribe callable."""
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove

    def async_initialize(
        self, alarm: RawSnapshot | None, vacation: RawSnapshot | None = None
    ) -> PanelView:
        """Seed state from the current entity snapshots."""
        _LOGGER.debug("Alarm panel engine initialize for %s", self._alarm_entity_id)
        self._process_alarm(alarm)
        if self._vacation is not None and self._vacation_entity_id:
            self._process_vacation(vacation)
        self._publish()
        return self._view

    async def async_shutdown(self) -> None:
        _LOGGER.debug("Alarm panel engine shutdown")
        task = self._tick_task
        self._stop_ticking()
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        for handle in self._button_clear_handles.values():
            handle.cancel()
        self._button_clear_handles.clear()
        if self._vacation_clear_handle is not None:
            self._vacation_clear_handle.cancel()
            self._vacation_clear_handle = None
        self._listeners.clear()

    # ---- Inbound snapshots ----
    def handle_snapshot_changed(self, event: SnapshotChanged) -> None:
        if event.entity_id == self._alarm_entity_id:
            self._process_alarm(event.snapshot)
        elif self._vacation is not None and event.entity_id == self._vacation_entity_id:
            self._process_vacation(event.snapshot)
        else:
            return
        self._publish()

    def _process_alarm(self, snapshot: RawSnapshot | None) -> None:
        entity_id = self._alarm_entity_id
        if snapshot is None:
            self._set_alarm_error(EntityErrorType.NOT_FOUND, f"Entity {entity_id} not found")
            return
        if snapshot.is_unavailable:
            self._set_alarm_error(EntityErrorType.UNAVAILABLE, f"Entity {entity_id} is unavailable")
            return
        if snapshot.domain != ALARM_DOMAIN:
            self._set_alarm_error(
                EntityErrorType.INVALID_DOMAIN,
                f"Entity {entity_id} has domain {snapshot.domain}, expected {ALARM_DOMAIN}",
            )
            return

        self._entity_error = None
        self._alarm_state = map_state(snapshot.state)
        self._update_transition(self._alarm_state.state, snapshot.attributes)

    def _set_alarm_error(self, error_type: EntityErrorType, message: str) -> None:
        if self._entity_error is None or self._entity_error.type != error_type:
            _LOGGER.warning("Alarm entity problem: %s", message)
        self._entity_error = EntityError(type=error_type, message=message, entity_id=self._alarm_entity_id)
        self._alarm_state = None
        self._clear_transition()

    def _update_transition(self, alarm_state: AlarmStateValue, attributes: Any) -> None:
        transition, step = next_transition(
            self._transition,
            alarm_state,
            attributes,
            last_clicked=self._last_clicked,
        )

        if step in (TransitionStep.STARTED, TransitionStep.RETARGETED):
            _LOGGER.debug(
                "Transition %s: state=%s target=%s total=%ss",
                step,
                alarm_state,
                transition.target_action,
                transition.total_duration,
            )
            self._stop_ticking()
            self._transition = transition
            self._mark_remaining(transition.remaining_seconds)
            self._start_ticking()
        elif step == TransitionStep.CONTINUED:
            self._transition = transition
            self._mark_remaining(transition.remaining_seconds)
        elif step == TransitionStep.CLEARED:
            _LOGGER.debug("Transition finished: state=%s", alarm_state)
            self._clear_transition()
        else:
            self._transition = transition
            # a stable state ends the arming hint unless the click is in flight and not yet shown
            clicked = self._last_clicked
            if clicked is not None and (
                active_action_for(alarm_state) == clicked or not self._buttons.flags(clicked).is_loading
            ):
                self._last_clicked = None

    def _process_vacation(self, snapshot: RawSnapshot | None) -> None:
        vacation = self._vacation
        if vacation is None:
            return
        entity_id = self._vacation_entity_id or ""
        if snapshot is None:
            self._vacation_error = EntityError(
                type=EntityErrorType.NOT_FOUND,
                message=f"Vacation entity {entity_id} not found",
                entity_id=entity_id,
            )
            vacation.refresh(None, unavailable=True)
            return
        if snapshot.is_unavailable:
            self._vacation_error = EntityError(
                type=EntityErrorType.UNAVAILABLE,
                message=f"Vacation entity {entity_id} is unavailable",
                entity_id=entity_id,
            )
            vacation.refresh(snapshot.state, unavailable=True)
            return
        self._vacation_error = None
        vacation.refresh(snapshot.state)

    # ---- Progress interpolation ----
    def _mark_remaining(self, remaining_seconds: float) -> None:
        self._last_remaining = remaining_seconds
        self._last_update = self._clock()

    def _start_ticking(self) -> None:
        self._stop_ticking()
        if not self._transition.is_transitioning:
            return
        self._tick_task = asyncio.get_running_loop().create_task(self._async_tick_loop())

    def _stop_ticking(self) -> None:
        if self._tick_task is not None:
            if not self._tick_task.done():
                self._tick_task.cancel()
            self._tick_task = None

    async def _async_tick_loop(self) -> None:
        while True:
            await asyncio.sleep(self._tick_seconds)
            if not self._transition.is_transitioning:
                return
            self.tick()

    def tick(self) -> None:
        """Recompute progress from elapsed time since the last reported countdown."""
        if not self._transition.is_transitioning:
            return
        previous = self._transition
        elapsed = self._clock() - self._last_update
        self._transition = interpolate(previous, self._last_remaining, elapsed)
        # listeners only hear about changes they can display
        if _displayed(self._transition) != _displayed(previous):
            self._publish()

    def _clear_transition(self) -> None:
        self._stop_ticking()
        self._last_remaining = 0.0
        self._last_update = 0.0
        self._last_clicked = None
        self._transition = TransitionState.empty()

    # ---- Clicks ----
    async def async_press(self, action: ControlActionType | str) -> bool:
        """Run the service for a control button. Returns True on success."""
        action = ControlActionType(action)
        alarm_value = self._alarm_state.state if self._alarm_state else None
        if not self._buttons.can_click(action, alarm_value):
            _LOGGER.debug("Ignoring %s press (state=%s)", action, alarm_value)
            return False

        self._last_clicked = action
        token = self._buttons.begin(action)
        self._cancel_button_clear(action)
        self._publish()

        command = ServiceCommand(ALARM_DOMAIN, service_for(action), self._alarm_entity_id)
        try:
            await self._run_command(command)
        except CommandError as err:
            _LOGGER.warning("Alarm command %s.%s failed: %s", command.domain, command.service, err)
            self._press_failed(action, token)
            return False
        except BaseException:
            # includes cancellation; the button must not stay loading
            self._press_failed(action, token)
            raise

        if self._buttons.succeed(action, token):
            self._publish()
        return True

    def _press_failed(self, action: ControlActionType, token: int) -> None:
        if self._last_clicked == action:
            self._last_clicked = None
        if self._buttons.fail(action, token):
            self._schedule_button_clear(action, token)
            self._publish()

    def _schedule_button_clear(self, action: ControlActionType, token: int) -> None:
        self._cancel_button_clear(action)
        self._button_clear_handles[action] = asyncio.get_running_loop().call_later(
            self._error_clear_seconds, self._clear_button_error, action, token
        )

    def _cancel_button_clear(self, action: ControlActionType) -> None:
        handle = self._button_clear_handles.pop(action, None)
        if handle is not None:
            handle.cancel()

    def _clear_button_error(self, action: ControlActionType, token: int) -> None:
        self._button_clear_handles.pop(action, None)
        if self._buttons.clear_error(action, token):
            self._publish()

    async def async_toggle_vacation(self) -> bool:
        """Flip the vacation toggle. Returns True on success."""
        vacation = self._vacation
        if vacation is None or not self._vacation_entity_id:
            return False
        if not vacation.can_click():
            _LOGGER.debug("Ignoring vacation toggle (state=%s)", vacation.state)
            return False

        command = ServiceCommand(VACATION_DOMAIN, toggle_service(vacation.raw_state), self._vacation_entity_id)
        token = vacation.begin()
        self._cancel_vacation_clear()
        self._publish()

        try:
            await self._run_command(command)
        except CommandError as err:
            _LOGGER.warning("Vacation command %s.%s failed: %s", command.domain, command.service, err)
            self._vacation_failed(token)
            return False
        except BaseException:
            self._vacation_failed(token)
            raise

        if vacation.succeed(token):
            self._publish()
        return True

    def _vacation_failed(self, token: int) -> None:
        if self._vacation is not None and self._vacation.fail(token):
            self._cancel_vacation_clear()
            self._vacation_clear_handle = asyncio.get_running_loop().call_later(
                self._error_clear_seconds, self._clear_vacation_error, token
            )
            self._publish()

    def _cancel_vacation_clear(self) -> None:
        if self._vacation_clear_handle is not None:
            self._vacation_clear_handle.cancel()
            self._vacation_clear_handle = None

    def _clear_vacation_error(self, token: int) -> None:
        self._vacation_clear_handle = None
        if self._vacation is not None and self._vacation.clear_error(token):
            self._publish()

    # ---- View ----
    def _build_view(self) -> PanelView:
        alarm_value = self._alarm_state.state if self._alarm_state else None
        return PanelView(
            alarm_state=self._alarm_state,
            transition=self._transition,
            buttons=self._buttons.view(alarm_value, self._transition),
            vacation=self._vacation.state if self._vacation is not None else None,
            entity_error=self._entity_error,
            vacation_error=self._vacation_error,
            display=dict(self._display),
        )

    def _publish(self) -> None:
        self._view = self._build_view()
        for listener in list(self._listeners):
            listener(self._view)
