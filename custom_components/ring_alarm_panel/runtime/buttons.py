"""Per-action button state for the alarm control buttons."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from .alarm_state import AlarmStateValue
from .controls import ControlActionType, active_action_for, controls_disabled
from .transition import TransitionState


@dataclass(frozen=True)
class StoredButtonFlags:
    """Flags written only by click handling."""

    is_loading: bool = False
    has_error: bool = False


@dataclass(frozen=True)
class ButtonState:
    """Button view: stored flags merged with alarm and transition context."""

    is_active: bool
    is_loading: bool
    is_disabled: bool
    has_error: bool
    is_transition_target: bool = False
    transition_progress: float | None = None
    transition_remaining_seconds: float | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "is_active": self.is_active,
            "is_loading": self.is_loading,
            "is_disabled": self.is_disabled,
            "has_error": self.has_error,
            "is_transition_target": self.is_transition_target,
            "transition_progress": self.transition_progress,
            "transition_remaining_seconds": self.transition_remaining_seconds,
        }


class ButtonStateStore:
    """Loading/error flags keyed by action.

    Every mutation touches exactly one key. Each click bumps that key's
    generation; callbacks carrying an older generation are ignored so a late
    error-clear cannot wipe a newer failure.
    """

    def __init__(self) -> None:
        self._flags: dict[ControlActionType, StoredButtonFlags] = {
            action: StoredButtonFlags() for action in ControlActionType
        }
        self._generation: dict[ControlActionType, int] = {action: 0 for action in ControlActionType}

    def flags(self, action: ControlActionType) -> StoredButtonFlags:
        return self._flags[action]

    def generation(self, action: ControlActionType) -> int:
        return self._generation[action]

    def can_click(self, action: ControlActionType, alarm_state: AlarmStateValue | None) -> bool:
        return not controls_disabled(alarm_state) and not self._flags[action].is_loading

    def begin(self, action: ControlActionType) -> int:
        """Mark ``action`` as loading and return the click token."""
        self._generation[action] += 1
        self._flags[action] = StoredButtonFlags(is_loading=True, has_error=False)
        return self._generation[action]

    def succeed(self, action: ControlActionType, token: int) -> bool:
        if token != self._generation[action]:
            return False
        self._flags[action] = replace(self._flags[action], is_loading=False)
        return True

    def fail(self, action: ControlActionType, token: int) -> bool:
        if token != self._generation[action]:
            return False
        self._flags[action] = StoredButtonFlags(is_loading=False, has_error=True)
        return True

    def clear_error(self, action: ControlActionType, token: int) -> bool:
        if token != self._generation[action] or not self._flags[action].has_error:
            return False
        self._flags[action] = replace(self._flags[action], has_error=False)
        return True

    def view(
        self,
        alarm_state: AlarmStateValue | None,
        transition: TransitionState,
    ) -> dict[ControlActionType, ButtonState]:
        """Compute the button states for the current alarm and transition."""
        active = active_action_for(alarm_state)
        disabled = controls_disabled(alarm_state)
        states: dict[ControlActionType, ButtonState] = {}
        for action, flags in self._flags.items():
            is_target = transition.is_transitioning and transition.target_action == action
            states[action] = ButtonState(
                is_active=active == action,
                is_loading=flags.is_loading,
                is_disabled=disabled,
                has_error=flags.has_error,
                is_transition_target=is_target,
                transition_progress=transition.progress if is_target else None,
                transition_remaining_seconds=transition.remaining_seconds if is_target else None,
            )
        return states
