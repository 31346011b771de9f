"""Vacation mode toggle (input_boolean) state.

Kept apart from the alarm buttons: nothing here reads alarm state, and the
alarm side never touches this store.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any

VACATION_DOMAIN = "input_boolean"
SERVICE_TURN_ON = "turn_on"
SERVICE_TURN_OFF = "turn_off"

_ENTITY_NAME_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


@dataclass(frozen=True)
class VacationDisplay:
    label: str
    icon: str
    active_color: str


VACATION_DISPLAY = VacationDisplay(label="Vacation", icon="mdi:beach", active_color="--info-color")


@dataclass(frozen=True)
class VacationState:
    is_active: bool = False
    is_loading: bool = False
    has_error: bool = False
    is_disabled: bool = False

    def as_dict(self) -> dict[str, Any]:
        return {
            "is_active": self.is_active,
            "is_loading": self.is_loading,
            "has_error": self.has_error,
            "is_disabled": self.is_disabled,
        }


def is_active(state: str | None) -> bool:
    return state == "on"


def toggle_service(state: str | None) -> str:
    """Service that flips the toggle; anything but "on" turns it on."""
    return SERVICE_TURN_OFF if state == "on" else SERVICE_TURN_ON


def is_valid_vacation_entity(entity_id: Any) -> bool:
    if not isinstance(entity_id, str) or not entity_id.startswith(f"{VACATION_DOMAIN}."):
        return False
    name = entity_id.split(".", 1)[1]
    return bool(_ENTITY_NAME_RE.match(name))


class VacationToggle:
    """Stored state of the vacation button."""

    def __init__(self) -> None:
        self._state = VacationState()
        self._generation = 0
        self._raw_state: str | None = None

    @property
    def state(self) -> VacationState:
        return self._state

    @property
    def raw_state(self) -> str | None:
        return self._raw_state

    @property
    def generation(self) -> int:
        return self._generation

    def refresh(self, raw_state: str | None, unavailable: bool = False) -> None:
        """Apply a new entity state.

        Click flags survive a normal refresh but are dropped when the entity
        goes missing or unavailable.
        """
        self._raw_state = raw_state
        if unavailable or raw_state is None:
            self._state = VacationState(is_active=is_active(raw_state), is_disabled=True)
            return
        self._state = replace(self._state, is_active=is_active(raw_state), is_disabled=False)

    def can_click(self) -> bool:
        return not self._state.is_disabled and not self._state.is_loading

    def begin(self) -> int:
        self._generation += 1
        self._state = replace(self._state, is_loading=True, has_error=False)
        return self._generation

    def succeed(self, token: int) -> bool:
        if token != self._generation:
            return False
        self._state = replace(self._state, is_loading=False)
        return True

    def fail(self, token: int) -> bool:
        if token != self._generation:
            return False
        self._state = replace(self._state, is_loading=False, has_error=True)
        return True

    def clear_error(self, token: int) -> bool:
        if token != self._generation or not self._state.has_error:
            return False
        self._state = replace(self._state, has_error=False)
        return True
