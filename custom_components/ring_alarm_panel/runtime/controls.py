"""Control action catalog for the alarm panel buttons."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from .alarm_state import AlarmStateValue

ALARM_DOMAIN = "alarm_control_panel"


class ControlActionType(StrEnum):
    """The three primary panel actions."""

    DISARM = "disarm"
    ARM_HOME = "arm_home"
    ARM_AWAY = "arm_away"


@dataclass(frozen=True)
class ControlAction:
    """Static definition of one control button."""

    type: ControlActionType
    service: str
    label: str
    icon: str
    active_color: str


@dataclass(frozen=True)
class ActionDisplay:
    label: str
    icon: str
    active_color: str


CONTROL_ACTIONS: tuple[ControlAction, ...] = (
    ControlAction(ControlActionType.DISARM, "alarm_disarm", "Disarmed", "mdi:shield-off", "--success-color"),
    ControlAction(ControlActionType.ARM_HOME, "alarm_arm_home", "Home", "mdi:home-lock", "--warning-color"),
    ControlAction(ControlActionType.ARM_AWAY, "alarm_arm_away", "Away", "mdi:shield-lock", "--error-color"),
)

_ACTIONS_BY_TYPE = {action.type: action for action in CONTROL_ACTIONS}

_ACTIVE_ACTION_BY_STATE = {
    AlarmStateValue.DISARMED: ControlActionType.DISARM,
    AlarmStateValue.ARMED_HOME: ControlActionType.ARM_HOME,
    AlarmStateValue.ARMED_AWAY: ControlActionType.ARM_AWAY,
}

# Buttons are locked out while the panel is counting down or alarming.
_LOCKED_STATES = {
    AlarmStateValue.ARMING,
    AlarmStateValue.DISARMING,
    AlarmStateValue.PENDING,
    AlarmStateValue.TRIGGERED,
}

_UNKNOWN_DISPLAY = ActionDisplay(label="Unknown", icon="mdi:help-circle", active_color="--disabled-text-color")


def actions() -> list[ControlAction]:
    """Return the control actions in display order."""
    return list(CONTROL_ACTIONS)


def active_action_for(alarm_state: AlarmStateValue | None) -> ControlActionType | None:
    """Return the action matching a stable alarm state, if any."""
    if alarm_state is None:
        return None
    return _ACTIVE_ACTION_BY_STATE.get(alarm_state)


def controls_disabled(alarm_state: AlarmStateValue | None) -> bool:
    """Whether the control buttons must be locked out.

    A missing state locks the controls.
    """
    if alarm_state is None:
        return True
    return alarm_state in _LOCKED_STATES


def service_for(action: ControlActionType) -> str:
    return _ACTIONS_BY_TYPE[ControlActionType(action)].service


def display_for(action: ControlActionType | str | None) -> ActionDisplay:
    try:
        definition = _ACTIONS_BY_TYPE[ControlActionType(action)]
    except ValueError:
        return _UNKNOWN_DISPLAY
    return ActionDisplay(
        label=definition.label,
        icon=definition.icon,
        active_color=definition.active_color,
    )
