"""Alarm state mapping (raw entity state -> display state)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class AlarmStateValue(StrEnum):
    """Discrete alarm states shown by the panel."""

    DISARMED = "disarmed"
    ARMED_HOME = "armed_home"
    ARMED_AWAY = "armed_away"
    ARMED_NIGHT = "armed_night"
    ARMED_VACATION = "armed_vacation"
    ARMED_CUSTOM_BYPASS = "armed_custom_bypass"
    ARMING = "arming"
    DISARMING = "disarming"
    PENDING = "pending"
    TRIGGERED = "triggered"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class AlarmState:
    """Display state derived from one alarm snapshot."""

    state: AlarmStateValue
    icon: str
    color: str
    label: str
    is_animated: bool

    def as_dict(self) -> dict[str, object]:
        return {
            "state": str(self.state),
            "icon": self.icon,
            "color": self.color,
            "label": self.label,
            "is_animated": self.is_animated,
        }


_STATE_TABLE: dict[AlarmStateValue, AlarmState] = {
    entry.state: entry
    for entry in (
        AlarmState(AlarmStateValue.DISARMED, "mdi:shield-off", "--success-color", "Disarmed", False),
        AlarmState(AlarmStateValue.ARMED_HOME, "mdi:home-lock", "--warning-color", "Armed Home", False),
        AlarmState(AlarmStateValue.ARMED_AWAY, "mdi:shield-lock", "--error-color", "Armed Away", False),
        AlarmState(AlarmStateValue.ARMED_NIGHT, "mdi:weather-night", "--info-color", "Armed Night", False),
        AlarmState(AlarmStateValue.ARMED_VACATION, "mdi:airplane", "--warning-color", "Armed Vacation", False),
        AlarmState(
            AlarmStateValue.ARMED_CUSTOM_BYPASS,
            "mdi:shield-check",
            "--warning-color",
            "Armed Custom",
            False,
        ),
        AlarmState(AlarmStateValue.ARMING, "mdi:shield-sync", "--info-color", "Arming", True),
        AlarmState(AlarmStateValue.DISARMING, "mdi:shield-sync", "--info-color", "Disarming", True),
        AlarmState(AlarmStateValue.PENDING, "mdi:clock-outline", "--warning-color", "Pending", True),
        AlarmState(AlarmStateValue.TRIGGERED, "mdi:shield-alert", "--error-color", "Triggered", True),
        AlarmState(AlarmStateValue.UNKNOWN, "mdi:help-circle", "--disabled-text-color", "Unknown", False),
    )
}


def parse_state(raw_state: str | None) -> AlarmStateValue:
    """Return the enum value for a raw state string, case-insensitively.

    Anything unrecognized (including None) is UNKNOWN.
    """
    if not isinstance(raw_state, str):
        return AlarmStateValue.UNKNOWN
    try:
        return AlarmStateValue(raw_state.lower())
    except ValueError:
        return AlarmStateValue.UNKNOWN


def map_state(raw_state: str | None) -> AlarmState:
    """Map a raw alarm entity state to its display state. Never raises."""
    return _STATE_TABLE[parse_state(raw_state)]


def icon_for(state: AlarmStateValue | str | None) -> str:
    return map_state(state).icon


def color_for(state: AlarmStateValue | str | None) -> str:
    return map_state(state).color


def label_for(state: AlarmStateValue | str | None) -> str:
    return map_state(state).label
