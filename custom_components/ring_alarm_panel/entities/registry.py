"""Entity descriptions for a configured alarm panel."""

from __future__ import annotations

from dataclasses import dataclass

from ..models import PanelOptions
from ..runtime.controls import ControlActionType, actions
from ..runtime.vacation import VACATION_DISPLAY

KEY_ALARM_STATE = "alarm_state"
KEY_TRANSITION_PROGRESS = "transition_progress"
KEY_TRANSITIONING = "transitioning"
KEY_VACATION_MODE = "vacation_mode"
KEY_VACATION_BUTTON = "vacation_toggle"

_ACTION_NAMES = {
    ControlActionType.DISARM: "Disarm",
    ControlActionType.ARM_HOME: "Arm Home",
    ControlActionType.ARM_AWAY: "Arm Away",
}


@dataclass(frozen=True)
class PanelEntityDescription:
    key: str
    name: str
    icon: str | None = None


@dataclass(frozen=True)
class PanelButtonDescription(PanelEntityDescription):
    # None marks the vacation toggle
    action: ControlActionType | None = None


@dataclass(frozen=True)
class PanelRegistry:
    sensors: list[PanelEntityDescription]
    binary_sensors: list[PanelEntityDescription]
    buttons: list[PanelButtonDescription]


def build_registry(options: PanelOptions) -> PanelRegistry:
    sensors = [
        PanelEntityDescription(KEY_ALARM_STATE, "Alarm State"),
        PanelEntityDescription(KEY_TRANSITION_PROGRESS, "Transition Progress", "mdi:progress-clock"),
    ]
    binaries = [PanelEntityDescription(KEY_TRANSITIONING, "Transitioning", "mdi:timer-sand")]
    buttons = [
        PanelButtonDescription(
            key=f"action_{action.type}",
            name=_ACTION_NAMES[action.type],
            icon=action.icon,
            action=action.type,
        )
        for action in actions()
    ]

    if options.vacation_entity:
        binaries.append(PanelEntityDescription(KEY_VACATION_MODE, "Vacation Mode", VACATION_DISPLAY.icon))
        buttons.append(
            PanelButtonDescription(
                key=KEY_VACATION_BUTTON,
                name=f"{VACATION_DISPLAY.label} Toggle",
                icon=VACATION_DISPLAY.icon,
            )
        )

    return PanelRegistry(sensors=sensors, binary_sensors=binaries, buttons=buttons)
