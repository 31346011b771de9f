"""Entity snapshots (input) and panel view (output) models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .alarm_state import AlarmState
    from .buttons import ButtonState
    from .controls import ControlActionType
    from .transition import TransitionState
    from .vacation import VacationState

STATE_UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class RawSnapshot:
    """One read of an external entity."""

    entity_id: str
    state: str
    attributes: Mapping[str, Any] = field(default_factory=dict)
    last_updated: datetime | None = None

    @property
    def domain(self) -> str:
        return self.entity_id.split(".", 1)[0]

    @property
    def is_unavailable(self) -> bool:
        return self.state == STATE_UNAVAILABLE


class EntityErrorType(StrEnum):
    NOT_FOUND = "not_found"
    INVALID_DOMAIN = "invalid_domain"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class EntityError:
    """Why an entity cannot be shown."""

    type: EntityErrorType
    message: str
    entity_id: str

    def as_dict(self) -> dict[str, str]:
        return {"type": str(self.type), "message": self.message, "entity_id": self.entity_id}


@dataclass(frozen=True)
class PanelView:
    """Everything the panel renders, recomputed after every input."""

    alarm_state: AlarmState | None
    transition: TransitionState
    buttons: dict[ControlActionType, ButtonState]
    vacation: VacationState | None
    entity_error: EntityError | None = None
    vacation_error: EntityError | None = None
    display: dict[str, Any] = field(default_factory=dict)
    ts: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def button(self, action: ControlActionType | str) -> ButtonState | None:
        for key, state in self.buttons.items():
            if key == action:
                return state
        return None

    def as_dict(self) -> dict[str, Any]:
        return {
            "alarm_state": self.alarm_state.as_dict() if self.alarm_state else None,
            "transition": self.transition.as_dict(),
            "buttons": {str(key): state.as_dict() for key, state in self.buttons.items()},
            "vacation": self.vacation.as_dict() if self.vacation else None,
            "entity_error": self.entity_error.as_dict() if self.entity_error else None,
            "vacation_error": self.vacation_error.as_dict() if self.vacation_error else None,
            "display": dict(self.display),
            "ts": self.ts,
        }
