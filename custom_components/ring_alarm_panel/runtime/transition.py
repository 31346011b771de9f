"""Transition tracking for timed alarm states (arming, pending, disarming).

The alarm entity only reports a countdown when it pushes a new state, which
may be seconds apart. This module resolves where a transition is heading,
how long it lasts, and how far along it is. Between pushes the engine calls
:func:`interpolate` on a short tick so progress keeps moving.

Lifecycle of a transition::

    idle --(transitional snapshot)--> transitioning(target, total)
    transitioning --(same target, same phase)--> transitioning (total kept)
    transitioning --(new target or new phase)--> transitioning (total recaptured)
    transitioning --(stable state / entity gone)--> idle
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

from .alarm_state import AlarmStateValue
from .controls import ControlActionType

TRANSITIONAL_STATES = frozenset(
    {
        AlarmStateValue.ARMING,
        AlarmStateValue.PENDING,
        AlarmStateValue.DISARMING,
    }
)

# Upstream sources spell the target attribute differently; most specific first.
ARMING_TARGET_KEYS = ("targetState", "target_state", "next_state", "arm_mode", "mode")
PENDING_TARGET_KEYS = ("targetState", "target_state")
PENDING_PREVIOUS_KEY = "previous_state"
REMAINING_SECONDS_KEYS = ("exitSecondsLeft", "exit_seconds_left", "delay", "seconds_left")

# Policy: an arming or pending panel with no usable hint is assumed to head to away.
DEFAULT_ARM_TARGET = ControlActionType.ARM_AWAY

_PENDING_TARGETS = {
    "armed_home": ControlActionType.ARM_HOME,
    "home": ControlActionType.ARM_HOME,
    "armed_away": ControlActionType.ARM_AWAY,
    "away": ControlActionType.ARM_AWAY,
}

_PREVIOUS_STATE_TARGETS = {
    "armed_home": ControlActionType.ARM_HOME,
    "armed_away": ControlActionType.ARM_AWAY,
}


class TransitionStep(StrEnum):
    """What a snapshot did to the transition."""

    IDLE = "idle"
    STARTED = "started"
    RETARGETED = "retargeted"
    CONTINUED = "continued"
    CLEARED = "cleared"


@dataclass(frozen=True)
class TransitionState:
    """Progress of the current timed transition, if any."""

    is_transitioning: bool
    target_action: ControlActionType | None
    total_duration: float
    remaining_seconds: float
    progress: float
    started_at: datetime | None
    phase: AlarmStateValue | None = None

    @classmethod
    def empty(cls) -> "TransitionState":
        return cls(
            is_transitioning=False,
            target_action=None,
            total_duration=0.0,
            remaining_seconds=0.0,
            progress=0.0,
            started_at=None,
            phase=None,
        )

    @classmethod
    def start(
        cls,
        target_action: ControlActionType | None,
        remaining_seconds: float,
        phase: AlarmStateValue | None = None,
        started_at: datetime | None = None,
    ) -> "TransitionState":
        return cls(
            is_transitioning=target_action is not None,
            target_action=target_action,
            total_duration=capture_initial_duration(remaining_seconds),
            remaining_seconds=remaining_seconds,
            progress=0.0,
            started_at=started_at or datetime.now(timezone.utc),
            phase=phase,
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "is_transitioning": self.is_transitioning,
            "target_action": str(self.target_action) if self.target_action else None,
            "total_duration": self.total_duration,
            "remaining_seconds": self.remaining_seconds,
            "progress": self.progress,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "phase": str(self.phase) if self.phase else None,
        }


def is_transitional(alarm_state: AlarmStateValue | None) -> bool:
    return alarm_state in TRANSITIONAL_STATES


def _first_present(attributes: Mapping[str, Any], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = attributes.get(key)
        if value is not None:
            return str(value).lower()
    return None


def explicit_arming_target(attributes: Mapping[str, Any]) -> ControlActionType | None:
    """Return the arming target named by the attributes, or None when none is given."""
    value = _first_present(attributes, ARMING_TARGET_KEYS)
    if value is None:
        return None
    if "home" in value:
        return ControlActionType.ARM_HOME
    if "away" in value:
        return ControlActionType.ARM_AWAY
    return None


def resolve_target(
    alarm_state: AlarmStateValue | None, attributes: Mapping[str, Any] | None
) -> ControlActionType | None:
    """Resolve which stable state a transitional alarm state is heading to."""
    attributes = attributes or {}

    if alarm_state == AlarmStateValue.DISARMING:
        return ControlActionType.DISARM

    if alarm_state == AlarmStateValue.ARMING:
        return explicit_arming_target(attributes) or DEFAULT_ARM_TARGET

    if alarm_state == AlarmStateValue.PENDING:
        target = _PENDING_TARGETS.get(_first_present(attributes, PENDING_TARGET_KEYS) or "")
        if target is not None:
            return target
        previous = _first_present(attributes, (PENDING_PREVIOUS_KEY,))
        return _PREVIOUS_STATE_TARGETS.get(previous or "", DEFAULT_ARM_TARGET)

    return None


def remaining_seconds_from(attributes: Mapping[str, Any] | None) -> float:
    """Read the countdown from the first numeric remaining-seconds attribute."""
    for key in REMAINING_SECONDS_KEYS:
        value = (attributes or {}).get(key)
        if value is None or isinstance(value, bool):
            continue
        try:
            seconds = float(value)
        except (TypeError, ValueError):
            continue
        if math.isfinite(seconds):
            return seconds
    return 0.0


def calculate_progress(remaining_seconds: float, total_duration: float) -> float:
    """Percent complete (0-100) for a countdown of ``total_duration`` seconds."""
    if total_duration <= 0:
        return 100.0
    if remaining_seconds < 0:
        return 100.0
    if remaining_seconds >= total_duration:
        return 0.0
    return ((total_duration - remaining_seconds) / total_duration) * 100


def capture_initial_duration(remaining_seconds: float) -> float:
    return max(0.0, float(remaining_seconds))


def next_transition(
    current: TransitionState,
    alarm_state: AlarmStateValue | None,
    attributes: Mapping[str, Any] | None,
    *,
    last_clicked: ControlActionType | None = None,
) -> tuple[TransitionState, TransitionStep]:
    """Advance the transition for a new alarm snapshot.

    ``alarm_state`` is None when the entity is missing or unavailable.
    ``last_clicked`` is used as the arming target when the snapshot carries
    no target attribute.
    """
    if not is_transitional(alarm_state):
        if current.is_transitioning:
            return TransitionState.empty(), TransitionStep.CLEARED
        return TransitionState.empty(), TransitionStep.IDLE

    attributes = attributes or {}
    target = resolve_target(alarm_state, attributes)
    if (
        alarm_state == AlarmStateValue.ARMING
        and explicit_arming_target(attributes) is None
        and last_clicked in (ControlActionType.ARM_HOME, ControlActionType.ARM_AWAY)
    ):
        target = last_clicked

    remaining = remaining_seconds_from(attributes)

    if not current.is_transitioning:
        return TransitionState.start(target, remaining, phase=alarm_state), TransitionStep.STARTED

    if current.target_action != target:
        return TransitionState.start(target, remaining, phase=alarm_state), TransitionStep.RETARGETED

    if current.phase != alarm_state:
        return TransitionState.start(target, remaining, phase=alarm_state), TransitionStep.STARTED

    return (
        replace(
            current,
            remaining_seconds=remaining,
            progress=calculate_progress(remaining, current.total_duration),
        ),
        TransitionStep.CONTINUED,
    )


def interpolate(state: TransitionState, last_remaining: float, elapsed: float) -> TransitionState:
    """Recompute progress ``elapsed`` seconds after ``last_remaining`` was reported."""
    if not state.is_transitioning:
        return state
    effective = min(max(last_remaining - elapsed, 0.0), state.total_duration)
    return replace(
        state,
        remaining_seconds=float(math.ceil(effective)),
        progress=calculate_progress(effective, state.total_duration),
    )
