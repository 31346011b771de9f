import pytest

from custom_components.ring_alarm_panel.runtime.alarm_state import AlarmStateValue
from custom_components.ring_alarm_panel.runtime.controls import ControlActionType
from custom_components.ring_alarm_panel.runtime.transition import (
    TransitionState,
    TransitionStep,
    calculate_progress,
    capture_initial_duration,
    interpolate,
    is_transitional,
    next_transition,
    remaining_seconds_from,
    resolve_target,
)

ARMING = AlarmStateValue.ARMING
PENDING = AlarmStateValue.PENDING


def test_transitional_partition():
    transitional = {value for value in AlarmStateValue if is_transitional(value)}
    assert transitional == {AlarmStateValue.ARMING, AlarmStateValue.PENDING, AlarmStateValue.DISARMING}
    assert is_transitional(None) is False


def test_disarming_always_targets_disarm():
    assert resolve_target(AlarmStateValue.DISARMING, {"target_state": "armed_home"}) == ControlActionType.DISARM


@pytest.mark.parametrize(
    "attributes, expected",
    [
        ({"targetState": "ARMED_HOME"}, ControlActionType.ARM_HOME),
        ({"next_state": "armed_away"}, ControlActionType.ARM_AWAY),
        ({"arm_mode": "home"}, ControlActionType.ARM_HOME),
        ({"mode": "Away"}, ControlActionType.ARM_AWAY),
        ({}, ControlActionType.ARM_AWAY),
        ({"next_state": "armed_night"}, ControlActionType.ARM_AWAY),
    ],
)
def test_arming_target(attributes, expected):
    assert resolve_target(ARMING, attributes) == expected


def test_arming_prefers_most_specific_key():
    attributes = {"mode": "away", "target_state": "armed_home"}
    assert resolve_target(ARMING, attributes) == ControlActionType.ARM_HOME


def test_arming_stops_at_first_present_key():
    # an unrecognized value in a higher priority key is not skipped
    attributes = {"next_state": "armed_night", "mode": "home"}
    assert resolve_target(ARMING, attributes) == ControlActionType.ARM_AWAY


def test_pending_target_resolution():
    assert resolve_target(PENDING, {"target_state": "home"}) == ControlActionType.ARM_HOME
    assert resolve_target(PENDING, {"targetState": "armed_away"}) == ControlActionType.ARM_AWAY
    assert resolve_target(PENDING, {"previous_state": "armed_home"}) == ControlActionType.ARM_HOME
    assert resolve_target(PENDING, {"previous_state": "disarmed"}) == ControlActionType.ARM_AWAY
    assert resolve_target(PENDING, None) == ControlActionType.ARM_AWAY


def test_stable_states_have_no_target():
    assert resolve_target(AlarmStateValue.ARMED_AWAY, {"target_state": "armed_home"}) is None
    assert resolve_target(AlarmStateValue.UNKNOWN, {}) is None


def test_remaining_seconds_priority_and_filtering():
    assert remaining_seconds_from({"exitSecondsLeft": 12, "delay": 40}) == 12.0
    assert remaining_seconds_from({"exit_seconds_left": "30"}) == 30.0
    assert remaining_seconds_from({"delay": "soon", "seconds_left": 7}) == 7.0
    assert remaining_seconds_from({"delay": True, "seconds_left": 5}) == 5.0
    assert remaining_seconds_from({}) == 0.0
    assert remaining_seconds_from(None) == 0.0


def test_progress_edges():
    assert calculate_progress(30, 30) == 0
    assert calculate_progress(0, 30) == 100
    assert calculate_progress(5, 0) == 100
    assert calculate_progress(-1, 30) == 100
    assert calculate_progress(45, 30) == 0
    assert calculate_progress(15, 30) == 50


def test_progress_bounded_and_monotonic():
    total = 17.0
    previous = -1.0
    remaining = total
    while remaining >= 0:
        progress = calculate_progress(remaining, total)
        assert 0 <= progress <= 100
        assert progress >= previous
        previous = progress
        remaining -= 0.5


def test_capture_initial_duration_clamps_negative():
    assert capture_initial_duration(-3) == 0
    assert capture_initial_duration(20) == 20


def test_transition_starts_with_zero_progress():
    state, step = next_transition(
        TransitionState.empty(), ARMING, {"next_state": "armed_away", "exit_seconds_left": 30}
    )
    assert step == TransitionStep.STARTED
    assert state.is_transitioning is True
    assert state.target_action == ControlActionType.ARM_AWAY
    assert state.total_duration == 30
    assert state.progress == 0


def test_same_target_keeps_total_duration():
    state, _ = next_transition(TransitionState.empty(), ARMING, {"mode": "away", "exit_seconds_left": 30})
    state, step = next_transition(state, ARMING, {"mode": "away", "exit_seconds_left": 15})
    assert step == TransitionStep.CONTINUED
    assert state.total_duration == 30
    assert state.progress == 50

    # a larger remaining value later does not grow the total
    state, _ = next_transition(state, ARMING, {"mode": "away", "exit_seconds_left": 45})
    assert state.total_duration == 30
    assert state.progress == 0


def test_retarget_recaptures_duration():
    state, _ = next_transition(TransitionState.empty(), ARMING, {"mode": "away", "exit_seconds_left": 30})
    state, _ = next_transition(state, ARMING, {"mode": "away", "exit_seconds_left": 20})
    state, step = next_transition(state, ARMING, {"mode": "home", "exit_seconds_left": 15})
    assert step == TransitionStep.RETARGETED
    assert state.total_duration == 15
    assert state.progress == 0
    assert state.target_action == ControlActionType.ARM_HOME


def test_phase_change_restarts_countdown():
    state, _ = next_transition(TransitionState.empty(), ARMING, {"mode": "away", "exit_seconds_left": 30})
    state, step = next_transition(state, PENDING, {"target_state": "armed_away", "delay": 10})
    assert step == TransitionStep.STARTED
    assert state.total_duration == 10
    assert state.phase == PENDING


def test_stable_state_clears_transition():
    state, _ = next_transition(TransitionState.empty(), ARMING, {"exit_seconds_left": 30})
    cleared, step = next_transition(state, AlarmStateValue.ARMED_AWAY, {})
    assert step == TransitionStep.CLEARED
    assert cleared == TransitionState.empty()

    idle, step = next_transition(cleared, AlarmStateValue.DISARMED, {})
    assert step == TransitionStep.IDLE
    assert idle.is_transitioning is False


def test_missing_entity_clears_transition():
    state, _ = next_transition(TransitionState.empty(), ARMING, {"exit_seconds_left": 30})
    cleared, step = next_transition(state, None, None)
    assert step == TransitionStep.CLEARED
    assert cleared.target_action is None


def test_last_clicked_used_without_target_attribute():
    state, _ = next_transition(
        TransitionState.empty(), ARMING, {"exit_seconds_left": 30}, last_clicked=ControlActionType.ARM_HOME
    )
    assert state.target_action == ControlActionType.ARM_HOME

    state, _ = next_transition(
        TransitionState.empty(),
        ARMING,
        {"next_state": "armed_away", "exit_seconds_left": 30},
        last_clicked=ControlActionType.ARM_HOME,
    )
    assert state.target_action == ControlActionType.ARM_AWAY

    state, _ = next_transition(
        TransitionState.empty(), ARMING, {"exit_seconds_left": 30}, last_clicked=ControlActionType.DISARM
    )
    assert state.target_action == ControlActionType.ARM_AWAY


def test_interpolate_moves_progress_between_updates():
    state = TransitionState.start(ControlActionType.ARM_AWAY, 30, phase=ARMING)
    moved = interpolate(state, 30, 6)
    assert moved.progress == pytest.approx(20)
    assert moved.remaining_seconds == 24
    assert moved.total_duration == 30


def test_interpolate_rounds_remaining_up_and_clamps():
    state = TransitionState.start(ControlActionType.ARM_AWAY, 30, phase=ARMING)
    assert interpolate(state, 30, 0.2).remaining_seconds == 30
    done = interpolate(state, 30, 90)
    assert done.remaining_seconds == 0
    assert done.progress == 100
    assert interpolate(state, 50, 0).progress == 0


def test_interpolate_ignores_idle_state():
    empty = TransitionState.empty()
    assert interpolate(empty, 10, 5) is empty
