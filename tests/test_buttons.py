from custom_components.ring_alarm_panel.runtime.alarm_state import AlarmStateValue
from custom_components.ring_alarm_panel.runtime.buttons import ButtonStateStore, StoredButtonFlags
from custom_components.ring_alarm_panel.runtime.controls import ControlActionType
from custom_components.ring_alarm_panel.runtime.transition import TransitionState

DISARM = ControlActionType.DISARM
ARM_HOME = ControlActionType.ARM_HOME
ARM_AWAY = ControlActionType.ARM_AWAY


def test_failure_touches_only_its_own_key():
    store = ButtonStateStore()
    token = store.begin(ARM_HOME)
    assert store.fail(ARM_HOME, token) is True

    assert store.flags(ARM_HOME) == StoredButtonFlags(is_loading=False, has_error=True)
    assert store.flags(DISARM) == StoredButtonFlags()
    assert store.flags(ARM_AWAY) == StoredButtonFlags()


def test_click_blocked_while_loading_or_locked():
    store = ButtonStateStore()
    assert store.can_click(DISARM, AlarmStateValue.ARMED_AWAY) is True
    store.begin(DISARM)
    assert store.can_click(DISARM, AlarmStateValue.ARMED_AWAY) is False
    assert store.can_click(ARM_HOME, AlarmStateValue.ARMED_AWAY) is True
    assert store.can_click(ARM_HOME, AlarmStateValue.ARMING) is False
    assert store.can_click(ARM_HOME, None) is False


def test_stale_error_clear_is_ignored():
    store = ButtonStateStore()
    first = store.begin(DISARM)
    store.fail(DISARM, first)
    second = store.begin(DISARM)
    store.fail(DISARM, second)

    assert store.clear_error(DISARM, first) is False
    assert store.flags(DISARM).has_error is True
    assert store.clear_error(DISARM, second) is True
    assert store.flags(DISARM).has_error is False


def test_begin_resets_previous_error():
    store = ButtonStateStore()
    token = store.begin(ARM_AWAY)
    store.fail(ARM_AWAY, token)
    store.begin(ARM_AWAY)
    assert store.flags(ARM_AWAY) == StoredButtonFlags(is_loading=True, has_error=False)
    assert store.generation(ARM_AWAY) == 2


def test_view_computes_active_and_disabled():
    store = ButtonStateStore()
    view = store.view(AlarmStateValue.ARMED_HOME, TransitionState.empty())
    assert view[ARM_HOME].is_active is True
    assert view[DISARM].is_active is False
    assert not any(state.is_disabled for state in view.values())

    locked = store.view(None, TransitionState.empty())
    assert all(state.is_disabled for state in locked.values())


def test_view_marks_transition_target():
    store = ButtonStateStore()
    transition = TransitionState.start(ARM_HOME, 20, phase=AlarmStateValue.ARMING)
    view = store.view(AlarmStateValue.ARMING, transition)

    assert view[ARM_HOME].is_transition_target is True
    assert view[ARM_HOME].transition_progress == 0
    assert view[ARM_HOME].transition_remaining_seconds == 20
    assert view[ARM_AWAY].is_transition_target is False
    assert view[ARM_AWAY].transition_progress is None
