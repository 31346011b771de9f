from types import SimpleNamespace

from custom_components.ring_alarm_panel.models import PanelOptions
from custom_components.ring_alarm_panel.runtime.snapshot import PanelView
from custom_components.ring_alarm_panel.runtime.transition import TransitionState


def test_options_defaults():
    entry = SimpleNamespace(data={"entity": "alarm_control_panel.home"}, options={})
    options = PanelOptions.from_entry(entry)
    assert options.entity == "alarm_control_panel.home"
    assert options.vacation_entity is None
    assert options.title == "Alarm"
    assert options.show_state_text is True
    assert options.compact_mode is False


def test_options_override_data():
    entry = SimpleNamespace(
        data={"entity": "alarm_control_panel.home", "title": "Old"},
        options={"title": "House", "vacation_entity": "input_boolean.vacation", "compact_mode": True},
    )
    options = PanelOptions.from_entry(entry)
    assert options.title == "House"
    assert options.vacation_entity == "input_boolean.vacation"
    assert options.display() == {"title": "House", "show_state_text": True, "compact_mode": True}


def test_view_as_dict_without_state():
    view = PanelView(alarm_state=None, transition=TransitionState.empty(), buttons={}, vacation=None)
    data = view.as_dict()
    assert data["alarm_state"] is None
    assert data["transition"]["is_transitioning"] is False
    assert data["vacation"] is None
    assert data["entity_error"] is None
