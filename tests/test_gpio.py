import pytest

from inkframe.input.events import (
    EV_ABS,
    EV_KEY,
    EV_SYN,
    KEY_HOME,
    KEY_LEFT,
    KEY_POWER,
    KEY_RIGHT,
    KEY_WAKEUP,
    EvEvent,
    GPIOEvent,
    InputDevice,
    InputEvent,
    PhysicalButton,
)
from inkframe.input.gpio import GPIOState, decode


@pytest.mark.parametrize(
    "code, button",
    [
        (KEY_HOME, PhysicalButton.MIDDLE),
        (KEY_LEFT, PhysicalButton.LEFT),
        (KEY_RIGHT, PhysicalButton.RIGHT),
        (KEY_POWER, PhysicalButton.POWER),
        (KEY_WAKEUP, PhysicalButton.WAKEUP),
    ],
)
def test_press_and_release(code, button):
    state = GPIOState()
    pressed = decode(EvEvent(EV_KEY, code, 1), state)
    assert pressed == InputEvent(InputDevice.GPIO, GPIOEvent("press", button))
    assert state.is_pressed(button) is True

    released = decode(EvEvent(EV_KEY, code, 0), state)
    assert released == InputEvent(InputDevice.GPIO, GPIOEvent("unpress", button))
    assert state.is_pressed(button) is False


def test_nonzero_value_counts_as_press():
    state = GPIOState()
    event = decode(EvEvent(EV_KEY, KEY_LEFT, 2), state)
    assert event.event.kind == "press"
    assert state.is_pressed(PhysicalButton.LEFT) is True


def test_sync_event_is_ignored():
    assert decode(EvEvent(EV_SYN, 0, 0), GPIOState()) is None


def test_unknown_key_is_ignored():
    state = GPIOState()
    assert decode(EvEvent(EV_KEY, KEY_HOME + 1, 1), state) is None
    assert not any(state.is_pressed(button) for button in PhysicalButton)


def test_other_event_type_is_ignored():
    assert decode(EvEvent(EV_ABS, KEY_HOME, 1), GPIOState()) is None


def test_buttons_are_tracked_independently():
    state = GPIOState()
    decode(EvEvent(EV_KEY, KEY_LEFT, 1), state)
    decode(EvEvent(EV_KEY, KEY_RIGHT, 1), state)
    decode(EvEvent(EV_KEY, KEY_LEFT, 0), state)
    assert state.is_pressed(PhysicalButton.LEFT) is False
    assert state.is_pressed(PhysicalButton.RIGHT) is True


def test_wrong_state_type():
    with pytest.raises(TypeError):
        decode(EvEvent(EV_KEY, KEY_HOME, 1), object())