import pytest

from inkframe.input.events import (
    BTN_STYLUS2,
    BTN_TOOL_PEN,
    BTN_TOUCH,
    Finger,
    GPIOEvent,
    InputDevice,
    InputEvent,
    MultitouchEvent,
    PhysicalButton,
    WacomEvent,
    WacomEventType,
    WacomPen,
)


def test_finger_defaults():
    finger = Finger()
    assert finger.tracking_id == -1
    assert finger.pos == (0xFFFF, 0xFFFF)
    assert finger.pressed is False


def test_wacom_pen_from_key_code():
    assert WacomPen(BTN_TOUCH) is WacomPen.TOUCH
    assert WacomPen(BTN_TOOL_PEN) is WacomPen.TOOL_PEN
    assert WacomPen(BTN_STYLUS2) is WacomPen.STYLUS2


def test_wacom_pen_rejects_other_codes():
    with pytest.raises(ValueError):
        WacomPen(BTN_TOOL_PEN - 1)


def test_default_input_event_is_unknown():
    event = InputEvent()
    assert event.device is InputDevice.UNKNOWN
    assert event.event is None


def test_input_event_checks_event_class():
    with pytest.raises(ValueError):
        InputEvent(device=InputDevice.GPIO, event=WacomEvent())


def test_input_event_accepts_matching_event():
    gpio = GPIOEvent("press", PhysicalButton.LEFT)
    event = InputEvent(device=InputDevice.GPIO, event=gpio)
    assert event.event == gpio


def test_multitouch_finger_accessor():
    finger = Finger(tracking_id=3, pos=(10, 20), pressed=True)
    event = MultitouchEvent("press", finger)
    assert event.finger() == finger
    assert MultitouchEvent().finger() is None


def test_multitouch_event_needs_finger():
    with pytest.raises(ValueError):
        MultitouchEvent("move")


def test_multitouch_event_rejects_unknown_kind():
    with pytest.raises(ValueError):
        MultitouchEvent("drag", Finger())


def test_gpio_event_equality_depends_on_kind():
    assert GPIOEvent("press", PhysicalButton.POWER) == GPIOEvent("press", PhysicalButton.POWER)
    assert GPIOEvent("press", PhysicalButton.POWER) != GPIOEvent("unpress", PhysicalButton.POWER)


def test_gpio_event_unknown_without_button():
    with pytest.raises(ValueError):
        GPIOEvent("unknown", PhysicalButton.LEFT)


def test_wacom_draw_needs_position():
    with pytest.raises(ValueError):
        WacomEvent(kind=WacomEventType.DRAW, pressure=100)


def test_wacom_instrument_change_needs_pen():
    with pytest.raises(ValueError):
        WacomEvent(kind=WacomEventType.INSTRUMENT_CHANGE, state=True)


def test_wacom_hover_holds_values():
    event = WacomEvent(
        kind=WacomEventType.HOVER, position=(1.5, 2.5), distance=7, tilt=(3, 4)
    )
    assert event.position == (1.5, 2.5)
    assert event.distance == 7
    assert event.tilt == (3, 4)