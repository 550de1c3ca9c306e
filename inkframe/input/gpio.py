"""Decoding of physical button events."""

from __future__ import annotations

import logging
import threading

from .events import (
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

_log = logging.getLogger(__name__)

_KEY_BUTTONS = {
    KEY_HOME: PhysicalButton.MIDDLE,
    KEY_LEFT: PhysicalButton.LEFT,
    KEY_RIGHT: PhysicalButton.RIGHT,
    KEY_POWER: PhysicalButton.POWER,
    KEY_WAKEUP: PhysicalButton.WAKEUP,
}


class GPIOState:
    """Which physical buttons are currently held down."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pressed = dict.fromkeys(PhysicalButton, False)

    def is_pressed(self, button: PhysicalButton) -> bool:
        with self._lock:
            return self._pressed[button]

    def _set(self, button: PhysicalButton, pressed: bool) -> None:
        with self._lock:
            self._pressed[button] = pressed


def decode(ev: EvEvent, state: GPIOState) -> InputEvent | None:
    """Turn a raw button event into an InputEvent, updating `state`."""
    if not isinstance(state, GPIOState):
        raise TypeError("button events need a GPIOState")
    if ev.event_type == EV_SYN:
        return None
    if ev.event_type == EV_KEY:
        button = _KEY_BUTTONS.get(ev.code)
        if button is None:
            return None
        pressed = ev.value != 0
        state._set(button, pressed)
        return InputEvent(
            device=InputDevice.GPIO,
            event=GPIOEvent("press" if pressed else "unpress", button),
        )
    _log.error("Unknown event on physical button handler (type: %s)", ev.event_type)
    return None