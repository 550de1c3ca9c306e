"""Input event codes and the decoded event types of the three tablet devices."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum, auto

# Event types
EV_SYN = 0x00
EV_KEY = 0x01  # BTN prefixed codes are EV_KEY events too
EV_ABS = 0x03

# Sync events
SYN_REPORT = 0x00

# Absolute multitouch (touchscreen)
ABS_MT_SLOT = 0x2F
ABS_MT_TOUCH_MAJOR = 0x30
ABS_MT_TOUCH_MINOR = 0x31
ABS_MT_ORIENTATION = 0x34
ABS_MT_POSITION_X = 0x35
ABS_MT_POSITION_Y = 0x36
ABS_MT_TRACKING_ID = 0x39
ABS_MT_PRESSURE = 0x3A

# Absolute (digitizer)
ABS_PRESSURE = 0x18
ABS_DISTANCE = 0x19
ABS_TILT_X = 0x1A
ABS_TILT_Y = 0x1B
ABS_X = 0x00
ABS_Y = 0x01

# Keys (digitizer buttons)
BTN_TOOL_PEN = 0x140
BTN_TOOL_RUBBER = 0x141
BTN_TOUCH = 0x14A
BTN_STYLUS = 0x14B
BTN_STYLUS2 = 0x14C

# Keys (physical buttons)
KEY_HOME = 0x66  # the middle button
KEY_LEFT = 0x69
KEY_RIGHT = 0x6A
KEY_POWER = 0x74
KEY_WAKEUP = 0x8F


@dataclass(frozen=True)
class EvEvent:
    """A raw event as read from an evdev device."""

    event_type: int
    code: int
    value: int


class InputDevice(Enum):
    WACOM = auto()
    MULTITOUCH = auto()
    GPIO = auto()
    UNKNOWN = auto()


class WacomPen(IntEnum):
    """Digitizer tools and buttons, valued by their key codes."""

    # Selected when the pen comes within reach of the digitizer.
    TOOL_PEN = BTN_TOOL_PEN
    TOOL_RUBBER = BTN_TOOL_RUBBER
    # The pen touching the display.
    TOUCH = BTN_TOUCH
    STYLUS = BTN_STYLUS
    STYLUS2 = BTN_STYLUS2


class WacomEventType(Enum):
    INSTRUMENT_CHANGE = auto()
    HOVER = auto()
    DRAW = auto()
    UNKNOWN = auto()


@dataclass(frozen=True)
class WacomEvent:
    """A digitizer event: an instrument change, a hover or a draw."""

    kind: WacomEventType = WacomEventType.UNKNOWN
    pen: WacomPen | None = None
    state: bool = False
    position: tuple[float, float] | None = None
    distance: int = 0
    pressure: int = 0
    tilt: tuple[int, int] | None = None

    def __post_init__(self) -> None:
        if self.kind is WacomEventType.INSTRUMENT_CHANGE and self.pen is None:
            raise ValueError("an instrument change needs a pen")
        if self.kind in (WacomEventType.HOVER, WacomEventType.DRAW) and (
            self.position is None or self.tilt is None
        ):
            raise ValueError(f"a {self.kind.name.lower()} event needs a position and a tilt")


@dataclass
class Finger:
    """The tracked state of one touch contact."""

    tracking_id: int = -1  # never seen by an event receiver
    pos: tuple[int, int] = (0xFFFF, 0xFFFF)
    pos_updated: bool = False
    last_pressed: bool = False
    pressed: bool = False


_MULTITOUCH_KINDS = ("press", "release", "move", "unknown")


@dataclass(frozen=True)
class MultitouchEvent:
    """A touch contact being pressed, released or moved."""

    kind: str = "unknown"
    contact: Finger | None = None

    def __post_init__(self) -> None:
        if self.kind not in _MULTITOUCH_KINDS:
            raise ValueError(f"unknown multitouch event kind {self.kind!r}")
        if (self.kind == "unknown") != (self.contact is None):
            raise ValueError("only unknown multitouch events come without a finger")

    def finger(self) -> Finger | None:
        """The finger this event concerns, or None for an unknown event."""
        return self.contact


class PhysicalButton(Enum):
    LEFT = auto()
    MIDDLE = auto()
    RIGHT = auto()
    POWER = auto()
    WAKEUP = auto()


_GPIO_KINDS = ("press", "unpress", "unknown")


@dataclass(frozen=True)
class GPIOEvent:
    """A physical button being pressed or released."""

    kind: str = "unknown"
    button: PhysicalButton | None = None

    def __post_init__(self) -> None:
        if self.kind not in _GPIO_KINDS:
            raise ValueError(f"unknown button event kind {self.kind!r}")
        if (self.kind == "unknown") != (self.button is None):
            raise ValueError("only unknown button events come without a button")


_EVENT_CLASS = {
    InputDevice.WACOM: WacomEvent,
    InputDevice.MULTITOUCH: MultitouchEvent,
    InputDevice.GPIO: GPIOEvent,
    InputDevice.UNKNOWN: type(None),
}


@dataclass(frozen=True)
class InputEvent:
    """A decoded event together with the device it came from."""

    device: InputDevice = InputDevice.UNKNOWN
    event: WacomEvent | MultitouchEvent | GPIOEvent | None = None

    def __post_init__(self) -> None:
        expected = _EVENT_CLASS[self.device]
        if not isinstance(self.event, expected):
            raise ValueError(
                f"{self.device.name} events must be {expected.__name__}, "
                f"got {type(self.event).__name__}"
            )