"""Colours, rectangles and EPDC constants shared by the framebuffer code."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar

DISPLAYWIDTH = 1404
DISPLAYHEIGHT = 1872

FBIOPUT_VSCREENINFO = 0x4601
FBIOGET_VSCREENINFO = 0x4600
FBIOGET_FSCREENINFO = 0x4602
FBIOGETCMAP = 0x4604
FBIOPUTCMAP = 0x4605
FBIOPAN_DISPLAY = 0x4606
FBIO_CURSOR = 0x4608

# Enables PXP_LUT_INVERT transform on the buffer
EPDC_FLAG_ENABLE_INVERSION = 0x0001
# Enables PXP_LUT_BLACK_WHITE transform on the buffer
EPDC_FLAG_FORCE_MONOCHROME = 0x0002
# Enables PXP_USE_CMAP transform on the buffer
EPDC_FLAG_USE_CMAP = 0x0004
# Double buffering: the bitmap handed over must lie within smem.
EPDC_FLAG_USE_ALT_BUFFER = 0x0100
# Updates carrying this flag are not merged on collision unless identical.
EPDC_FLAG_TEST_COLLISION = 0x0200
EPDC_FLAG_GROUP_UPDATE = 0x0400

DRAWING_QUANT_BIT = 0x7614_3B24
DRAWING_QUANT_BIT_2 = 0x75E7_BB24
DRAWING_QUANT_BIT_3 = 0x5_3ED4

_FIXED_NATIVE = {
    "black": (0x00, 0x00),
    "red": (0x00, 0xF8),
    "green": (0xE0, 0x07),
    "blue": (0x1F, 0x00),
    "white": (0xFF, 0xFF),
}
_COMPONENT_COUNT = {"native": 2, "rgb": 3, "gray": 1}


def _check_byte(value: int) -> int:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"colour component {value} is outside 0..255")
    return value


def rgb_to_native(r8: int, g8: int, b8: int) -> tuple[int, int]:
    """Convert 8-bit RGB components to little-endian RGB565 bytes."""
    r5 = (_check_byte(r8) + 1) * 0b11111 // 255
    g6 = (_check_byte(g8) + 1) * 0b111111 // 255
    b5 = (_check_byte(b8) + 1) * 0b11111 // 255
    rgb565 = (r5 << 11) | (g6 << 5) | b5
    return rgb565 & 0xFF, rgb565 >> 8


@dataclass(frozen=True)
class Color:
    """A display colour: a named colour, raw RGB565 bytes, RGB or a gray level."""

    kind: str = "white"
    components: tuple[int, ...] = ()

    BLACK: ClassVar[Color]
    RED: ClassVar[Color]
    GREEN: ClassVar[Color]
    BLUE: ClassVar[Color]
    WHITE: ClassVar[Color]

    def __post_init__(self) -> None:
        if self.kind in _FIXED_NATIVE:
            expected = 0
        elif self.kind in _COMPONENT_COUNT:
            expected = _COMPONENT_COUNT[self.kind]
        else:
            raise ValueError(f"unknown colour kind {self.kind!r}")
        components = tuple(self.components)
        if len(components) != expected:
            raise ValueError(
                f"colour kind {self.kind!r} takes {expected} components, got {len(components)}"
            )
        for value in components:
            _check_byte(value)
        object.__setattr__(self, "components", components)

    @classmethod
    def from_native(cls, c) -> Color:
        """Wrap two raw RGB565 little-endian bytes."""
        lo, hi = c
        return cls("native", (lo, hi))

    @classmethod
    def rgb(cls, r, g, b) -> Color:
        return cls("rgb", (r, g, b))

    @classmethod
    def gray(cls, level) -> Color:
        """A gray level where 0 is white and 255 is black."""
        return cls("gray", (level,))

    def as_native(self) -> tuple[int, int]:
        """The two RGB565 little-endian bytes written to the framebuffer."""
        if self.kind in _FIXED_NATIVE:
            return _FIXED_NATIVE[self.kind]
        if self.kind == "native":
            lo, hi = self.components
            return lo, hi
        if self.kind == "gray":
            (level,) = self.components
            inverse = 255 - level
            return rgb_to_native(inverse, inverse, inverse)
        r8, g8, b8 = self.components
        return rgb_to_native(r8, g8, b8)

    def to_rgb565(self) -> tuple[int, int]:
        return self.as_native()

    def to_rgb8(self) -> tuple[int, int, int]:
        lo, hi = self.as_native()
        rgb565 = lo | (hi << 8)
        r5 = (rgb565 >> 11) & 0b11111
        g6 = (rgb565 >> 5) & 0b111111
        b5 = rgb565 & 0b11111
        return r5 * 255 // 0b11111, g6 * 255 // 0b111111, b5 * 255 // 0b11111


Color.BLACK = Color("black")
Color.RED = Color("red")
Color.GREEN = Color("green")
Color.BLUE = Color("blue")
Color.WHITE = Color("white")


@dataclass(frozen=True)
class MxcfbRect:
    """A screen region in pixels; points and sizes are (x, y) tuples."""

    top: int = 0
    left: int = 0
    width: int = 0
    height: int = 0

    def top_left(self) -> tuple[int, int]:
        return self.left, self.top

    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @classmethod
    def from_point(cls, pos, size) -> MxcfbRect:
        x, y = pos
        width, height = size
        return cls(top=y, left=x, width=width, height=height)

    @classmethod
    def invalid(cls) -> MxcfbRect:
        return cls(top=9999, left=9999, width=0, height=0)

    def contains_point(self, p) -> bool:
        x, y = p
        return not (
            x < self.left
            or x > self.left + self.width
            or y < self.top
            or y > self.top + self.height
        )

    def contains_rect(self, rect: MxcfbRect) -> bool:
        return self.contains_point((rect.left, rect.top)) and self.contains_point(
            (rect.left + rect.width, rect.top + rect.height)
        )

    def merge_pixel(self, p) -> MxcfbRect:
        x, y = p
        top = min(self.top, y)
        left = min(self.left, x)
        bottom = max(self.top + self.height, y)
        right = max(self.left + self.width, x)
        return MxcfbRect(top=top, left=left, width=right - left, height=bottom - top)

    def _is_empty(self) -> bool:
        return self.height == 0 or self.width == 0

    def merge_rect(self, rect: MxcfbRect) -> MxcfbRect:
        if self._is_empty() and rect._is_empty():
            return MxcfbRect.invalid()
        if self._is_empty():
            return rect
        if rect._is_empty():
            return self
        top = min(self.top, rect.top)
        left = min(self.left, rect.left)
        bottom = max(self.top + self.height, rect.top + rect.height)
        right = max(self.left + self.width, rect.left + rect.width)
        return MxcfbRect(top=top, left=left, width=right - left, height=bottom - top)

    def expand(self, margin: int) -> MxcfbRect:
        return MxcfbRect(
            top=self.top - margin if self.top > margin else 0,
            left=self.left - margin if self.left > margin else 0,
            width=self.width + 2 * margin,
            height=self.height + 2 * margin,
        )


class MxcfbIoctl(IntEnum):
    MXCFB_NONE = 0x00
    MXCFB_SET_WAVEFORM_MODES = 0x2B
    MXCFB_SET_TEMPERATURE = 0x2C
    MXCFB_SET_AUTO_UPDATE_MODE = 0x2D
    MXCFB_SEND_UPDATE = 0x2E
    MXCFB_WAIT_FOR_UPDATE_COMPLETE = 0x2F
    MXCFB_SET_PWRDOWN_DELAY = 0x30
    MXCFB_GET_PWRDOWN_DELAY = 0x31
    MXCFB_SET_UPDATE_SCHEME = 0x32
    MXCFB_GET_WORK_BUFFER = 0x34
    MXCFB_DISABLE_EPDC_ACCESS = 0x35
    MXCFB_ENABLE_EPDC_ACCESS = 0x36


class AutoUpdateMode(IntEnum):
    AUTO_UPDATE_MODE_REGION_MODE = 0
    AUTO_UPDATE_MODE_AUTOMATIC_MODE = 1


class UpdateScheme(IntEnum):
    UPDATE_SCHEME_SNAPSHOT = 0
    UPDATE_SCHEME_QUEUE = 1
    UPDATE_SCHEME_QUEUE_AND_MERGE = 2


class UpdateMode(IntEnum):
    # Returns a marker; no locking, no waiting on the region.
    UPDATE_MODE_PARTIAL = 0
    # Waits for other updates in the region and runs after them.
    UPDATE_MODE_FULL = 1


class DitherMode(IntEnum):
    EPDC_FLAG_USE_DITHERING_PASSTHROUGH = 0x0
    EPDC_FLAG_USE_DITHERING_DRAWING = 0x1
    EPDC_FLAG_USE_DITHERING_Y1 = 0x00_2000
    EPDC_FLAG_USE_REMARKABLE_DITHER = 0x30_0F30
    EPDC_FLAG_USE_DITHERING_Y4 = 0x00_4000
    EPDC_FLAG_USE_DITHERING_ALPHA = 0x3FF0_0000
    EPDC_FLAG_USE_DITHERING_BETA = 0x7546_1440
    EPDC_FLAG_EXP1 = 0x270_CE20
    EPDC_FLAG_EXP2 = 0x270_DB98
    EPDC_FLAG_EXP3 = 0x274_45A0
    EPDC_FLAG_EXP4 = 0x274_6F68
    EPDC_FLAG_EXP5 = 0x274_AA58
    EPDC_FLAG_EXP6 = 0x274_BD40
    EPDC_FLAG_EXP7 = 0x7ECF_22C0
    EPDC_FLAG_EXP8 = 0x7ED3_D2C0


class WaveformMode(IntEnum):
    # Screen goes to white.
    WAVEFORM_MODE_INIT = 0x0
    # Direct update, gray to black/white only; used for drawing.
    WAVEFORM_MODE_DU = 0x1
    # High fidelity.
    WAVEFORM_MODE_GC16 = 0x2
    # Medium fidelity, used for UI.
    WAVEFORM_MODE_GC16_FAST = 0x3
    # Quick black to white transitions.
    WAVEFORM_MODE_GLR16 = 0x4
    WAVEFORM_MODE_GLD16 = 0x5
    WAVEFORM_MODE_GL16_FAST = 0x6
    WAVEFORM_MODE_DU4 = 0x7
    WAVEFORM_MODE_REAGL = 0x8
    WAVEFORM_MODE_REAGLD = 0x9
    WAVEFORM_MODE_GL4 = 0xA
    WAVEFORM_MODE_GL16_INV = 0xB
    WAVEFORM_MODE_AUTO = 257


class DisplayTemp(IntEnum):
    # Lowest draw latency.
    TEMP_USE_REMARKABLE_DRAW = 0x0018
    TEMP_USE_AMBIENT = 0x1000
    TEMP_USE_PAPYRUS = 0x1001
    TEMP_USE_MAX = 0xFFFF