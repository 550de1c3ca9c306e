"""Pixel and region access to a memory-mapped framebuffer."""

from __future__ import annotations

import logging

from .common import Color, MxcfbRect
from .screeninfo import FixScreeninfo, VarScreeninfo

_log = logging.getLogger(__name__)


class RegionError(ValueError):
    """A region cannot be dumped or restored."""


class FramebufferIO:
    """Reads and writes pixels in an RGB565 frame buffer.

    `frame` is any writable buffer supporting indexing and slice assignment,
    such as a bytearray or an mmap.
    """

    def __init__(self, frame, var_screen_info: VarScreeninfo, fix_screen_info: FixScreeninfo):
        self.frame = frame
        self.var_screen_info = var_screen_info
        self.fix_screen_info = fix_screen_info

    def _bytes_per_pixel(self) -> int:
        return self.var_screen_info.bits_per_pixel // 8

    def _index(self, x: int, y: int) -> int:
        return y * self.fix_screen_info.line_length + x * self._bytes_per_pixel()

    def write_frame(self, frame) -> None:
        """Write raw bytes into the frame buffer starting at offset 0."""
        data = bytes(frame)
        if len(data) > len(self.frame):
            raise ValueError(
                f"frame of {len(data)} bytes does not fit a buffer of {len(self.frame)} bytes"
            )
        self.frame[0 : len(data)] = data

    def write_pixel(self, pos, col: Color) -> None:
        """Write one pixel; positions off the screen are ignored."""
        x, y = pos
        if x < 0 or y < 0:
            return
        if y >= self.var_screen_info.yres or x >= self.var_screen_info.xres:
            return
        index = self._index(x, y)
        lo, hi = col.as_native()
        self.frame[index] = lo
        self.frame[index + 1] = hi

    def read_pixel(self, pos) -> Color:
        """Read one pixel; off-screen positions read as white."""
        x, y = pos
        if y >= self.var_screen_info.yres or x >= self.var_screen_info.xres or x < 0 or y < 0:
            _log.error("Attempting to read pixel out of range. Returning a white pixel.")
            return Color.WHITE
        index = self._index(x, y)
        return Color.from_native((self.frame[index], self.frame[index + 1]))

    def read_offset(self, ofst: int) -> int:
        """Read the byte at `ofst` in the frame buffer."""
        if not 0 <= ofst < len(self.frame):
            raise IndexError(f"offset {ofst} is outside the frame buffer")
        return self.frame[ofst]

    def _check_region(self, rect: MxcfbRect, action: str) -> None:
        if rect.width == 0 or rect.height == 0:
            raise RegionError(f"Unable to {action} a region with zero height/width")
        if rect.top + rect.height > self.var_screen_info.height:
            raise RegionError("Vertically out of bounds")
        if rect.left + rect.width > self.var_screen_info.width:
            raise RegionError("Horizontally out of bounds")

    def _row_spans(self, rect: MxcfbRect):
        chunk = self._bytes_per_pixel() * rect.width
        for row in range(rect.height):
            start = self._index(rect.left, row + rect.top)
            yield start, start + chunk

    def dump_region(self, rect: MxcfbRect) -> bytes:
        """Copy the RGB565 contents of `rect` out of the frame buffer."""
        self._check_region(rect, "dump")
        return b"".join(bytes(self.frame[start:end]) for start, end in self._row_spans(rect))

    def restore_region(self, rect: MxcfbRect, data) -> int:
        """Write `data` from `dump_region` back into `rect`; return bytes written."""
        self._check_region(rect, "restore")
        data = bytes(data)
        if len(data) != rect.width * rect.height * self._bytes_per_pixel():
            raise RegionError("Cannot restore region due to mismatched size")
        written = 0
        for start, end in self._row_spans(rect):
            chunk = end - start
            self.frame[start:end] = data[written : written + chunk]
            written += chunk
        return written