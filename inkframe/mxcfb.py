"""EPDC update structures and ioctl request numbers."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from .common import MxcfbRect

_IOC_NRBITS = 8
_IOC_TYPEBITS = 8
_IOC_SIZEBITS = 14
_IOC_NRSHIFT = 0
_IOC_TYPESHIFT = _IOC_NRSHIFT + _IOC_NRBITS
_IOC_SIZESHIFT = _IOC_TYPESHIFT + _IOC_TYPEBITS
_IOC_DIRSHIFT = _IOC_SIZESHIFT + _IOC_SIZEBITS
_IOC_NONE = 0
_IOC_WRITE = 1
_IOC_READ = 2


def _kind_code(kind) -> int:
    if isinstance(kind, (bytes, str)):
        if len(kind) != 1:
            raise ValueError("ioctl kind must be a single character")
        kind = ord(kind)
    if not 0 <= kind < 1 << _IOC_TYPEBITS:
        raise ValueError(f"ioctl kind {kind} out of range")
    return kind


def _ioc(direction: int, kind, nr: int, size: int) -> int:
    if not 0 <= nr < 1 << _IOC_NRBITS:
        raise ValueError(f"ioctl number {nr} out of range")
    if not 0 <= size < 1 << _IOC_SIZEBITS:
        raise ValueError(f"ioctl size {size} out of range")
    return (
        (direction << _IOC_DIRSHIFT)
        | (_kind_code(kind) << _IOC_TYPESHIFT)
        | (nr << _IOC_NRSHIFT)
        | (size << _IOC_SIZESHIFT)
    )


def io(kind, nr) -> int:
    """Request number for an ioctl without an argument."""
    return _ioc(_IOC_NONE, kind, nr, 0)


def iow(kind, nr, size) -> int:
    """Request number for an ioctl that writes a `size` byte argument."""
    return _ioc(_IOC_WRITE, kind, nr, size)


def iowr(kind, nr, size) -> int:
    """Request number for an ioctl that reads and writes a `size` byte argument."""
    return _ioc(_IOC_READ | _IOC_WRITE, kind, nr, size)


_RECT = "4I"
_MARKER_STRUCT = struct.Struct("=2I")
_ALT_STRUCT = struct.Struct("=3I" + _RECT)
_UPDATE_STRUCT = struct.Struct("=" + _RECT + "3IiI2i" + "3I" + _RECT)


def _rect_values(rect: MxcfbRect) -> tuple[int, int, int, int]:
    return rect.top, rect.left, rect.width, rect.height


def _pack(layout: struct.Struct, values) -> bytes:
    try:
        return layout.pack(*values)
    except struct.error as exc:
        raise ValueError(f"cannot pack update data: {exc}") from exc


def _unpack(layout: struct.Struct, data) -> tuple:
    if len(data) != layout.size:
        raise ValueError(f"expected {layout.size} bytes, got {len(data)}")
    return layout.unpack(bytes(data))


@dataclass
class UpdateMarkerData:
    """Marker sent to wait for an update and the collision result returned."""

    update_marker: int = 0
    collision_test: int = 0

    SIZE = _MARKER_STRUCT.size

    def pack(self) -> bytes:
        return _pack(_MARKER_STRUCT, (self.update_marker, self.collision_test))

    @classmethod
    def unpack(cls, data) -> UpdateMarkerData:
        marker, collision = _unpack(_MARKER_STRUCT, data)
        return cls(update_marker=marker, collision_test=collision)


@dataclass
class AltBufferData:
    """Description of an alternate buffer used with EPDC_FLAG_USE_ALT_BUFFER."""

    phys_addr: int = 0
    width: int = 0
    height: int = 0
    alt_update_region: MxcfbRect = field(default_factory=MxcfbRect)

    SIZE = _ALT_STRUCT.size

    def _values(self) -> tuple:
        return (self.phys_addr, self.width, self.height, *_rect_values(self.alt_update_region))

    def pack(self) -> bytes:
        return _pack(_ALT_STRUCT, self._values())


@dataclass
class UpdateData:
    """One display update request."""

    update_region: MxcfbRect = field(default_factory=MxcfbRect)
    waveform_mode: int = 0
    update_mode: int = 0
    update_marker: int = 0
    temp: int = 0
    flags: int = 0
    dither_mode: int = 0
    quant_bit: int = 0
    alt_buffer_data: AltBufferData = field(default_factory=AltBufferData)

    SIZE = _UPDATE_STRUCT.size

    def pack(self) -> bytes:
        return _pack(
            _UPDATE_STRUCT,
            (
                *_rect_values(self.update_region),
                self.waveform_mode,
                self.update_mode,
                self.update_marker,
                self.temp,
                self.flags,
                self.dither_mode,
                self.quant_bit,
                *self.alt_buffer_data._values(),
            ),
        )

    @classmethod
    def unpack(cls, data) -> UpdateData:
        values = _unpack(_UPDATE_STRUCT, data)
        (
            waveform_mode,
            update_mode,
            update_marker,
            temp,
            flags,
            dither_mode,
            quant_bit,
            phys_addr,
            width,
            height,
        ) = values[4:14]
        return cls(
            update_region=MxcfbRect(*values[0:4]),
            waveform_mode=waveform_mode,
            update_mode=update_mode,
            update_marker=update_marker,
            temp=temp,
            flags=flags,
            dither_mode=dither_mode,
            quant_bit=quant_bit,
            alt_buffer_data=AltBufferData(
                phys_addr=phys_addr,
                width=width,
                height=height,
                alt_update_region=MxcfbRect(*values[14:18]),
            ),
        )


MXCFB_SET_AUTO_UPDATE_MODE = iow(b"F", 0x2D, 4)
MXCFB_SET_UPDATE_SCHEME = iow(b"F", 0x32, 4)
MXCFB_SEND_UPDATE = iow(b"F", 0x2E, UpdateData.SIZE)
MXCFB_WAIT_FOR_UPDATE_COMPLETE = iowr(b"F", 0x2F, UpdateMarkerData.SIZE)
MXCFB_DISABLE_EPDC_ACCESS = io(b"F", 0x35)
MXCFB_ENABLE_EPDC_ACCESS = io(b"F", 0x36)