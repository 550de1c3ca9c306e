"""The kernel framebuffer screen information structures."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

_VAR_HEAD = (
    "xres",
    "yres",
    "xres_virtual",
    "yres_virtual",
    "xoffset",
    "yoffset",
    "bits_per_pixel",
    "grayscale",
)
_VAR_COLOURS = ("red", "green", "blue", "transp")
_VAR_TAIL = (
    "nonstd",
    "activate",
    "height",
    "width",
    "accel_flags",
    "pixclock",
    "left_margin",
    "right_margin",
    "upper_margin",
    "lower_margin",
    "hsync_len",
    "vsync_len",
    "sync",
    "vmode",
    "rotate",
    "colorspace",
)
_VAR_STRUCT = struct.Struct(
    "=" + "I" * (len(_VAR_HEAD) + 3 * len(_VAR_COLOURS) + len(_VAR_TAIL) + 4)
)

_FIX_STRUCT = struct.Struct("=16s5I3H2xI3I3H2x")


def _pack(layout: struct.Struct, values) -> bytes:
    try:
        return layout.pack(*values)
    except struct.error as exc:
        raise ValueError(f"cannot pack screen info: {exc}") from exc


def _unpack(layout: struct.Struct, data) -> tuple:
    if len(data) != layout.size:
        raise ValueError(f"expected {layout.size} bytes, got {len(data)}")
    return layout.unpack(bytes(data))


@dataclass
class Bitfield:
    """Position of one colour channel inside a pixel."""

    offset: int = 0
    length: int = 0
    msb_right: int = 0


@dataclass
class VarScreeninfo:
    """Variable screen information, laid out as the kernel's fb_var_screeninfo."""

    xres: int = 0
    yres: int = 0
    xres_virtual: int = 0
    yres_virtual: int = 0
    xoffset: int = 0
    yoffset: int = 0
    bits_per_pixel: int = 0
    grayscale: int = 0
    red: Bitfield = field(default_factory=Bitfield)
    green: Bitfield = field(default_factory=Bitfield)
    blue: Bitfield = field(default_factory=Bitfield)
    transp: Bitfield = field(default_factory=Bitfield)
    nonstd: int = 0
    activate: int = 0
    height: int = 0
    width: int = 0
    accel_flags: int = 0
    pixclock: int = 0
    left_margin: int = 0
    right_margin: int = 0
    upper_margin: int = 0
    lower_margin: int = 0
    hsync_len: int = 0
    vsync_len: int = 0
    sync: int = 0
    vmode: int = 0
    rotate: int = 0
    colorspace: int = 0
    reserved: tuple[int, int, int, int] = (0, 0, 0, 0)

    SIZE = _VAR_STRUCT.size

    def pack(self) -> bytes:
        values = [getattr(self, name) for name in _VAR_HEAD]
        for name in _VAR_COLOURS:
            bits = getattr(self, name)
            values.extend((bits.offset, bits.length, bits.msb_right))
        values.extend(getattr(self, name) for name in _VAR_TAIL)
        reserved = tuple(self.reserved)
        if len(reserved) != 4:
            raise ValueError("reserved must hold exactly four values")
        values.extend(reserved)
        return _pack(_VAR_STRUCT, values)

    @classmethod
    def unpack(cls, data) -> VarScreeninfo:
        values = iter(_unpack(_VAR_STRUCT, data))
        kwargs = {name: next(values) for name in _VAR_HEAD}
        for name in _VAR_COLOURS:
            kwargs[name] = Bitfield(next(values), next(values), next(values))
        kwargs.update({name: next(values) for name in _VAR_TAIL})
        kwargs["reserved"] = tuple(values)
        return cls(**kwargs)


@dataclass
class FixScreeninfo:
    """Fixed screen information, laid out as the kernel's fb_fix_screeninfo."""

    id: bytes = b""
    smem_start: int = 0
    smem_len: int = 0
    fb_type: int = 0
    type_aux: int = 0
    visual: int = 0
    xpanstep: int = 0
    ypanstep: int = 0
    ywrapstep: int = 0
    line_length: int = 0
    mmio_start: int = 0
    mmio_len: int = 0
    accel: int = 0
    capabilities: int = 0
    reserved: tuple[int, int] = (0, 0)

    SIZE = _FIX_STRUCT.size

    def pack(self) -> bytes:
        ident = bytes(self.id)
        if len(ident) > 16:
            raise ValueError("id is longer than 16 bytes")
        reserved = tuple(self.reserved)
        if len(reserved) != 2:
            raise ValueError("reserved must hold exactly two values")
        return _pack(
            _FIX_STRUCT,
            (
                ident,
                self.smem_start,
                self.smem_len,
                self.fb_type,
                self.type_aux,
                self.visual,
                self.xpanstep,
                self.ypanstep,
                self.ywrapstep,
                self.line_length,
                self.mmio_start,
                self.mmio_len,
                self.accel,
                self.capabilities,
                *reserved,
            ),
        )

    @classmethod
    def unpack(cls, data) -> FixScreeninfo:
        (ident, *rest) = _unpack(_FIX_STRUCT, data)
        (
            smem_start,
            smem_len,
            fb_type,
            type_aux,
            visual,
            xpanstep,
            ypanstep,
            ywrapstep,
            line_length,
            mmio_start,
            mmio_len,
            accel,
            capabilities,
            res0,
            res1,
        ) = rest
        return cls(
            id=ident,
            smem_start=smem_start,
            smem_len=smem_len,
            fb_type=fb_type,
            type_aux=type_aux,
            visual=visual,
            xpanstep=xpanstep,
            ypanstep=ypanstep,
            ywrapstep=ywrapstep,
            line_length=line_length,
            mmio_start=mmio_start,
            mmio_len=mmio_len,
            accel=accel,
            capabilities=capabilities,
            reserved=(res0, res1),
        )