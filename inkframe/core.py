"""The framebuffer device: opening, configuring and controlling it."""

from __future__ import annotations

import dataclasses
import fcntl
import logging
import mmap
import struct

from .common import (
    DISPLAYHEIGHT,
    DISPLAYWIDTH,
    FBIOGET_FSCREENINFO,
    FBIOGET_VSCREENINFO,
    FBIOPUT_VSCREENINFO,
)
from .draw import FramebufferDraw
from .fbio import FramebufferIO
from .mxcfb import (
    MXCFB_DISABLE_EPDC_ACCESS,
    MXCFB_ENABLE_EPDC_ACCESS,
    MXCFB_SEND_UPDATE,
    MXCFB_SET_AUTO_UPDATE_MODE,
    MXCFB_SET_UPDATE_SCHEME,
    MXCFB_WAIT_FOR_UPDATE_COMPLETE,
    UpdateData,
    UpdateMarkerData,
)
from .refresh import FramebufferRefresh, RecordingBackend, UpdateBackend
from .screeninfo import Bitfield, FixScreeninfo, VarScreeninfo

_log = logging.getLogger(__name__)

_BYTES_PER_PIXEL = 2


def _fileno(device) -> int:
    return device if isinstance(device, int) else device.fileno()


class IoctlBackend(UpdateBackend):
    """Delivers updates to the framebuffer device through ioctl calls."""

    def __init__(self, device) -> None:
        self.device = device

    def _call(self, request: int, arg=0) -> bool:
        try:
            fcntl.ioctl(_fileno(self.device), request, arg)
        except OSError:
            return False
        return True

    def send_update(self, data: UpdateData) -> bool:
        return self._call(MXCFB_SEND_UPDATE, data.pack())

    def wait_for_update(self, marker: int) -> int:
        buf = bytearray(UpdateMarkerData(update_marker=marker, collision_test=0).pack())
        try:
            fcntl.ioctl(_fileno(self.device), MXCFB_WAIT_FOR_UPDATE_COMPLETE, buf, True)
        except OSError:
            _log.warning("WAIT_FOR_UPDATE_COMPLETE failed")
        return UpdateMarkerData.unpack(buf).collision_test


def get_fix_screeninfo(device) -> FixScreeninfo:
    """Read the fixed screen information of a framebuffer device."""
    buf = bytearray(FixScreeninfo.SIZE)
    try:
        fcntl.ioctl(_fileno(device), FBIOGET_FSCREENINFO, buf, True)
    except OSError as exc:
        raise OSError(exc.errno, f"FBIOGET_FSCREENINFO failed: {exc.strerror}") from exc
    return FixScreeninfo.unpack(buf)


def get_var_screeninfo(device) -> VarScreeninfo:
    """Read the variable screen information of a framebuffer device."""
    buf = bytearray(VarScreeninfo.SIZE)
    try:
        fcntl.ioctl(_fileno(device), FBIOGET_VSCREENINFO, buf, True)
    except OSError as exc:
        raise OSError(exc.errno, f"FBIOGET_VSCREENINFO failed: {exc.strerror}") from exc
    return VarScreeninfo.unpack(buf)


def put_var_screeninfo(device, var_screen_info: VarScreeninfo) -> bool:
    """Apply `var_screen_info` to the device; it takes back what the kernel settled on."""
    buf = bytearray(var_screen_info.pack())
    try:
        fcntl.ioctl(_fileno(device), FBIOPUT_VSCREENINFO, buf, True)
    except OSError:
        return False
    settled = VarScreeninfo.unpack(buf)
    for item in dataclasses.fields(settled):
        setattr(var_screen_info, item.name, getattr(settled, item.name))
    return True


def configure_var_screeninfo(info: VarScreeninfo) -> VarScreeninfo:
    """Set the panel geometry and timings the display expects; returns `info`."""
    info.xres = DISPLAYWIDTH
    info.yres = DISPLAYHEIGHT
    info.rotate = 1
    info.width = 0xFFFF_FFFF
    info.height = 0xFFFF_FFFF
    info.pixclock = 6250
    info.left_margin = 32
    info.right_margin = 326
    info.upper_margin = 4
    info.lower_margin = 12
    info.hsync_len = 44
    info.vsync_len = 1
    info.sync = 0
    info.vmode = 0  # non-interlaced
    info.accel_flags = 0
    return info


def _default_var_screeninfo() -> VarScreeninfo:
    info = VarScreeninfo(
        xres_virtual=DISPLAYWIDTH,
        yres_virtual=DISPLAYHEIGHT,
        bits_per_pixel=8 * _BYTES_PER_PIXEL,
        red=Bitfield(offset=11, length=5),
        green=Bitfield(offset=5, length=6),
        blue=Bitfield(offset=0, length=5),
    )
    return configure_var_screeninfo(info)


def _default_fix_screeninfo() -> FixScreeninfo:
    return FixScreeninfo(
        smem_len=DISPLAYWIDTH * DISPLAYHEIGHT * _BYTES_PER_PIXEL,
        line_length=DISPLAYWIDTH * _BYTES_PER_PIXEL,
    )


class Framebuffer(FramebufferDraw, FramebufferRefresh):
    """A display framebuffer with pixel access, drawing and refresh."""

    def __init__(self, frame, var_screen_info: VarScreeninfo, fix_screen_info: FixScreeninfo, backend: UpdateBackend):
        FramebufferIO.__init__(self, frame, var_screen_info, fix_screen_info)
        FramebufferRefresh.__init__(self, var_screen_info, backend)
        self.closed = False

    @classmethod
    def device(cls, path) -> Framebuffer:
        """Open a framebuffer device node and map its memory."""
        handle = open(path, "r+b", buffering=0)
        try:
            var_screen_info = configure_var_screeninfo(get_var_screeninfo(handle))
            put_var_screeninfo(handle, var_screen_info)
            fix_screen_info = get_fix_screeninfo(handle)
            length = fix_screen_info.line_length * var_screen_info.yres
            frame = mmap.mmap(handle.fileno(), length)
        except BaseException:
            handle.close()
            raise
        return cls(frame, var_screen_info, fix_screen_info, IoctlBackend(handle))

    @classmethod
    def in_memory(cls, var_screen_info=None, fix_screen_info=None) -> Framebuffer:
        """A framebuffer held in memory whose refreshes are only recorded."""
        var_screen_info = var_screen_info if var_screen_info is not None else _default_var_screeninfo()
        fix_screen_info = fix_screen_info if fix_screen_info is not None else _default_fix_screeninfo()
        frame = bytearray(fix_screen_info.line_length * var_screen_info.yres)
        return cls(frame, var_screen_info, fix_screen_info, RecordingBackend())

    def _ioctl_backend(self) -> IoctlBackend | None:
        return self.backend if isinstance(self.backend, IoctlBackend) else None

    def set_epdc_access(self, state: bool) -> None:
        """Enable or disable the EPD controller."""
        backend = self._ioctl_backend()
        if backend is not None:
            backend._call(MXCFB_ENABLE_EPDC_ACCESS if state else MXCFB_DISABLE_EPDC_ACCESS)

    def set_autoupdate_mode(self, mode: int) -> None:
        backend = self._ioctl_backend()
        if backend is not None:
            backend._call(MXCFB_SET_AUTO_UPDATE_MODE, struct.pack("=I", int(mode)))

    def set_update_scheme(self, scheme: int) -> None:
        backend = self._ioctl_backend()
        if backend is not None:
            backend._call(MXCFB_SET_UPDATE_SCHEME, struct.pack("=I", int(scheme)))

    def update_var_screeninfo(self) -> bool:
        """Apply the current `var_screen_info` to the device."""
        backend = self._ioctl_backend()
        if backend is None:
            return True
        return put_var_screeninfo(backend.device, self.var_screen_info)

    def close(self) -> None:
        """Unmap the frame memory and close the device."""
        if self.closed:
            return
        if isinstance(self.frame, mmap.mmap):
            self.frame.close()
        backend = self._ioctl_backend()
        if backend is not None and hasattr(backend.device, "close"):
            backend.device.close()
        self.closed = True

    def __enter__(self) -> Framebuffer:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()