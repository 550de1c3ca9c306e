"""Sending display refresh requests to the EPD controller."""

from __future__ import annotations

import dataclasses
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto

from .common import EPDC_FLAG_TEST_COLLISION, MxcfbRect, UpdateMode
from .mxcfb import UpdateData
from .screeninfo import VarScreeninfo

_log = logging.getLogger(__name__)


class PartialRefreshMode(Enum):
    # Only run the collision test and return its result.
    DRY_RUN = auto()
    # Return the marker at once.
    ASYNC = auto()
    # Block until the refresh has completed.
    WAIT = auto()


class UpdateBackend(ABC):
    """Where update requests are delivered."""

    @abstractmethod
    def send_update(self, data: UpdateData) -> bool:
        """Send one update; return whether it was accepted."""

    @abstractmethod
    def wait_for_update(self, marker: int) -> int:
        """Block until the update with `marker` is shown; return the collision test."""


@dataclass
class RecordingBackend(UpdateBackend):
    """A backend that keeps every request instead of driving a display."""

    succeed: bool = True
    collision_test: int = 0
    updates: list[UpdateData] = field(default_factory=list)
    waited: list[int] = field(default_factory=list)

    def send_update(self, data: UpdateData) -> bool:
        self.updates.append(data)
        return self.succeed

    def wait_for_update(self, marker: int) -> int:
        self.waited.append(marker)
        return self.collision_test


class FramebufferRefresh:
    """Issues full and partial refreshes, numbering each with a fresh marker."""

    def __init__(self, var_screen_info: VarScreeninfo, backend: UpdateBackend, first_marker: int = 1):
        self.var_screen_info = var_screen_info
        self.backend = backend
        self._marker_lock = threading.Lock()
        self._next_marker = first_marker & 0xFFFFFFFF

    def _take_marker(self) -> int:
        with self._marker_lock:
            marker = self._next_marker
            self._next_marker = (marker + 1) & 0xFFFFFFFF
            return marker

    def full_refresh(self, waveform_mode, temperature, dither_mode, quant_bit: int, wait_completion: bool) -> int:
        """Refresh the whole screen; return the marker, or the collision test when waiting."""
        screen = MxcfbRect(
            top=0, left=0, width=self.var_screen_info.xres, height=self.var_screen_info.yres
        )
        update = UpdateData(
            update_region=screen,
            waveform_mode=int(waveform_mode),
            update_mode=int(UpdateMode.UPDATE_MODE_FULL),
            update_marker=self._take_marker(),
            temp=int(temperature),
            flags=0,
            dither_mode=int(dither_mode),
            quant_bit=quant_bit,
        )
        if not self.backend.send_update(update):
            _log.warning("Sending full_refresh update failed!")
        if wait_completion:
            return self.wait_refresh_complete(update.update_marker)
        return update.update_marker

    def partial_refresh(
        self,
        region: MxcfbRect,
        mode: PartialRefreshMode,
        waveform_mode,
        temperature,
        dither_mode,
        quant_bit: int,
        force_full_refresh: bool,
    ) -> int:
        """Refresh `region`, clipped to the screen.

        Returns 0 for a region starting off the screen, the marker in ASYNC
        mode and the collision test result in WAIT and DRY_RUN modes.
        """
        xres = self.var_screen_info.xres
        yres = self.var_screen_info.yres
        if region.left >= xres or region.top >= yres:
            return 0

        width = max(region.width, 1)
        height = max(region.height, 1)
        if region.left + width > xres:
            width -= region.left + width - xres
        if region.top + height > yres:
            height -= region.top + height - yres
        update_region = dataclasses.replace(region, width=width, height=height)

        update_mode = (
            UpdateMode.UPDATE_MODE_FULL if force_full_refresh else UpdateMode.UPDATE_MODE_PARTIAL
        )
        update = UpdateData(
            update_region=update_region,
            waveform_mode=int(waveform_mode),
            update_mode=int(update_mode),
            update_marker=self._take_marker(),
            temp=int(temperature),
            flags=EPDC_FLAG_TEST_COLLISION if mode is PartialRefreshMode.DRY_RUN else 0,
            dither_mode=int(dither_mode),
            quant_bit=quant_bit,
        )
        if not self.backend.send_update(update):
            _log.warning("Sending partial_refresh update failed!")

        if mode is PartialRefreshMode.ASYNC:
            return update.update_marker
        return self.wait_refresh_complete(update.update_marker)

    def wait_refresh_complete(self, marker: int) -> int:
        """Block until the refresh with `marker` is shown; return the collision test."""
        return self.backend.wait_for_update(marker)