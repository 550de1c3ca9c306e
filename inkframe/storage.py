"""Compressed snapshots of framebuffer regions."""

from __future__ import annotations

import zstandard
from PIL import Image

from .common import Color

# RGB565 input is two bytes per pixel.
_INPUT_BYTES_PER_PIXEL = 2


class CompressedCanvasState:
    """A zstd-compressed copy of a region dumped with `FramebufferIO.dump_region`."""

    __slots__ = ("data", "height", "width")

    def __init__(self, img, height: int, width: int) -> None:
        self.data = zstandard.ZstdCompressor().compress(bytes(img))
        self.height = height
        self.width = width

    def decompress(self) -> bytes:
        """The raw region bytes, ready for `FramebufferIO.restore_region`."""
        return zstandard.ZstdDecompressor().decompressobj().decompress(self.data)


def rgbimage_from_bytes(w: int, h: int, buff) -> Image.Image:
    """Build an RGB image from `w` x `h` pixels of little-endian RGB565 data."""
    data = bytes(buff)
    if len(data) != w * h * _INPUT_BYTES_PER_PIXEL:
        raise ValueError(
            f"expected {w * h * _INPUT_BYTES_PER_PIXEL} bytes for a {w}x{h} image, got {len(data)}"
        )
    if not data:
        return Image.new("RGB", (w, h))
    rgb = bytearray()
    for lo, hi in zip(data[0::2], data[1::2]):
        rgb.extend(Color.from_native((lo, hi)).to_rgb8())
    return Image.frombytes("RGB", (w, h), bytes(rgb))