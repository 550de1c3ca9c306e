import pytest

from inkframe.common import Color
from inkframe.storage import CompressedCanvasState, rgbimage_from_bytes

ZSTD_MAGIC = b"\x28\xb5\x2f\xfd"


def test_round_trip_restores_original_bytes():
    raw = bytes(range(256)) * 40
    state = CompressedCanvasState(raw, 40, 128)
    assert state.decompress() == raw


def test_compressed_data_is_a_zstd_frame():
    state = CompressedCanvasState(b"\xff" * 1000, 10, 50)
    assert state.data[:4] == ZSTD_MAGIC


def test_low_entropy_canvas_compresses_well():
    raw = b"\xff" * 1404 * 2 * 100
    state = CompressedCanvasState(raw, 100, 1404)
    assert len(state.data) < len(raw) // 100


def test_dimensions_are_kept():
    state = CompressedCanvasState(b"\x00\x00" * 6, 2, 3)
    assert (state.height, state.width) == (2, 3)


def test_empty_region_round_trip():
    state = CompressedCanvasState(b"", 0, 0)
    assert state.decompress() == b""


def test_rgbimage_converts_native_colours():
    pixels = b"".join(
        bytes(c.as_native()) for c in (Color.RED, Color.GREEN, Color.BLUE, Color.WHITE)
    )
    img = rgbimage_from_bytes(2, 2, pixels)
    assert img.size == (2, 2)
    assert img.getpixel((0, 0)) == (255, 0, 0)
    assert img.getpixel((1, 0)) == (0, 255, 0)
    assert img.getpixel((0, 1)) == (0, 0, 255)
    assert img.getpixel((1, 1)) == (255, 255, 255)


def test_rgbimage_black():
    img = rgbimage_from_bytes(1, 1, b"\x00\x00")
    assert img.getpixel((0, 0)) == (0, 0, 0)


def test_rgbimage_rejects_wrong_size():
    with pytest.raises(ValueError):
        rgbimage_from_bytes(2, 2, b"\x00" * 7)