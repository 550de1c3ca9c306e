import pytest

from inkframe.common import Color, MxcfbRect
from inkframe.fbio import FramebufferIO, RegionError
from inkframe.screeninfo import FixScreeninfo, VarScreeninfo


def make_fb(xres=10, yres=8):
    var = VarScreeninfo(xres=xres, yres=yres, bits_per_pixel=16, width=xres, height=yres)
    fix = FixScreeninfo(line_length=xres * 2)
    return FramebufferIO(bytearray(xres * yres * 2), var, fix)


def test_write_then_read_pixel_round_trip():
    fb = make_fb()
    fb.write_pixel((3, 2), Color.RED)
    assert fb.read_pixel((3, 2)) == Color.from_native(Color.RED.as_native())
    assert fb.read_pixel((3, 2)).as_native() == (0x00, 0xF8)


def test_write_pixel_places_bytes_at_line_offset():
    fb = make_fb()
    fb.write_pixel((1, 1), Color.from_native((0x12, 0x34)))
    index = 1 * fb.fix_screen_info.line_length + 1 * 2
    assert fb.read_offset(index) == 0x12
    assert fb.read_offset(index + 1) == 0x34


@pytest.mark.parametrize("pos", [(-1, 0), (0, -1), (10, 0), (0, 8)])
def test_write_pixel_off_screen_is_ignored(pos):
    fb = make_fb()
    before = bytes(fb.frame)
    fb.write_pixel(pos, Color.BLACK if False else Color.RED)
    assert bytes(fb.frame) == before


def test_read_pixel_out_of_range_is_white():
    fb = make_fb()
    assert fb.read_pixel((10, 0)) == Color.WHITE
    assert fb.read_pixel((0, 8)) == Color.WHITE


def test_write_frame_and_read_offset():
    fb = make_fb()
    fb.write_frame(b"\x01\x02\x03")
    assert [fb.read_offset(i) for i in range(4)] == [1, 2, 3, 0]


def test_write_frame_too_long_raises():
    fb = make_fb()
    with pytest.raises(ValueError):
        fb.write_frame(bytes(len(fb.frame) + 1))


def test_read_offset_out_of_range_raises():
    fb = make_fb()
    with pytest.raises(IndexError):
        fb.read_offset(len(fb.frame))


def test_dump_region_length_and_contents():
    fb = make_fb()
    fb.write_pixel((2, 3), Color.BLUE)
    data = fb.dump_region(MxcfbRect(top=3, left=2, width=2, height=1))
    assert len(data) == 4
    assert tuple(data[:2]) == Color.BLUE.as_native()


def test_dump_restore_round_trip():
    fb = make_fb()
    rect = MxcfbRect(top=1, left=1, width=3, height=2)
    fb.write_pixel((1, 1), Color.RED)
    fb.write_pixel((3, 2), Color.GREEN)
    saved = fb.dump_region(rect)
    other = make_fb()
    written = other.restore_region(rect, saved)
    assert written == len(saved)
    assert other.dump_region(rect) == saved
    assert other.read_pixel((3, 2)) == fb.read_pixel((3, 2))


@pytest.mark.parametrize(
    "rect, message",
    [
        (MxcfbRect(top=0, left=0, width=0, height=2), "zero height/width"),
        (MxcfbRect(top=7, left=0, width=1, height=2), "Vertically out of bounds"),
        (MxcfbRect(top=0, left=9, width=2, height=1), "Horizontally out of bounds"),
    ],
)
def test_dump_region_errors(rect, message):
    fb = make_fb()
    with pytest.raises(RegionError, match=message):
        fb.dump_region(rect)


def test_restore_region_size_mismatch():
    fb = make_fb()
    with pytest.raises(RegionError, match="mismatched size"):
        fb.restore_region(MxcfbRect(top=0, left=0, width=2, height=2), b"\x00" * 7)