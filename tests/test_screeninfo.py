import sys

import pytest

from inkframe.screeninfo import Bitfield, FixScreeninfo, VarScreeninfo


def _sample_var():
    return VarScreeninfo(
        xres=1404,
        yres=1872,
        xres_virtual=1404,
        yres_virtual=3840,
        bits_per_pixel=16,
        red=Bitfield(11, 5, 0),
        green=Bitfield(5, 6, 0),
        blue=Bitfield(0, 5, 0),
        height=0xFFFF_FFFF,
        width=0xFFFF_FFFF,
        pixclock=6250,
        left_margin=32,
        right_margin=326,
        upper_margin=4,
        lower_margin=12,
        hsync_len=44,
        vsync_len=1,
        rotate=1,
        reserved=(1, 2, 3, 4),
    )


def test_var_roundtrip():
    info = _sample_var()
    assert VarScreeninfo.unpack(info.pack()) == info


def test_var_matches_kernel_size():
    assert len(VarScreeninfo().pack()) == 160


def test_var_xres_is_first_field():
    data = VarScreeninfo(xres=1404).pack()
    assert data[:4] == (1404).to_bytes(4, sys.byteorder)


def test_var_default_is_all_zero():
    data = VarScreeninfo().pack()
    assert data == bytes(len(data))


def test_var_unpack_wrong_length():
    with pytest.raises(ValueError):
        VarScreeninfo.unpack(b"\x00" * 10)


def test_var_negative_value_rejected():
    with pytest.raises(ValueError):
        VarScreeninfo(xres=-1).pack()


def test_fix_roundtrip():
    info = FixScreeninfo(
        id=b"mxc_epdc_fb".ljust(16, b"\x00"),
        smem_len=1404 * 1872 * 2,
        line_length=1404 * 2,
        xpanstep=1,
        ypanstep=1,
        capabilities=7,
        reserved=(5, 6),
    )
    assert FixScreeninfo.unpack(info.pack()) == info


def test_fix_matches_kernel_size():
    assert len(FixScreeninfo().pack()) == 68


def test_fix_id_is_leading_and_padded():
    data = FixScreeninfo(id=b"mxc_epdc_fb").pack()
    assert data[:16] == b"mxc_epdc_fb".ljust(16, b"\x00")


def test_fix_id_too_long():
    with pytest.raises(ValueError):
        FixScreeninfo(id=b"x" * 17).pack()


def test_fix_unpack_wrong_length():
    with pytest.raises(ValueError):
        FixScreeninfo.unpack(b"\x00" * 67)