import pytest

from inkframe.common import DitherMode, DisplayTemp, MxcfbRect, WaveformMode
from inkframe.mxcfb import (
    MXCFB_ENABLE_EPDC_ACCESS,
    MXCFB_SEND_UPDATE,
    MXCFB_WAIT_FOR_UPDATE_COMPLETE,
    AltBufferData,
    UpdateData,
    UpdateMarkerData,
    io,
    iow,
    iowr,
)


def _size_field(request):
    return (request >> 16) & 0x3FFF


def test_send_update_request_number():
    request = iow(b"F", 0x2E, len(UpdateData().pack()))
    assert request == 0x4048462E
    assert MXCFB_SEND_UPDATE == request


def test_send_update_size_matches_struct():
    assert len(UpdateData().pack()) == _size_field(MXCFB_SEND_UPDATE)


def test_wait_request_size_matches_marker_struct():
    assert len(UpdateMarkerData().pack()) == _size_field(MXCFB_WAIT_FOR_UPDATE_COMPLETE)


def test_io_encodes_kind_and_number_without_size():
    request = io(ord("F"), 0x36)
    assert request & 0xFF == 0x36
    assert (request >> 8) & 0xFF == ord("F")
    assert request >> 16 == 0
    assert request == MXCFB_ENABLE_EPDC_ACCESS


def test_kind_accepts_bytes_str_and_int():
    assert iow(b"F", 0x2E, 72) == iow("F", 0x2E, 72) == iow(ord("F"), 0x2E, 72)


def test_iowr_sets_more_direction_bits_than_iow():
    write = iow(b"F", 0x2F, 8)
    both = iowr(b"F", 0x2F, 8)
    assert write & ~both == 0
    assert both & ~write != 0
    assert _size_field(both) == 8


@pytest.mark.parametrize("args", [(b"F", 256, 4), (b"F", 1, 1 << 14), (b"FF", 1, 4)])
def test_ioctl_arguments_out_of_range(args):
    with pytest.raises(ValueError):
        iow(*args)


def test_marker_roundtrip():
    marker = UpdateMarkerData(update_marker=42, collision_test=7)
    assert UpdateMarkerData.unpack(marker.pack()) == marker


def test_update_roundtrip_with_signed_fields():
    data = UpdateData(
        update_region=MxcfbRect(top=10, left=20, width=300, height=400),
        waveform_mode=WaveformMode.WAVEFORM_MODE_DU,
        update_mode=1,
        update_marker=99,
        temp=-5,
        flags=0x0200,
        dither_mode=DitherMode.EPDC_FLAG_EXP1,
        quant_bit=-1,
        alt_buffer_data=AltBufferData(
            phys_addr=0x1000,
            width=8,
            height=9,
            alt_update_region=MxcfbRect(top=1, left=2, width=3, height=4),
        ),
    )
    assert UpdateData.unpack(data.pack()) == data


def test_alt_buffer_is_packed_last():
    alt = AltBufferData(phys_addr=1, width=2, height=3, alt_update_region=MxcfbRect(4, 5, 6, 7))
    packed_alt = alt.pack()
    packed = UpdateData(temp=DisplayTemp.TEMP_USE_MAX, alt_buffer_data=alt).pack()
    assert packed.endswith(packed_alt)


def test_update_unpack_wrong_length():
    with pytest.raises(ValueError):
        UpdateData.unpack(b"\x00" * 10)


def test_update_pack_rejects_out_of_range():
    with pytest.raises(ValueError):
        UpdateData(update_marker=-1).pack()