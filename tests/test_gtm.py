import pytest

from rawisp.common import TopRegister
from rawisp.gtm import GtmRegister, gtm

GAMMA_TABLE = [int(((i / 128) ** 1.2) * 1023) for i in range(129)]


def _ramp_top():
    return TopRegister(frame_width=128, frame_height=128)


def test_disabled_passes_through():
    top = TopRegister(frame_width=2, frame_height=1)
    frame = [(1, 2, 3), (16383, 0, 500)]
    assert gtm(top, GtmRegister(GAMMA_TABLE), frame) == frame


def test_monotone_curve_without_dithering():
    reg = GtmRegister(GAMMA_TABLE, enable=True)
    out = gtm(_ramp_top(), reg, [(v, v, v) for v in range(16384)])
    reds = [p[0] for p in out]
    assert all(a <= b for a, b in zip(reds, reds[1:]))
    assert all(p[0] == p[1] == p[2] for p in out)


def test_zero_maps_to_zero():
    top = TopRegister(frame_width=1, frame_height=1)
    out = gtm(top, GtmRegister(GAMMA_TABLE, enable=True), [(0, 0, 0)])
    assert out == [(0, 0, 0)]


def test_dithered_output_in_range():
    reg = GtmRegister(GAMMA_TABLE, enable=True, dithering_enable=True)
    out = gtm(_ramp_top(), reg, [(v, 16383 - v, v // 2) for v in range(16384)])
    assert all(0 <= c <= 16383 for p in out for c in p)


def test_table_length_checked():
    with pytest.raises(ValueError):
        GtmRegister([0] * 128)


def test_pixel_needs_three_channels():
    top = TopRegister(frame_width=1, frame_height=1)
    with pytest.raises(ValueError):
        gtm(top, GtmRegister(GAMMA_TABLE, enable=True), [(1, 2)])