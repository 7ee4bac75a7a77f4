import random

import pytest

from rawisp.common import TopRegister, YuvPlanes
from rawisp.yuvdns import YuvdnsRegister, nlm, yuvdns


def _random_window(seed):
    rng = random.Random(seed)
    return [[rng.randrange(1024) for _ in range(9)] for _ in range(9)]


def _random_planes(seed, count):
    rng = random.Random(seed)
    return YuvPlanes(*([rng.randrange(1024) for _ in range(count)] for _ in range(3)))


def test_zero_strength_returns_centre():
    window = _random_window(3)
    assert nlm(window, 3600, 0, 25) == window[4][4]


def test_flat_window_keeps_value():
    window = [[512] * 9 for _ in range(9)]
    assert nlm(window, 3600, 506, 25) == 512


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_result_within_neighbourhood_range(seed):
    window = _random_window(seed)
    inner = [v for row in window[1:8] for v in row[1:8]]
    result = nlm(window, 100, 506, 25)
    assert min(inner) <= result <= max(inner)


def test_window_shape_is_checked():
    with pytest.raises(ValueError):
        nlm([[0] * 9] * 8, 0, 0, 0)


def test_near_table_overflow_raises():
    window = [[0] * 9 for _ in range(9)]
    window[0][0] = 3
    with pytest.raises(ValueError):
        nlm(window, 0, 16383, 262143)


def test_zero_strength_frame_round_trips():
    top = TopRegister(frame_width=12, frame_height=11)
    planes = _random_planes(9, 132)
    out = yuvdns(top, YuvdnsRegister(enable=True, y_sigma2=3600, uv_sigma2=6400), planes)
    assert out == planes


def test_flat_frame_stays_flat():
    top = TopRegister(frame_width=11, frame_height=10)
    planes = YuvPlanes([300] * 110, [200] * 110, [100] * 110)
    reg = YuvdnsRegister(
        enable=True, y_sigma2=3600, uv_sigma2=6400, y_h2=506, y_inv_h2=25, uv_h2=900, uv_inv_h2=8
    )
    assert yuvdns(top, reg, planes) == planes


def test_disabled_skips_lead_and_pads_with_zeros():
    width, height = 10, 9
    top = TopRegister(frame_width=width, frame_height=height)
    planes = _random_planes(4, width * height)
    out = yuvdns(top, YuvdnsRegister(), planes)
    lead = 4 * width + 4
    for got, given in ((out.y, planes.y), (out.u, planes.u), (out.v, planes.v)):
        assert len(got) == width * height
        assert got[: width * height - lead] == given[lead:]
        assert set(got[width * height - lead:]) == {0}


def test_short_planes_raise():
    top = TopRegister(frame_width=4, frame_height=4)
    with pytest.raises(ValueError):
        yuvdns(top, YuvdnsRegister(), YuvPlanes([0] * 16, [0] * 16, [0] * 15))