import random

import pytest

from rawisp.common import TopRegister
from rawisp.yfc import YfcRegister, yfc


def _pixels(count, seed):
    rng = random.Random(seed)
    return [tuple(rng.randrange(1024) for _ in range(3)) for _ in range(count)]


def test_disabled_splits_planes():
    top = TopRegister(frame_width=4, frame_height=3)
    frame = _pixels(12, 1)
    planes = yfc(top, YfcRegister(), frame)
    assert planes.y == [p[0] for p in frame]
    assert planes.u == [p[1] for p in frame]
    assert planes.v == [p[2] for p in frame]


def test_422_uniform_chroma_and_sizes():
    top = TopRegister(frame_width=8, frame_height=6)
    frame = [(i % 1024, 500, 300) for i in range(48)]
    planes = yfc(top, YfcRegister(enable=True), frame)
    assert planes.y == [p[0] for p in frame]
    assert planes.u == [500] * 24
    assert planes.v == [300] * 24


def test_422_averages_pairs():
    top = TopRegister(frame_width=2, frame_height=1)
    planes = yfc(top, YfcRegister(enable=True), [(1, 10, 7), (2, 13, 7)])
    assert planes.u == [11]
    assert planes.v == [7]


def test_422_odd_width_one_chroma_per_pair():
    top = TopRegister(frame_width=3, frame_height=2)
    planes = yfc(top, YfcRegister(enable=True), _pixels(6, 2))
    assert len(planes.y) == 6
    assert len(planes.u) == len(planes.v) == 2


def test_420_uniform_chroma_and_sizes():
    top = TopRegister(frame_width=8, frame_height=6)
    frame = [(i % 1024, 200, 900) for i in range(48)]
    planes = yfc(top, YfcRegister(enable=True, yuv420=True), frame)
    assert planes.y == [p[0] for p in frame]
    assert planes.u == [200] * 12
    assert planes.v == [900] * 12


def test_420_averages_square():
    top = TopRegister(frame_width=2, frame_height=2)
    frame = [(0, 1, 5), (0, 2, 5), (0, 3, 5), (0, 4, 5)]
    planes = yfc(top, YfcRegister(enable=True, yuv420=True), frame)
    assert planes.u == [2]
    assert planes.v == [5]


@pytest.mark.parametrize("yuv420", [False, True])
def test_full_scale_does_not_overflow(yuv420):
    top = TopRegister(frame_width=4, frame_height=4)
    frame = [(1023, 1023, 1023)] * 16
    planes = yfc(top, YfcRegister(enable=True, yuv420=yuv420), frame)
    assert set(planes.u) == {1023}
    assert set(planes.v) == {1023}


def test_short_frame_is_rejected():
    top = TopRegister(frame_width=4, frame_height=2)
    with pytest.raises(ValueError):
        yfc(top, YfcRegister(enable=True), _pixels(7, 3))


def test_wrong_channel_count_is_rejected():
    top = TopRegister(frame_width=1, frame_height=1)
    with pytest.raises(ValueError):
        yfc(top, YfcRegister(), [(1, 2, 3, 4)])