import random

import pytest

from rawisp.common import TopRegister, bayer_channel
from rawisp.demosaic import DemosaicRegister, demosaic, interpolate


def _random_window(rng):
    return [[rng.randrange(4096) for _ in range(5)] for _ in range(5)]


@pytest.mark.parametrize("pattern", [0, 1, 2, 3])
def test_flat_window_gives_grey(pattern):
    window = [[1234] * 5 for _ in range(5)]
    assert interpolate(window, pattern) == (1234, 1234, 1234)


def test_native_channel_is_centre():
    rng = random.Random(5)
    for _ in range(30):
        window = _random_window(rng)
        centre = window[2][2]
        assert interpolate(window, 0)[0] == centre
        assert interpolate(window, 1)[1] == centre
        assert interpolate(window, 2)[1] == centre
        assert interpolate(window, 3)[2] == centre


def test_green_patterns_mirror_each_other():
    rng = random.Random(11)
    for _ in range(30):
        window = _random_window(rng)
        assert interpolate(window, 2) == interpolate(window, 1)[::-1]


def test_red_and_blue_patterns_mirror_each_other():
    rng = random.Random(12)
    for _ in range(30):
        window = _random_window(rng)
        assert interpolate(window, 3) == interpolate(window, 0)[::-1]


def test_transpose_swaps_green_site_estimates():
    rng = random.Random(13)
    for _ in range(30):
        window = _random_window(rng)
        transposed = [list(col) for col in zip(*window)]
        assert interpolate(window, 1)[0] == interpolate(transposed, 1)[2]


def test_outputs_stay_in_range():
    rng = random.Random(14)
    for _ in range(100):
        window = _random_window(rng)
        for pattern in range(4):
            assert all(0 <= v <= 4095 for v in interpolate(window, pattern))


def test_window_shape_checked():
    with pytest.raises(ValueError):
        interpolate([[0] * 5] * 4, 0)


def test_flat_frame():
    width, height = 9, 8
    top = TopRegister(frame_width=width, frame_height=height, img_pattern=3)
    out = demosaic(top, DemosaicRegister(enable=True), [700] * (width * height))
    assert len(out) == width * height
    for i in range(2, height - 2):
        for j in range(2, width - 2):
            assert out[i * width + j] == (700, 700, 700)
    assert out[0] == (0, 0, 0)
    assert out[-(2 * width + 2):] == [(0, 0, 0)] * (2 * width + 2)


@pytest.mark.parametrize("pattern", [0, 1, 2, 3])
def test_frame_keeps_native_samples(pattern):
    rng = random.Random(pattern)
    width, height = 10, 9
    frame = [rng.randrange(4096) for _ in range(width * height)]
    top = TopRegister(frame_width=width, frame_height=height, img_pattern=pattern)
    out = demosaic(top, DemosaicRegister(enable=True), frame)
    slot = {0: 0, 1: 1, 2: 1, 3: 2}
    for i in range(2, height - 2):
        for j in range(2, width - 2):
            channel = bayer_channel(i, j, pattern)
            assert out[i * width + j][slot[channel]] == frame[i * width + j]


def test_disabled_gives_black_frame():
    width, height = 6, 5
    top = TopRegister(frame_width=width, frame_height=height)
    out = demosaic(top, DemosaicRegister(enable=False), list(range(width * height)))
    assert out == [(0, 0, 0)] * (width * height)


def test_short_input_raises():
    top = TopRegister(frame_width=4, frame_height=4)
    with pytest.raises(ValueError):
        demosaic(top, DemosaicRegister(enable=True), [0] * 3)