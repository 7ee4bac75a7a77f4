import random

import pytest

from rawisp.common import TopRegister
from rawisp.dpc import DpcRegister, dpc, is_defect, median_filter


def test_median_of_constant_values():
    assert median_filter([7] * 8) == 7


def test_median_of_sequence():
    assert median_filter([1, 2, 3, 4, 5, 6, 7, 8]) == 4


def test_median_is_order_independent():
    values = [4000, 3, 17, 900, 250, 250, 1, 4095]
    assert median_filter(values) == median_filter(sorted(values))
    assert median_filter(values) == median_filter(list(reversed(values)))


def test_median_lies_between_middle_pair():
    rng = random.Random(3)
    for _ in range(50):
        values = [rng.randrange(4096) for _ in range(8)]
        ordered = sorted(values)
        assert ordered[3] <= median_filter(values) <= ordered[4]


def test_median_needs_eight_values():
    with pytest.raises(ValueError):
        median_filter([1, 2, 3])


def test_white_defect_detected():
    assert is_defect([1000] * 8, 0, 300, 300) is True


def test_black_side_defect_detected():
    assert is_defect([0] * 8, 1000, 300, 300) is True


def test_flat_neighbourhood_not_defect():
    assert is_defect([1000] * 8, 1000, 300, 300) is False


def test_threshold_is_strict():
    assert is_defect([1300] * 8, 1000, 300, 300) is False
    assert is_defect([1301] * 8, 1000, 300, 300) is True


def test_single_outlier_neighbour_not_defect():
    neighbours = [1000] * 7 + [4000]
    assert is_defect(neighbours, 1000, 300, 300) is False


def test_detection_needs_eight_neighbours():
    with pytest.raises(ValueError):
        is_defect([1, 2], 0, 1, 1)


def _interior(width, height):
    return [(i, j) for i in range(2, height - 2) for j in range(2, width - 2)]


def test_flat_frame_keeps_interior():
    width, height = 9, 8
    top = TopRegister(frame_width=width, frame_height=height)
    out = dpc(top, DpcRegister(enable=True, th_w=300, th_b=300), [1000] * (width * height))
    assert len(out) == width * height
    for i, j in _interior(width, height):
        assert out[i * width + j] == 1000
    assert out[0] == 0
    assert out[-(2 * width + 2):] == [0] * (2 * width + 2)


@pytest.mark.parametrize("bad", [4000, 0])
@pytest.mark.parametrize("pattern", [0, 1])
def test_isolated_defect_is_removed(bad, pattern):
    width = height = 10
    frame = [1000] * (width * height)
    frame[4 * width + 4] = bad
    top = TopRegister(frame_width=width, frame_height=height, img_pattern=pattern)
    out = dpc(top, DpcRegister(enable=True, th_w=300, th_b=300), frame)
    for i, j in _interior(width, height):
        assert out[i * width + j] == 1000


def test_high_thresholds_keep_random_interior():
    rng = random.Random(7)
    width, height = 11, 9
    frame = [rng.randrange(2048) for _ in range(width * height)]
    top = TopRegister(frame_width=width, frame_height=height, img_pattern=3)
    out = dpc(top, DpcRegister(enable=True, th_w=2047, th_b=2047), frame)
    for i, j in _interior(width, height):
        assert out[i * width + j] == frame[i * width + j]


def test_disabled_delays_input():
    rng = random.Random(1)
    width, height = 6, 5
    frame = [rng.randrange(4096) for _ in range(width * height)]
    top = TopRegister(frame_width=width, frame_height=height)
    out = dpc(top, DpcRegister(enable=False), frame)
    lag = 2 * width + 2
    assert len(out) == width * height
    assert out[: width * height - lag] == frame[lag:]
    assert out[width * height - lag:] == [0] * lag


def test_short_input_raises():
    top = TopRegister(frame_width=4, frame_height=4)
    with pytest.raises(ValueError):
        dpc(top, DpcRegister(enable=True), [0] * 10)


def test_too_wide_frame_raises():
    top = TopRegister(frame_width=5000, frame_height=1)
    with pytest.raises(ValueError):
        dpc(top, DpcRegister(enable=True), [0] * 5000)