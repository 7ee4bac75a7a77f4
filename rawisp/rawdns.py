"""Non-local-means style denoising of Bayer raw data over an 11x11 window."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .common import TopRegister, _raster, to_signed, to_unsigned
from .dpc import _SlidingWindow

BLOCK_SIZE = 11
CENTRE = 5
MAX_VALUE = 4095

# Weights for distances at or below k*sigma, in tenths of that bound.
_NEAR_WEIGHTS = (244, 220, 197, 180, 163, 148, 133, 120, 111, 99)
# Weights for distances above k*sigma, in fifths of that bound from 6/5 on.
_FAR_WEIGHTS = (85, 70, 57, 47, 39, 32, 26, 21, 18, 15, 12, 10, 8, 7, 6, 3, 1, 0)

# Same-colour samples compared with the centre: every other row and column.
_TAPS = tuple(
    (k, l)
    for k in range(1, 10, 2)
    for l in range(1, 10, 2)
    if (k, l) != (CENTRE, CENTRE)
)


@dataclass(frozen=True)
class RawdnsRegister:
    """Noise sigma (6 bits), enable switch and filter strength (7 bits)."""

    sigma: int = 0
    enable: bool = False
    filter_para: int = 0

    def _ksigma2(self) -> int:
        sigma = to_unsigned(self.sigma, 6)
        strength = to_unsigned(self.filter_para, 7)
        ksigma = to_unsigned(sigma * strength, 13)
        return to_unsigned((ksigma * ksigma) >> 16, 26)


def _check_block(block: Sequence[Sequence[int]]) -> list[list[int]]:
    if len(block) != BLOCK_SIZE or any(len(row) != BLOCK_SIZE for row in block):
        raise ValueError(f"denoising needs a {BLOCK_SIZE}x{BLOCK_SIZE} block")
    return [[to_unsigned(v, 12) for v in row] for row in block]


def weight(diff: int, ksigma2: int) -> int:
    """Weight given to a neighbour whose patch distance exceeds the noise floor by ``diff``."""
    diff = to_unsigned(diff, 30)
    ksigma2 = to_unsigned(ksigma2, 26)
    if ksigma2 == 0:
        return 0
    if diff > ksigma2:
        scaled = to_unsigned(5 * diff, 30)
        for step, value in zip(range(6, 23), _FAR_WEIGHTS):
            if scaled < step * ksigma2:
                return value
        return _FAR_WEIGHTS[-1]
    scaled = to_unsigned(10 * diff, 30)
    for step, value in zip(range(1, 10), _NEAR_WEIGHTS):
        if scaled < step * ksigma2:
            return value
    return _NEAR_WEIGHTS[-1]


def euclidean_distance(block: Sequence[Sequence[int]], cur_y: int, cur_x: int) -> int:
    """Sum of squared differences between the 3x3 patches at the centre and at (cur_y, cur_x)."""
    cells = _check_block(block)
    if not (1 <= cur_y <= BLOCK_SIZE - 2 and 1 <= cur_x <= BLOCK_SIZE - 2):
        raise ValueError(f"patch centre ({cur_y}, {cur_x}) lies too close to the block edge")
    return sum(
        (cells[CENTRE + dy][CENTRE + dx] - cells[cur_y + dy][cur_x + dx]) ** 2
        for dy in (-1, 0, 1)
        for dx in (-1, 0, 1)
    )


def denoise_pixel(block: Sequence[Sequence[int]], reg: RawdnsRegister, ksigma2: int) -> int:
    """Weighted average of the same-colour samples around the centre of an 11x11 block."""
    cells = _check_block(block)
    sigma = to_unsigned(reg.sigma, 6)
    sigma2 = 2 * sigma * sigma
    total_weight = total_value = max_weight = 0
    for k, l in _TAPS:
        distance = euclidean_distance(cells, k, l)
        excess = distance - sigma2 if distance > sigma2 else 0
        # The excess is held in a 20-bit signed register before weighting.
        w = weight(to_signed(excess, 20), ksigma2)
        max_weight = max(max_weight, w)
        total_weight = to_unsigned(total_weight + w, 13)
        total_value = to_unsigned(total_value + w * cells[k][l], 25)

    centre = cells[CENTRE][CENTRE]
    total_weight = to_unsigned(total_weight + max_weight, 13)
    total_value = to_unsigned(total_value + max_weight * centre, 25)
    if total_weight == 0:
        return centre
    return min(total_value // total_weight, MAX_VALUE)


def rawdns(top: TopRegister, reg: RawdnsRegister, pixels: Iterable[int]) -> list[int]:
    """Denoise one raw frame.

    The output lags the input by five rows and five columns; the border that
    cannot be filtered comes out as zero and the frame is padded with zeros.
    When the stage is disabled the whole frame comes out as zero.
    """
    if not reg.enable:
        return [0 for _y, _x, _sample in _raster(top, pixels)]

    ksigma2 = reg._ksigma2()
    window = _SlidingWindow(BLOCK_SIZE, top.frame_width)
    out = []
    for y, x, sample in _raster(top, pixels):
        window.push(x, to_unsigned(sample, 12))
        if y > 9 and x > 9:
            value = denoise_pixel(window.rows(), reg, ksigma2)
        else:
            value = 0
        if y > 5 or (y == 5 and x > 4):
            out.append(value)
    out.extend([0] * (CENTRE + CENTRE * top.frame_width))
    return out