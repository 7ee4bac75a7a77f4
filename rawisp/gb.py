"""Green balance: removes the Gr/Gb imbalance from Bayer raw data."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .common import TopRegister, _raster, clip, to_unsigned
from .dpc import _SlidingWindow

_LUT = (
    51, 43, 37, 32, 28, 26, 23, 21, 20, 18, 17, 16, 15, 14, 13, 13,
    12, 12, 11, 11, 10, 10, 9, 9, 9, 9, 8, 8, 8, 8, 7, 7,
)


def _pairs(rows: Sequence[int], cols: Sequence[int]) -> tuple:
    pairs = []
    for i in rows:
        for j in cols:
            for dj in (-1, 1):
                for di in (-1, 1):
                    if 0 <= j + dj <= 6:
                        pairs.append(((i, j), (i + di, j + dj)))
    return tuple(pairs)


_RB_PAIRS = _pairs((1, 3, 5), (0, 2, 4, 6))
_GREEN_PAIRS = _pairs((1, 3, 5), (1, 3, 5))


@dataclass(frozen=True)
class GbRegister:
    """Window size, count bounds and the 10-bit similarity threshold."""

    enable: bool = False
    win_size: int = 7
    lower_bound: int = 0
    upper_bound: int = 0
    threshold: int = 0


def column_statistic(
    block: Sequence[Sequence[int]], is_rb_pixel: bool, reg: GbRegister
) -> int:
    """Balanced value of the centre of a 7x7 raw block.

    Raises ValueError when the number of similar pairs falls outside the
    weighting table.
    """
    if len(block) != 7 or any(len(row) != 7 for row in block):
        raise ValueError("green balance needs a 7x7 block")
    cells = [[to_unsigned(v, 12) for v in row] for row in block]
    threshold = to_unsigned(reg.threshold, 10)
    low = to_unsigned(reg.lower_bound, 4)
    high = to_unsigned(reg.upper_bound, 6)

    total = count = 0
    for (i, j), (ni, nj) in _RB_PAIRS if is_rb_pixel else _GREEN_PAIRS:
        diff = cells[i][j] - cells[ni][nj]
        if abs(diff) < threshold:
            total += diff
            count += 1

    if count < low:
        total = 0
    else:
        index = count - 5
        if not 0 <= index < len(_LUT):
            raise ValueError(f"{count} similar pairs fall outside the weighting table")
        weight = _LUT[index]
        magnitude = abs(total)
        if count >= high:
            magnitude = (magnitude * weight) >> 8
        else:
            magnitude = ((((count - low) * magnitude * weight) >> 8) + 8) // 16
        total = -magnitude if total < 0 else magnitude
    total >>= 1
    return clip(cells[3][3] - total, 0, 4095)


def green_balance(top: TopRegister, reg: GbRegister, pixels: Iterable[int]) -> list[int]:
    """Balance the green channels of one raw frame.

    The frame comes out in the same order as it went in; pixels too close to
    the border for a full block pass through unchanged.
    """
    if not reg.enable:
        return [to_unsigned(sample, 12) for _y, _x, sample in _raster(top, pixels)]

    green_first = bool((top.img_pattern >> 1) ^ (top.img_pattern & 1))
    window = _SlidingWindow(7, top.frame_width)
    out = []
    for y, x, sample in _raster(top, pixels):
        window.push(x, to_unsigned(sample, 12))
        rows = window.rows()
        if y > 5 and x > 5:
            is_rb = (((y + x - 6) & 1) == 0) != green_first
            value = column_statistic(rows, is_rb, reg)
        else:
            value = rows[3][3]
        if y > 3 or (y == 3 and x > 2):
            out.append(value)

    out.extend(window.rows()[3][4:7])
    for index in range(3, 6):
        out.extend(window.line(index))
    return out