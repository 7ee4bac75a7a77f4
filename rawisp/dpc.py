"""Defective pixel correction on Bayer raw data."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Iterable, Sequence

from .common import TopRegister, _raster, bayer_channel, to_signed, to_unsigned

MAX_LINE_WIDTH = 4096

# Same-colour neighbours of the window centre for R and B samples.
_SAME_COLOUR_TAPS = ((0, 0), (0, 2), (0, 4), (2, 0), (2, 4), (4, 0), (4, 2), (4, 4))
# Neighbours of the window centre for green samples.
_GREEN_TAPS = ((0, 2), (1, 1), (1, 3), (2, 0), (2, 4), (3, 1), (3, 3), (4, 2))


class _SlidingWindow:
    """Square window fed one column at a time from per-column line buffers."""

    def __init__(self, size: int, width: int) -> None:
        if width > MAX_LINE_WIDTH:
            raise ValueError(
                f"line buffers hold at most {MAX_LINE_WIDTH} columns, got {width}"
            )
        self.size = size
        self._lines = [[0] * (size - 1) for _ in range(width)]
        self._columns = deque(([0] * size for _ in range(size)), maxlen=size)

    def push(self, col: int, sample: int) -> None:
        """Shift the window left and bring in column ``col`` ending with ``sample``."""
        column = self._lines[col] + [sample]
        self._lines[col] = column[1:]
        self._columns.append(column)

    def rows(self) -> list[list[int]]:
        """The window contents, row by row from the top."""
        return [list(row) for row in zip(*self._columns)]

    def line(self, index: int) -> list[int]:
        """Row ``index`` of the line buffers across the whole frame width."""
        return [held[index] for held in self._lines]


@dataclass(frozen=True)
class DpcRegister:
    """Enable switch and the 11-bit white and black defect thresholds."""

    enable: bool = False
    th_w: int = 0
    th_b: int = 0


def median_filter(values: Sequence[int]) -> int:
    """Mean of the two middle values of eight samples, rounded down."""
    if len(values) != 8:
        raise ValueError(f"median filter needs 8 values, got {len(values)}")
    ordered = sorted(to_unsigned(v, 12) for v in values)
    return (ordered[3] + ordered[4]) >> 1


def is_defect(neighbours: Sequence[int], pixel: int, th_w: int, th_b: int) -> bool:
    """True when every neighbour lies beyond the same threshold on one side of ``pixel``."""
    if len(neighbours) != 8:
        raise ValueError(f"defect detection needs 8 neighbours, got {len(neighbours)}")
    upper = to_signed(to_unsigned(th_w, 11), 12)
    lower = to_signed(-to_unsigned(th_b, 11), 12)
    centre = to_unsigned(pixel, 12)
    diffs = [to_unsigned(n, 12) - centre for n in neighbours]
    return all(d < lower for d in diffs) or all(d > upper for d in diffs)


def dpc(top: TopRegister, reg: DpcRegister, pixels: Iterable[int]) -> list[int]:
    """Replace defective pixels of one raw frame by the median of their neighbours.

    The output lags the input by two rows and two columns; the border that
    cannot be filtered comes out as zero and the frame is padded with zeros.
    """
    window = _SlidingWindow(5, top.frame_width) if reg.enable else None
    out = []
    for y, x, sample in _raster(top, pixels):
        value = to_unsigned(sample, 12)
        if window is not None:
            window.push(x, value)
            if y > 3 and x > 3:
                rows = window.rows()
                pattern = bayer_channel(y, x, top.img_pattern)
                taps = _SAME_COLOUR_TAPS if pattern in (0, 3) else _GREEN_TAPS
                neighbours = [rows[r][c] for r, c in taps]
                centre = rows[2][2]
                if is_defect(neighbours, centre, reg.th_w, reg.th_b):
                    value = median_filter(neighbours)
                else:
                    value = centre
            else:
                value = 0
        if y > 2 or (y == 2 and x > 1):
            out.append(value)
    out.extend([0] * (2 * top.frame_width + 2))
    return out