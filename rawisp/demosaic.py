"""Bayer to RGB demosaicing with a 5x5 gradient-corrected interpolation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .common import TopRegister, _raster, bayer_channel, clip, to_unsigned
from .dpc import _SlidingWindow


@dataclass(frozen=True)
class DemosaicRegister:
    """Demosaic enable switch; when off the stage emits black pixels."""

    enable: bool = False


def _trunc_div(value: int, divisor: int) -> int:
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


def _green_at_rb(w: list[list[int]]) -> int:
    return _trunc_div(
        4 * w[2][2] - w[0][2] - w[2][0] - w[4][2] - w[2][4]
        + 2 * (w[3][2] + w[2][3] + w[1][2] + w[2][1]),
        8,
    )


def _diagonal(w: list[list[int]]) -> int:
    return _trunc_div(
        6 * w[2][2] - 3 * (w[0][2] + w[2][0] + w[4][2] + w[2][4]) // 2
        + 2 * (w[1][1] + w[1][3] + w[3][1] + w[3][3]),
        8,
    )


def _horizontal(w: list[list[int]]) -> int:
    return _trunc_div(
        5 * w[2][2] - w[2][0] - w[1][1] - w[3][1] - w[1][3] - w[3][3] - w[2][4]
        + (w[0][2] + w[4][2]) // 2 + 4 * (w[2][1] + w[2][3]),
        8,
    )


def _vertical(w: list[list[int]]) -> int:
    return _trunc_div(
        5 * w[2][2] - w[0][2] - w[1][1] - w[1][3] - w[4][2] - w[3][1] - w[3][3]
        + (w[2][0] + w[2][4]) // 2 + 4 * (w[1][2] + w[3][2]),
        8,
    )


def interpolate(window: Sequence[Sequence[int]], pattern: int) -> tuple[int, int, int]:
    """Full (r, g, b) at the centre of a 5x5 raw window whose centre has colour ``pattern``."""
    if len(window) != 5 or any(len(row) != 5 for row in window):
        raise ValueError("interpolation needs a 5x5 window")
    w = [[to_unsigned(v, 12) for v in row] for row in window]
    centre = w[2][2]
    channel = to_unsigned(pattern, 2)
    if channel == 0:
        rgb = (centre, _green_at_rb(w), _diagonal(w))
    elif channel == 1:
        rgb = (_horizontal(w), centre, _vertical(w))
    elif channel == 2:
        rgb = (_vertical(w), centre, _horizontal(w))
    else:
        rgb = (_diagonal(w), _green_at_rb(w), centre)
    return tuple(clip(v, 0, 4095) for v in rgb)


def demosaic(
    top: TopRegister, reg: DemosaicRegister, pixels: Iterable[int]
) -> list[tuple[int, int, int]]:
    """Interpolate one raw frame to 12-bit (r, g, b) pixels.

    The output lags the input by two rows and two columns; the unfiltered
    border and the trailing padding come out black.
    """
    window = _SlidingWindow(5, top.frame_width) if reg.enable else None
    black = (0, 0, 0)
    out = []
    for y, x, sample in _raster(top, pixels):
        value = to_unsigned(sample, 12)
        pixel = black
        if window is not None:
            window.push(x, value)
            if y > 3 and x > 3:
                pixel = interpolate(window.rows(), bayer_channel(y, x, top.img_pattern))
        if y > 2 or (y == 2 and x > 1):
            out.append(pixel)
    out.extend([black] * (2 * top.frame_width + 2))
    return out