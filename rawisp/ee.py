"""Edge enhancement of RGB frames by boosting detail above a coring threshold."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .common import TopRegister, _raster, clip, pack3, to_signed, to_unsigned, unpack3
from .demosaic import _trunc_div
from .dpc import _SlidingWindow

MAX_VALUE = 4095

_GAUSS = (
    (1, 2, 4, 2, 1),
    (2, 4, 8, 4, 2),
    (4, 8, 16, 8, 4),
    (2, 4, 8, 4, 2),
    (1, 2, 4, 2, 1),
)


@dataclass(frozen=True)
class EeRegister:
    """Enable switch and the 8-bit detail gain (16 is unity)."""

    enable: bool = False
    coeff: int = 0


def _core(value: int, threshold: int) -> int:
    if value > threshold:
        return to_signed(value - threshold, 14)
    if value < -threshold:
        return to_signed(value + threshold, 14)
    return 0


def _band(values: Sequence[int], threshold: int) -> int:
    """One Haar-like low-pass step over five samples with cored detail."""
    halves = [_trunc_div(v, 2) for v in values]
    low = [to_signed(a + b, 14) for a, b in zip(halves, halves[1:])]
    high = [_core(to_signed(a - b, 14), threshold) for a, b in zip(halves, halves[1:])]
    terms = (low[1], high[1], low[2], high[2])
    return to_signed(sum(_trunc_div(t, 2) for t in terms), 15)


def _enhance_channel(plane: list[list[int]], coeff: int) -> int:
    weighted = sum(g * v for grow, vrow in zip(_GAUSS, plane) for g, v in zip(grow, vrow))
    threshold = to_signed(weighted, 23) >> 10
    columns = [
        clip(_band([plane[row][col] for row in range(5)], threshold), 0, MAX_VALUE)
        for col in range(5)
    ]
    low = clip(_band(columns, threshold), 0, MAX_VALUE)
    high = to_signed(plane[2][2] - low, 15)
    middle = to_signed(high * coeff + 8, 24)
    return clip(to_signed((middle >> 4) + low, 25), 0, MAX_VALUE)


def enhance_block(block: Sequence[Sequence[Sequence[int]]], coeff: int) -> tuple[int, int, int]:
    """Enhanced (r, g, b) of the centre of a 5x5 block of 12-bit (r, g, b) pixels."""
    if len(block) != 5 or any(len(row) != 5 for row in block):
        raise ValueError("edge enhancement needs a 5x5 block")
    if any(len(pixel) != 3 for row in block for pixel in row):
        raise ValueError("each pixel needs three channels")
    gain = to_unsigned(coeff, 8)
    planes = [
        [[to_unsigned(pixel[k], 12) for pixel in row] for row in block] for k in range(3)
    ]
    return tuple(_enhance_channel(plane, gain) for plane in planes)


def _channels(pixel: Sequence[int]) -> tuple[int, int, int]:
    channels = tuple(to_unsigned(c, 12) for c in pixel)
    if len(channels) != 3:
        raise ValueError("each pixel needs three channels")
    return channels


def edge_enhancement(
    top: TopRegister, reg: EeRegister, pixels: Iterable[Sequence[int]]
) -> list[tuple[int, int, int]]:
    """Sharpen one frame of 12-bit (r, g, b) pixels.

    The frame comes out in the same order as it went in; pixels too close to
    the border for a full block pass through unchanged.
    """
    if not reg.enable:
        return [_channels(pixel) for _y, _x, pixel in _raster(top, pixels)]

    window = _SlidingWindow(5, top.frame_width)
    out = []
    for y, x, pixel in _raster(top, pixels):
        window.push(x, pack3(*_channels(pixel), 12))
        rows = window.rows()
        if y > 3 and x > 3:
            value = enhance_block([[unpack3(w, 12) for w in row] for row in rows], reg.coeff)
        else:
            value = unpack3(rows[2][2], 12)
        if y > 2 or (y == 2 and x >= 2):
            out.append(value)

    width = top.frame_width
    out.extend(unpack3(w, 12) for w in window.line(1)[max(width - 2, 0):])
    for index in (2, 3):
        out.extend(unpack3(w, 12) for w in window.line(index))
    return out