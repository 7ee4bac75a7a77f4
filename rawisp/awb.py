"""Grey-world auto white balance statistics on Bayer raw data."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .common import TopRegister, _raster, bayer_channel, to_unsigned

UNITY_GAIN = 16384


@dataclass(frozen=True)
class AwbRegister:
    """Statistics enable and the 5-bit averaging coefficient."""

    enable: bool = False
    coeff: int = 0


@dataclass(frozen=True)
class AwbResult:
    """Unchanged frame plus the gains derived from it."""

    pixels: list[int]
    r_gain: int
    g_gain: int
    b_gain: int


def awb(top: TopRegister, reg: AwbRegister, pixels: Iterable[int]) -> AwbResult:
    """Collect channel sums over one frame and derive red and blue gains.

    Raises ValueError when the red or blue average comes out as zero.
    """
    out = []
    totals = [0, 0, 0]
    for y, x, sample in _raster(top, pixels):
        value = to_unsigned(sample, 12)
        if reg.enable:
            channel = bayer_channel(y, x, top.img_pattern)
            slot = 0 if channel == 0 else 2 if channel == 3 else 1
            totals[slot] = to_unsigned(totals[slot] + value, 33)
        out.append(value)

    coeff = to_unsigned(reg.coeff, 5)
    r_total, g_total, b_total = totals
    r_avg = to_unsigned((r_total * coeff) >> 19, 12)
    g_avg = to_unsigned((g_total * coeff) >> 20, 12)
    b_avg = to_unsigned((b_total * coeff) >> 19, 12)
    if r_avg == 0 or b_avg == 0:
        raise ValueError("red or blue average is zero; gains are undefined")

    return AwbResult(
        pixels=out,
        r_gain=to_unsigned(UNITY_GAIN * g_avg // r_avg, 15),
        g_gain=UNITY_GAIN,
        b_gain=to_unsigned(UNITY_GAIN * g_avg // b_avg, 15),
    )