"""Digital gain with per-channel black level on Bayer raw data."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .common import TopRegister, _raster, bayer_channel, clip, to_signed, to_unsigned

GAIN_BITS = 12
GAIN_HALF_VALUE = 1 << (GAIN_BITS - 1)


@dataclass(frozen=True)
class DgainRegister:
    """Per-channel black levels (9 bits) and gains in 8.12 fixed point (20 bits)."""

    enable: bool = False
    blc_r: int = 0
    blc_gr: int = 0
    blc_gb: int = 0
    blc_b: int = 0
    gain_r: int = 0
    gain_gr: int = 0
    gain_gb: int = 0
    gain_b: int = 0

    def _channel(self, channel: int) -> tuple[int, int]:
        blc, gain = (
            (self.blc_r, self.gain_r),
            (self.blc_gr, self.gain_gr),
            (self.blc_gb, self.gain_gb),
            (self.blc_b, self.gain_b),
        )[channel]
        return to_unsigned(blc, 9), to_unsigned(gain, 20)


def dgain(top: TopRegister, reg: DgainRegister, pixels: Iterable[int]) -> list[int]:
    """Apply digital gain to one raw frame and return the 12-bit output samples."""
    out = []
    for y, x, sample in _raster(top, pixels):
        value = to_unsigned(sample, 12)
        if reg.enable:
            blc, gain = reg._channel(bayer_channel(y, x, top.img_pattern))
            scaled = to_signed((value - blc) * gain + GAIN_HALF_VALUE, 34)
            level = to_signed((scaled >> GAIN_BITS) + top.blc, 22)
            value = clip(level, 0, 4095)
        out.append(value)
    return out