"""White balance correction on Bayer raw data."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .common import TopRegister, _raster, bayer_channel, clip, to_signed, to_unsigned


@dataclass(frozen=True)
class WbcRegister:
    """Per-channel gains in 3.12 fixed point (15 bits)."""

    enable: bool = False
    gain_r: int = 0
    gain_gr: int = 0
    gain_gb: int = 0
    gain_b: int = 0

    def _gain(self, channel: int) -> int:
        gain = (self.gain_r, self.gain_gr, self.gain_gb, self.gain_b)[channel]
        return to_unsigned(gain, 15)


def wbc(top: TopRegister, reg: WbcRegister, pixels: Iterable[int]) -> list[int]:
    """Apply white balance gains to one raw frame."""
    out = []
    for y, x, sample in _raster(top, pixels):
        value = to_unsigned(sample, 12)
        if reg.enable:
            gain = reg._gain(bayer_channel(y, x, top.img_pattern))
            level = to_signed((((value - top.blc) * gain + 2048) >> 12) + top.blc, 16)
            value = clip(level, 0, 4095)
        out.append(value)
    return out