"""Colour matrix correction with optional colour-free desaturation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .common import TopRegister, _raster, clip, to_signed, to_unsigned

CMC_BITS_DEEP = 14
CMC_SHIFT_DEEP = 10
CMC_HALF_VALUE = 1 << (CMC_SHIFT_DEEP - 1)
CMC_MAX_VALUE = (1 << CMC_BITS_DEEP) - 1

_DIAGONAL = (0, 5, 10)
_OFFSETS = (3, 7, 11)


@dataclass
class CmcRegister:
    """3x4 matrix of signed 16-bit gains (4096 is unity) and colour-free controls."""

    gains: Sequence[int]
    enable: bool = False
    cfc_enable: bool = False
    discard_h: bool = False
    hue_range: Sequence[int] = (0, 0)
    hue_band_shift: int = 0
    edge_threshold: int = 0
    edge_band_shift: int = 0
    cfc_strength: int = 0

    def __post_init__(self) -> None:
        self.gains = tuple(to_signed(g, 16) for g in self.gains)
        if len(self.gains) != 12:
            raise ValueError(f"colour matrix needs 12 gains, got {len(self.gains)}")
        self.hue_range = tuple(to_unsigned(h, 9) for h in self.hue_range)
        if len(self.hue_range) != 2:
            raise ValueError("hue range needs two bounds")
        self.hue_band_shift = to_unsigned(self.hue_band_shift, 3)
        self.edge_threshold = to_unsigned(self.edge_threshold, 8)
        self.edge_band_shift = to_unsigned(self.edge_band_shift, 3)
        self.cfc_strength = to_unsigned(self.cfc_strength, 5)

    def _effective_gains(self) -> tuple[int, ...]:
        ratio = self.cfc_strength if self.cfc_enable else 0
        result = []
        for index, gain in enumerate(self.gains):
            if index in _OFFSETS:
                value = gain
            else:
                value = gain - ((gain * ratio) >> 6)
                if index in _DIAGONAL:
                    value += ratio << 6
            result.append(to_signed(value, 16))
        return tuple(result)


def cmc(
    top: TopRegister, reg: CmcRegister, pixels: Iterable[Sequence[int]]
) -> list[tuple[int, int, int]]:
    """Apply the colour matrix to 12-bit (r, g, b) samples, giving 14-bit output."""
    gains = reg._effective_gains()
    high_term = 0 if reg.discard_h else 0x3
    blc_term = (top.blc << 2) | 0x3
    out = []
    for _y, _x, pixel in _raster(top, pixels):
        channels = tuple(to_unsigned(c, 12) for c in pixel)
        if len(channels) != 3:
            raise ValueError("each pixel needs three channels")
        if not reg.enable:
            out.append(tuple(to_unsigned((c << 2) + 3, 14) for c in channels))
            continue
        centred = [to_signed(c - top.blc, 13) for c in channels]
        mapped = []
        for k in range(3):
            row = gains[4 * k:4 * k + 4]
            acc = to_signed(sum(g * c for g, c in zip(row, centred)) + CMC_HALF_VALUE, 31)
            level = to_signed((acc >> CMC_SHIFT_DEEP) + high_term + blc_term + row[3], 21)
            mapped.append(clip(level, 0, CMC_MAX_VALUE))
        out.append(tuple(mapped))
    return out