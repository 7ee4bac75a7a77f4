"""Global tone mapping through a 129-point curve with optional dithering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .common import TopRegister, _raster, clip, to_signed, to_unsigned

TABLE_SIZE = 129
MAX_VALUE = 16383


@dataclass
class GtmRegister:
    """Tone curve of 129 10-bit points plus enable and dithering switches."""

    table: Sequence[int]
    enable: bool = False
    dithering_enable: bool = False

    def __post_init__(self) -> None:
        self.table = tuple(to_unsigned(v, 10) for v in self.table)
        if len(self.table) != TABLE_SIZE:
            raise ValueError(f"tone table needs {TABLE_SIZE} entries, got {len(self.table)}")


def _map(table: tuple[int, ...], value: int) -> tuple[int, int]:
    index = value >> 7
    frac = value & 0x7F
    low = table[index] * 16 + 15 if table[index] else 0
    high = table[index + 1] * 16 + 15 if table[index + 1] else 1
    slope = to_signed(high - low, 15)
    if index == 127:
        step = to_signed((slope * frac * 129 + 2048) >> 12, 17)
    else:
        step = to_signed((slope * frac + 16) >> 5, 17)
    return low, step


def gtm(
    top: TopRegister, reg: GtmRegister, pixels: Iterable[Sequence[int]]
) -> list[tuple[int, int, int]]:
    """Tone-map one frame of 14-bit (r, g, b) samples."""
    seeds = [8] * 6
    out = []
    for y, _x, pixel in _raster(top, pixels):
        channels = tuple(to_unsigned(c, 14) for c in pixel)
        if len(channels) != 3:
            raise ValueError("each pixel needs three channels")
        if not reg.enable:
            out.append(channels)
            continue
        row = y & 1
        mapped = []
        for k, value in enumerate(channels):
            low, step = _map(reg.table, value)
            if reg.dithering_enable:
                slot = row * 3 + k
                acc = to_signed(low * 4 + step + seeds[slot], 18)
                seeds[slot] = acc & 0x1F
                level = to_signed(acc >> 2, 16)
            else:
                level = to_signed(low + ((step + 2) >> 2), 16)
            mapped.append(clip(level, 0, MAX_VALUE))
        out.append(tuple(mapped))
    return out