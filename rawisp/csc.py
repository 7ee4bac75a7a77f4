"""RGB to YUV colour space conversion with error-feedback requantisation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .common import TopRegister, _raster, clip, to_signed, to_unsigned


@dataclass
class CscRegister:
    """3x4 conversion matrix of signed 11-bit coefficients, row by row."""

    coeffs: Sequence[int]
    enable: bool = False

    def __post_init__(self) -> None:
        self.coeffs = tuple(to_signed(c, 11) for c in self.coeffs)
        if len(self.coeffs) != 12:
            raise ValueError(f"conversion matrix needs 12 coefficients, got {len(self.coeffs)}")


def csc(
    top: TopRegister, reg: CscRegister, pixels: Iterable[Sequence[int]]
) -> list[tuple[int, int, int]]:
    """Convert one frame of 14-bit (r, g, b) samples to 10-bit (y, u, v)."""
    seeds = [4] * 6
    out = []
    for y, _x, pixel in _raster(top, pixels):
        channels = tuple(to_unsigned(c, 14) for c in pixel)
        if len(channels) != 3:
            raise ValueError("each pixel needs three channels")
        row = y & 1
        reduced = []
        for k, value in enumerate(channels):
            slot = row * 3 + k
            tmp = to_unsigned(value // 4 + seeds[slot], 14)
            seeds[slot] = tmp & 0xF
            reduced.append(0x3FF if tmp // 4 > 1023 else tmp // 4)

        if reg.enable:
            converted = []
            for k in range(3):
                row_coeffs = reg.coeffs[4 * k:4 * k + 4]
                acc = to_signed(sum(c * v for c, v in zip(row_coeffs, reduced)), 23)
                level = to_signed(((acc + 512) >> 10) + row_coeffs[3], 13)
                converted.append(clip(level, 0, 1023))
            out.append(tuple(converted))
        else:
            out.append(tuple(reduced))
    return out