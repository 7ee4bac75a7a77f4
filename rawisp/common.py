"""Frame-level register layout and fixed-width integer helpers shared by all stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator

FRAME_DIM_BITS = 13


def _check_range(name: str, value: int, bits: int) -> None:
    limit = (1 << bits) - 1
    if not 0 <= value <= limit:
        raise ValueError(f"{name} must be in 0..{limit}, got {value}")


@dataclass(frozen=True)
class TopRegister:
    """Frame geometry and global settings seen by every pipeline stage."""

    frame_width: int
    frame_height: int
    input_format: bool = False
    img_pattern: int = 0
    pipe_mode: int = 0
    blc: int = 0
    shadow_eb: bool = False
    binning_frame_width: int = 0
    binning_frame_height: int = 0
    scaler_frame_width: int = 0
    scaler_frame_height: int = 0

    def __post_init__(self) -> None:
        for name in (
            "frame_width",
            "frame_height",
            "binning_frame_width",
            "binning_frame_height",
            "scaler_frame_width",
            "scaler_frame_height",
        ):
            _check_range(name, getattr(self, name), FRAME_DIM_BITS)
        _check_range("img_pattern", self.img_pattern, 2)
        _check_range("pipe_mode", self.pipe_mode, 2)
        _check_range("blc", self.blc, 9)


@dataclass
class YuvPlanes:
    """Three separate sample planes, each in raster order."""

    y: list[int] = field(default_factory=list)
    u: list[int] = field(default_factory=list)
    v: list[int] = field(default_factory=list)


def bayer_channel(y: int, x: int, pattern: int) -> int:
    """Colour index (0 R, 1 Gr, 2 Gb, 3 B) of the sample at row y, column x."""
    return ((((y & 1) << 1) + (x & 1)) ^ pattern) & 0x3


def to_unsigned(value: int, bits: int) -> int:
    """Keep the low ``bits`` bits of ``value``."""
    if bits < 1:
        raise ValueError("bit width must be positive")
    return value & ((1 << bits) - 1)


def to_signed(value: int, bits: int) -> int:
    """Interpret the low ``bits`` bits of ``value`` as a two's complement number."""
    value = to_unsigned(value, bits)
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def clip(value: int, lower: int, upper: int) -> int:
    """Saturate ``value`` into the closed range [lower, upper]."""
    if lower > upper:
        raise ValueError("lower bound exceeds upper bound")
    return max(lower, min(upper, value))


def pack3(first: int, second: int, third: int, bits: int) -> int:
    """Pack three ``bits``-wide fields into one word, first field most significant."""
    return (
        (to_unsigned(first, bits) << (2 * bits))
        | (to_unsigned(second, bits) << bits)
        | to_unsigned(third, bits)
    )


def unpack3(word: int, bits: int) -> tuple[int, int, int]:
    """Split a word produced by :func:`pack3` back into its three fields."""
    return (
        to_unsigned(word >> (2 * bits), bits),
        to_unsigned(word >> bits, bits),
        to_unsigned(word, bits),
    )


def _raster(top: TopRegister, samples: Iterable) -> Iterator[tuple[int, int, object]]:
    """Yield (row, column, sample) for one frame, failing if the input runs short."""
    source = iter(samples)
    for y in range(top.frame_height):
        for x in range(top.frame_width):
            try:
                sample = next(source)
            except StopIteration:
                raise ValueError(
                    "input ended before the frame was complete"
                ) from None
            yield y, x, sample