"""Colour-bar test pattern generator for Bayer raw frames."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .common import TopRegister, _raster, bayer_channel, to_unsigned

TPG_BITS = 12
MAX_LEVEL = (1 << TPG_BITS) - 1

# Channels at full scale for each bar: white, black, red, green, blue,
# cyan, magenta, yellow.
_FULL_CHANNELS = (
    frozenset({0, 1, 2, 3}),
    frozenset(),
    frozenset({0}),
    frozenset({1, 2}),
    frozenset({3}),
    frozenset({1, 2, 3}),
    frozenset({0, 3}),
    frozenset({0, 1, 2}),
)


@dataclass(frozen=True)
class TpgRegister:
    """Pattern generator switch; when off, the input frame passes through."""

    enable: bool = False


def color_select(channel: int, block_id: int) -> int:
    """Level of one Bayer channel inside colour bar ``block_id``."""
    bar = to_unsigned(block_id, 4)
    if bar > 7:
        bar -= 8
    return MAX_LEVEL if to_unsigned(channel, 2) in _FULL_CHANNELS[bar] else 0


def tpg(top: TopRegister, reg: TpgRegister, pixels: Iterable[int]) -> list[int]:
    """Replace one raw frame with eight vertical colour bars, or pass it through."""
    block_width = (top.frame_width >> 3) & 0x3FE
    out = []
    count = block = 0
    for y, x, sample in _raster(top, pixels):
        if not reg.enable:
            out.append(to_unsigned(sample, 12))
            continue
        if x == 0:
            count = block = 0
        if count == block_width:
            count = 1
            block += 1
        else:
            count = (count + 1) & 0x3FF
        block = min(block, 7)
        out.append(color_select(bayer_channel(y, x, top.img_pattern), block))
    return out