"""Lens shading correction driven by a 13x17 grid of per-channel gains."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .common import TopRegister, _raster, bayer_channel, clip, to_signed, to_unsigned

GRID_ROWS = 13
GRID_COLS = 17
GRID_SIZE = GRID_ROWS * GRID_COLS

# Offsets from the block counter to the lt, rt, ld and rd grid entries.
_CORNER_OFFSETS = (-2, -1, GRID_COLS - 2, GRID_COLS - 1)


@dataclass
class LscRegister:
    """Gain grids (13-bit, 2048 is unity) and block geometry.

    ``block_width_inv`` is the reciprocal of the block width in 0.19 fixed
    point (14 bits); ``block_height_inv`` the reciprocal of the block height
    in 0.15 fixed point (10 bits).
    """

    r_gain: Sequence[int]
    gr_gain: Sequence[int]
    gb_gain: Sequence[int]
    b_gain: Sequence[int]
    block_width: int
    block_height: int
    block_width_inv: int
    block_height_inv: int
    enable: bool = False

    def __post_init__(self) -> None:
        for name in ("r_gain", "gr_gain", "gb_gain", "b_gain"):
            table = tuple(to_unsigned(v, 13) for v in getattr(self, name))
            if len(table) != GRID_SIZE:
                raise ValueError(f"{name} needs {GRID_SIZE} entries, got {len(table)}")
            setattr(self, name, table)
        self.block_width = to_unsigned(self.block_width, 9)
        self.block_height = to_unsigned(self.block_height, 9)
        self.block_width_inv = to_unsigned(self.block_width_inv, 14)
        self.block_height_inv = to_unsigned(self.block_height_inv, 10)


def bilinear_interpolation(
    left_top: int,
    left_down: int,
    right_top: int,
    right_down: int,
    width_count: int,
    height_count: int,
    width_inv: int,
    height_inv: int,
) -> int:
    """Interpolate a gain inside a block from its four corner gains."""
    lt, ld, rt, rd = (
        to_signed(to_unsigned(g, 13), 14) for g in (left_top, left_down, right_top, right_down)
    )
    width_step = to_unsigned(width_count, 9) * to_unsigned(width_inv, 14)
    height_step = to_unsigned(height_count, 9) * to_unsigned(height_inv, 10)
    upper = to_signed(lt - (((lt - rt) * width_step + 128) >> 19), 14)
    lower = to_signed(ld - (((ld - rd) * width_step + 128) >> 19), 14)
    return to_signed(upper - (((upper - lower) * height_step + 128) >> 15), 14)


def _lookup(table: tuple[int, ...], index: int) -> int:
    # Reads past the grid only feed gains that are replaced before they are used.
    return table[index] if 0 <= index < len(table) else 0


def lsc(top: TopRegister, reg: LscRegister, pixels: Iterable[int]) -> list[int]:
    """Correct lens shading on one raw frame and return the 12-bit samples."""
    tables = (reg.r_gain, reg.gr_gain, reg.gb_gain, reg.b_gain)
    last_x = top.frame_width - 1
    block_width, block_height = reg.block_width, reg.block_height

    width_count = height_count = 0
    blue_line = False
    gains = [[0, 0, 0, 0] for _ in range(4)]  # lt, rt, ld, rd per channel
    next_top = [0, 0]
    next_down = [0, 0]
    block_count = [0, 0]  # red lines, blue lines

    out = []
    for y, x, sample in _raster(top, pixels):
        value = to_unsigned(sample, 12)
        if not reg.enable:
            out.append(value)
            continue

        first = x == 0 and y == 0
        if first:
            for channel, table in enumerate(tables):
                gains[channel] = [table[0], table[1], table[GRID_COLS], table[GRID_COLS + 1]]
            pair = tables[2:] if blue_line else tables[:2]
            next_top = [pair[0][2], pair[1][2]]
            next_down = [pair[0][GRID_COLS + 2], pair[1][GRID_COLS + 2]]
            blue_line = top.img_pattern > 1

        lt, rt, ld, rd = gains[bayer_channel(y, x, top.img_pattern)]
        gain = bilinear_interpolation(
            lt, ld, rt, rd, width_count, height_count, reg.block_width_inv, reg.block_height_inv
        )
        level = to_signed(to_signed(value - top.blc, 13) * gain, 27)
        level = to_signed(((level + 1024) >> 11) + top.blc, 27)
        out.append(clip(level, 0, 4095))

        line = int(blue_line)
        block_end = width_count == block_width - 1

        for parity in (0, 1):
            if first:
                block_count[parity] = 2
            elif x == last_x and line == parity:
                if height_count in (block_height - 1, block_height - 2):
                    block_count[parity] += 2
                else:
                    block_count[parity] -= 15
            elif block_end and line == parity:
                block_count[parity] += 1
            block_count[parity] = to_unsigned(block_count[parity], 8)

        if block_end:
            for offset in (0, 1):
                corners = gains[2 * line + offset]
                corners[0], corners[2] = corners[1], corners[3]
                corners[1], corners[3] = next_top[offset], next_down[offset]

        if y != 0 and 5 <= x <= 12:
            other = 1 - line
            slot = x - 5
            channel = 2 * other + slot // 4
            position = slot % 4
            index = block_count[other] + _CORNER_OFFSETS[position]
            gains[channel][position] = _lookup(tables[channel], index)

        if width_count < 4:
            pair = tables[2:] if blue_line else tables[:2]
            offset = width_count & 1
            if width_count < 2:
                next_top[offset] = _lookup(pair[offset], block_count[line])
            else:
                next_down[offset] = _lookup(pair[offset], block_count[line] + GRID_COLS)

        if x == last_x:
            if height_count == block_height - 1:
                height_count = 0
            else:
                height_count = to_unsigned(height_count + 1, 9)

        if block_end or x == last_x:
            width_count = 0
        else:
            width_count = to_unsigned(width_count + 1, 9)

        if x == last_x:
            blue_line = not blue_line
    return out