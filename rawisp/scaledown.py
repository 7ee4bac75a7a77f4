"""Box-filter downscaling of YUV 4:4:4 planes by a factor of two or four."""

from __future__ import annotations

from dataclasses import dataclass

from .common import TopRegister, YuvPlanes, _raster, to_unsigned

MAX_LINE_WIDTH = 4096

# Right shift that turns the sum of a factor x factor box into its mean.
_SHIFTS = {2: 2, 4: 4}


@dataclass(frozen=True)
class ScaledownRegister:
    """Enable switch, YUV layout (0 is 4:4:4) and the 5-bit scale factor."""

    enable: bool = False
    yuv_pattern: int = 0
    times: int = 2


def scaledown(top: TopRegister, reg: ScaledownRegister, planes: YuvPlanes) -> YuvPlanes:
    """Average each factor x factor box of 10-bit samples into one output sample.

    Only 4:4:4 input with a factor of 2 or 4 is scaled; any other setting
    produces no output while enabled. Disabled, the planes pass through.
    """
    if top.frame_width > MAX_LINE_WIDTH:
        raise ValueError(
            f"line buffers hold at most {MAX_LINE_WIDTH} columns, got {top.frame_width}"
        )
    out = YuvPlanes()
    dests = (out.y, out.u, out.v)
    factor = to_unsigned(reg.times, 5)
    active = to_unsigned(reg.yuv_pattern, 2) == 0 and factor in _SHIFTS
    lines = (
        [[[0] * top.frame_width for _ in range(factor - 1)] for _ in range(3)]
        if active
        else []
    )
    sums = [0, 0, 0]

    samples = zip(planes.y, planes.u, planes.v)
    for y, x, pixel in _raster(top, samples):
        values = tuple(to_unsigned(v, 10) for v in pixel)
        if not reg.enable:
            for dest, value in zip(dests, values):
                dest.append(value)
            continue
        if not active:
            continue

        row_phase = y % factor
        col_phase = x % factor
        for k, value in enumerate(values):
            if row_phase < factor - 1:
                lines[k][row_phase][x] = value
                continue
            column = value + sum(line[x] for line in lines[k])
            if col_phase == 0:
                sums[k] = to_unsigned(column, 15)
            else:
                sums[k] = to_unsigned(sums[k] + column, 15)
            if col_phase == factor - 1:
                dests[k].append(sums[k] >> _SHIFTS[factor])
    return out