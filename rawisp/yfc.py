"""YUV format conversion from 4:4:4 to 4:2:2 or 4:2:0 planes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .common import TopRegister, YuvPlanes, _raster, to_unsigned


@dataclass(frozen=True)
class YfcRegister:
    """Subsampling switch: 4:2:2 by default, 4:2:0 when ``yuv420`` is set."""

    enable: bool = False
    yuv420: bool = False


def yfc(top: TopRegister, reg: YfcRegister, pixels: Iterable[Sequence[int]]) -> YuvPlanes:
    """Split 10-bit (y, u, v) samples into planes, averaging chroma when enabled."""
    planes = YuvPlanes()
    u_line = [0] * top.frame_width
    v_line = [0] * top.frame_width
    u_acc = v_acc = 0
    for y, x, pixel in _raster(top, pixels):
        channels = tuple(to_unsigned(c, 10) for c in pixel)
        if len(channels) != 3:
            raise ValueError("each pixel needs three channels")
        luma, u, v = channels
        planes.y.append(luma)

        if not reg.enable:
            planes.u.append(u)
            planes.v.append(v)
        elif not reg.yuv420:
            if x & 1 == 0:
                u_acc, v_acc = u, v
            else:
                u_acc = to_unsigned(u_acc + u, 11)
                v_acc = to_unsigned(v_acc + v, 11)
                planes.u.append(u_acc >> 1)
                planes.v.append(v_acc >> 1)
        elif y & 1 == 0:
            u_line[x] = u
            v_line[x] = v
        elif x & 1 == 0:
            u_acc = to_unsigned(u + u_line[x], 12)
            v_acc = to_unsigned(v + v_line[x], 12)
        else:
            u_acc = to_unsigned(u_acc + u + u_line[x], 12)
            v_acc = to_unsigned(v_acc + v + v_line[x], 12)
            planes.u.append(u_acc >> 2)
            planes.v.append(v_acc >> 2)
    return planes