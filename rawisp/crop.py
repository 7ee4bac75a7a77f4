"""Rectangular cropping of YUV planes in 4:4:4, 4:2:2 or 4:2:0 layout."""

from __future__ import annotations

from dataclasses import dataclass

from .common import TopRegister, YuvPlanes, _raster, to_unsigned

YUV444 = 0
YUV422 = 1
YUV420 = 2


@dataclass(frozen=True)
class CropRegister:
    """Crop rectangle (upper left inclusive, lower right exclusive) and YUV layout.

    ``yuv_pattern`` is 0 for 4:4:4, 1 for 4:2:2 and 2 for 4:2:0.
    """

    enable: bool = False
    upper_left_x: int = 0
    upper_left_y: int = 0
    lower_right_x: int = 0
    lower_right_y: int = 0
    yuv_pattern: int = YUV444


def _has_chroma(pattern: int, y: int, x: int) -> bool:
    if pattern == YUV444:
        return True
    if pattern == YUV422:
        return x & 1 == 1
    return y & 1 == 1 and x & 1 == 1


def crop(top: TopRegister, reg: CropRegister, planes: YuvPlanes) -> YuvPlanes:
    """Keep the samples of 10-bit planes that fall inside the crop rectangle.

    Chroma samples are consumed only at the positions the layout carries
    them. Disabled, every sample passes through. An unknown layout
    produces no output.
    """
    pattern = to_unsigned(reg.yuv_pattern, 2)
    out = YuvPlanes()
    if pattern not in (YUV444, YUV422, YUV420):
        return out

    left = to_unsigned(reg.upper_left_x, 13)
    upper = to_unsigned(reg.upper_left_y, 13)
    right = to_unsigned(reg.lower_right_x, 13)
    lower = to_unsigned(reg.lower_right_y, 13)

    chroma = zip(planes.u, planes.v)
    for y, x, luma in _raster(top, planes.y):
        luma = to_unsigned(luma, 10)
        carries_chroma = _has_chroma(pattern, y, x)
        if carries_chroma:
            try:
                u, v = next(chroma)
            except StopIteration:
                raise ValueError("chroma planes ended before the frame was complete") from None
            u, v = to_unsigned(u, 10), to_unsigned(v, 10)

        inside = not reg.enable or (upper <= y < lower and left <= x < right)
        if not inside:
            continue
        out.y.append(luma)
        if carries_chroma:
            out.u.append(u)
            out.v.append(v)
    return out