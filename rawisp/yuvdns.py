"""Non-local-means denoising of YUV 4:4:4 planes over a 9x9 window."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .common import TopRegister, YuvPlanes, _raster, to_unsigned
from .dpc import _SlidingWindow

WINDOW_SIZE = 9
CENTRE = 4
MAX_VALUE = (1 << 10) - 1

# Weights for patch distances at or below H^2, in sevenths of that bound.
_NEAR_WEIGHTS = (255, 226, 200, 176, 156, 138, 122, 108)
# Weights for patch distances above H^2, in fifths of that bound from 5/5 on.
_FAR_WEIGHTS = (88, 72, 59, 48, 39, 32, 26, 21, 17, 14, 11, 9, 7, 5, 2, 0)


@dataclass(frozen=True)
class YuvdnsRegister:
    """Noise and filter settings for luma and chroma.

    ``*_h2`` is the squared filter strength (14 bits) and ``*_inv_h2`` its
    reciprocal scaled by 2**14 (18 bits); those and ``*_sigma2`` drive the
    filter, the remaining fields describe how they were derived.
    """

    enable: bool = False
    y_sigma2: int = 0
    y_inv_sigma2: int = 0
    uv_sigma2: int = 0
    uv_inv_sigma2: int = 0
    y_filt: int = 0
    uv_filt: int = 0
    y_inv_filt: int = 0
    uv_inv_filt: int = 0
    y_h2: int = 0
    y_inv_h2: int = 0
    uv_h2: int = 0
    uv_inv_h2: int = 0


def nlm(window: Sequence[Sequence[int]], sigma2: int, h2: int, inv_h2: int) -> int:
    """Denoised value of the centre of a 9x9 window of 10-bit samples.

    Raises ValueError when a distance maps outside the near weighting table.
    """
    if len(window) != WINDOW_SIZE or any(len(row) != WINDOW_SIZE for row in window):
        raise ValueError(f"denoising needs a {WINDOW_SIZE}x{WINDOW_SIZE} window")
    cells = [[to_unsigned(v, 10) for v in row] for row in window]
    noise_floor = 2 * to_unsigned(sigma2, 14)
    h2 = to_unsigned(h2, 14)
    inv_h2 = to_unsigned(inv_h2, 18)

    total_weight = total_value = max_weight = 0
    for j in range(1, WINDOW_SIZE - 1):
        for i in range(1, WINDOW_SIZE - 1):
            if (j, i) == (CENTRE, CENTRE):
                continue
            distance = sum(
                (cells[j + dj][i + di] - cells[CENTRE + dj][CENTRE + di]) ** 2
                for dj in (-1, 0, 1)
                for di in (-1, 0, 1)
            ) >> 3
            diff = 0 if distance < noise_floor else distance - noise_floor

            if h2 == 0:
                w = 0
            elif diff <= h2:
                count = to_unsigned((to_unsigned(7 * diff, 28) * inv_h2) >> 14, 32)
                if count >= len(_NEAR_WEIGHTS):
                    raise ValueError(f"distance step {count} falls outside the weighting table")
                w = _NEAR_WEIGHTS[count]
            else:
                count = to_unsigned((to_unsigned(5 * diff, 28) * inv_h2) >> 14, 32)
                w = _FAR_WEIGHTS[min(to_unsigned(count - 5, 32), 15)]

            max_weight = max(max_weight, w)
            total_weight = to_unsigned(total_weight + w, 14)
            total_value = to_unsigned(total_value + cells[j][i] * w, 25)

    centre = cells[CENTRE][CENTRE]
    total_weight = to_unsigned(total_weight + max_weight, 14)
    total_value = to_unsigned(total_value + centre * max_weight, 25)
    if total_weight == 0:
        return centre
    return to_unsigned(total_value // total_weight, 10)


def yuvdns(top: TopRegister, reg: YuvdnsRegister, planes: YuvPlanes) -> YuvPlanes:
    """Denoise one frame of 10-bit YUV 4:4:4 planes.

    Enabled, the frame comes out in the same order as it went in, with
    pixels too close to the border passed through. Disabled, samples pass
    through from row 4, column 4 on and the frame is completed with zeros.
    """
    settings = (
        (reg.y_sigma2, reg.y_h2, reg.y_inv_h2),
        (reg.uv_sigma2, reg.uv_h2, reg.uv_inv_h2),
        (reg.uv_sigma2, reg.uv_h2, reg.uv_inv_h2),
    )
    windows = [_SlidingWindow(WINDOW_SIZE, top.frame_width) for _ in range(3)]
    out = YuvPlanes()
    dests = (out.y, out.u, out.v)

    for y, x, pixel in _raster(top, zip(planes.y, planes.u, planes.v)):
        values = tuple(to_unsigned(v, 10) for v in pixel)
        if reg.enable:
            results = []
            for window, value, params in zip(windows, values, settings):
                window.push(x, value)
                rows = window.rows()
                if y > 7 and x > 7:
                    results.append(nlm(rows, *params))
                else:
                    results.append(rows[CENTRE][CENTRE])
        else:
            results = values
        if y > 4 or (y == 4 and x > 3):
            for dest, value in zip(dests, results):
                dest.append(value)

    for dest, window in zip(dests, windows):
        dest.extend(window.rows()[CENTRE][CENTRE + 1:])
        for index in range(CENTRE, WINDOW_SIZE - 1):
            dest.extend(window.line(index))
    return out