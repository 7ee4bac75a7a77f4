# rawisp

Bit-accurate reference models of the stages of a streaming camera image
signal processor, in pure Python with no dependencies.

Each stage is a function that takes a `TopRegister` describing the frame,
a stage register (a dataclass with the stage's settings) and one frame of
samples in raster order. It returns the samples the hardware would emit,
reproducing its fixed-width integer wrap-around, clipping, line-buffer
delays and end-of-frame padding. Inputs are masked to the stage's sample
width; a frame whose input runs short raises `ValueError`.

## Frame description

`rawisp.common.TopRegister` holds `frame_width` and `frame_height`
(13 bits each), `img_pattern` (the colour of the top-left sample:
0 R, 1 Gr, 2 Gb, 3 B), the black level `blc` (9 bits) and a few further
frame settings. Out-of-range values raise `ValueError`.

`rawisp.common.YuvPlanes` carries YUV data as three lists `y`, `u`, `v`.

Helpers in `rawisp.common`:

- `bayer_channel(y, x, pattern)`: Bayer colour (0 R, 1 Gr, 2 Gb, 3 B) of a sample
- `to_unsigned(value, bits)`, `to_signed(value, bits)`: fixed-width wrap-around
- `clip(value, lower, upper)`: saturation
- `pack3(first, second, third, bits)`, `unpack3(word, bits)`: three fields in one word

## Stages

Raw (Bayer) domain, 12-bit samples as a flat sequence of integers:

| Function | Register | What it does |
| --- | --- | --- |
| `rawisp.tpg.tpg` | `TpgRegister` | eight vertical colour bars, or pass-through; `color_select(channel, block_id)` gives one bar's level |
| `rawisp.dgain.dgain` | `DgainRegister` | per-channel black level and 8.12 digital gain |
| `rawisp.lsc.lsc` | `LscRegister` | lens shading correction from 13x17 gain grids; `bilinear_interpolation(...)` |
| `rawisp.dpc.dpc` | `DpcRegister` | defect detection (`is_defect`) and median correction (`median_filter`) |
| `rawisp.rawdns.rawdns` | `RawdnsRegister` | non-local-means denoise over an 11x11 window; `weight`, `euclidean_distance`, `denoise_pixel` |
| `rawisp.awb.awb` | `AwbRegister` | grey-world statistics; returns an `AwbResult` with the unchanged pixels and `r_gain`, `g_gain`, `b_gain` |
| `rawisp.wbc.wbc` | `WbcRegister` | per-channel 3.12 white balance gain |
| `rawisp.gb.green_balance` | `GbRegister` | Gr/Gb balance over a 7x7 window; `column_statistic` |
| `rawisp.demosaic.demosaic` | `DemosaicRegister` | Bayer to 12-bit `(r, g, b)` tuples; `interpolate(window, pattern)` |

RGB domain, pixels as `(r, g, b)` tuples:

| Function | Register | What it does |
| --- | --- | --- |
| `rawisp.ee.edge_enhancement` | `EeRegister` | 12-bit edge enhancement; `enhance_block(block, coeff)` |
| `rawisp.cmc.cmc` | `CmcRegister` | colour matrix, 12-bit in, 14-bit out |
| `rawisp.gtm.gtm` | `GtmRegister` | 129-point tone curve on 14-bit samples, optional dithering |
| `rawisp.csc.csc` | `CscRegister` | 14-bit RGB to 10-bit `(y, u, v)` tuples |

YUV domain, 10-bit samples:

| Function | Register | What it does |
| --- | --- | --- |
| `rawisp.yfc.yfc` | `YfcRegister` | `(y, u, v)` tuples to `YuvPlanes`, 4:2:2 or 4:2:0 chroma averaging when enabled |
| `rawisp.yuvdns.yuvdns` | `YuvdnsRegister` | non-local-means denoise of 4:4:4 planes over a 9x9 window; `nlm` |
| `rawisp.scaledown.scaledown` | `ScaledownRegister` | 2x or 4x box downscaling of 4:4:4 planes |
| `rawisp.crop.crop` | `CropRegister` | rectangular crop of 4:4:4, 4:2:2 or 4:2:0 planes |

### Delays and padding

The windowed stages emit their output late by the window's half size and
finish the frame from their line buffers or with zeros, so the output has as
many samples as the input:

- `dpc` and `demosaic` lag by two rows and two columns; the unfiltered border
  and the trailing padding are zero (black for `demosaic`).
- `rawdns` lags by five rows and five columns with zero border and padding;
  when disabled the whole frame comes out as zero.
- `green_balance`, `edge_enhancement` and `yuvdns` pass border pixels through
  unchanged and keep the frame in input order.
- `dpc`, `demosaic`, `green_balance`, `rawdns`, `edge_enhancement`,
  `yuvdns` and `scaledown` accept frames at most 4096 columns wide.

## Example

```python
from rawisp.common import TopRegister
from rawisp.wbc import WbcRegister, wbc

top = TopRegister(frame_width=4, frame_height=2, img_pattern=3)
reg = WbcRegister(enable=True, gain_r=19575, gain_gr=16384, gain_gb=16384, gain_b=26916)
out = wbc(top, reg, [1000] * 8)
```

Stages chain by passing one stage's output to the next, as long as the
sample shapes match (flat integers, tuples or `YuvPlanes`).

## What the package does not do

It has no command-line tool and no code for reading or writing raw, RGB or
YUV image files; frames go in and come out as Python lists. There is no
function that runs the whole pipeline, and register values such as gains,
tone curves and denoise strengths are not derived for you.

## Running the tests

```
pip install -e .[test]
pytest
```