"""Bit-accurate reference models of the stages of a streaming camera image signal processor."""

__version__ = "0.1.0"

__all__ = [
    "awb",
    "cmc",
    "common",
    "crop",
    "csc",
    "demosaic",
    "dgain",
    "dpc",
    "ee",
    "gb",
    "gtm",
    "lsc",
    "rawdns",
    "scaledown",
    "tpg",
    "wbc",
    "yfc",
    "yuvdns",
]