"""
tone_model.py — greyscale and sepia tone mapping for 8-bit RGB buffers.

WHAT THIS MODULE DOES
---------------------
Maps a flat buffer of interleaved (R, G, B) bytes to a new buffer:
  1) Greyscale: Y = 0.299 R + 0.587 G + 0.114 B     (ITU-R BT.601 luma)
     → one byte per pixel, truncated toward zero.
  2) Sepia: the classic 3×3 "warm brown" matrix
        R' = 0.393 R + 0.769 G + 0.189 B
        G' = 0.349 R + 0.686 G + 0.168 B
        B' = 0.272 R + 0.534 G + 0.131 B
     → three bytes per pixel, each truncated then clamped to 255.

IMPLEMENTATION NOTES
--------------------
• The buffer is viewed as an (N, 3) uint8 array (no copy); each output
  channel is a vectorised weighted sum in float64. There is no dependency
  between pixels.
• Each weighted sum is evaluated term by term, left to right, instead of via
  a matrix product: BLAS may fuse or reorder the additions, and a 1-ulp
  difference flips the truncated result at integer boundaries
  (e.g. white → 254, not 255).
• All weights are non-negative, so no lower clamp is ever needed.

LEARNING NOTES
--------------
• Luma weights sum to 1.0, yet 0.299·255 + 0.587·255 + 0.114·255 evaluates to
  just under 255.0 in IEEE double, so pure white maps to 254.
• The sepia rows sum to > 1 (1.351, 1.203, 0.937), which is why bright
  pixels saturate in R and G.

REFERENCES (short list)
-----------------------
• ITU-R BT.601-7 — luma coefficients.
• Microsoft "sepia tone" recommendation (widely reproduced 3×3 matrix).

© 2025 Ali Pouya — PPM Tone (classic edition)
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple
import numpy as np

Weights = Tuple[float, float, float]


# -----------------------------------------------------------------------------
# Parameters
# -----------------------------------------------------------------------------
class TransformMode(IntEnum):
    """Closed set of supported conversions; values match the CLI parameter."""
    GREYSCALE = 1
    SEPIA = 2


@dataclass(frozen=True)
class ToneParams:
    """
    Grouped transform weights.

    luma      : (wR, wG, wB) for greyscale
    sepia_r/g/b : one row of the sepia matrix per output channel
    """
    luma: Weights = (0.299, 0.587, 0.114)
    sepia_r: Weights = (0.393, 0.769, 0.189)
    sepia_g: Weights = (0.349, 0.686, 0.168)
    sepia_b: Weights = (0.272, 0.534, 0.131)


DEFAULT_PARAMS = ToneParams()


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def _as_pixels(rgb: bytes, pixel_count: int) -> np.ndarray:
    """View `rgb` as a read-only (pixel_count, 3) uint8 array."""
    if pixel_count < 0 or len(rgb) != pixel_count * 3:
        raise ValueError(
            f"RGB buffer holds {len(rgb)} bytes, expected {pixel_count} pixels × 3"
        )
    return np.frombuffer(rgb, dtype=np.uint8).reshape(pixel_count, 3)


def _weighted_sum(px: np.ndarray, w: Weights) -> np.ndarray:
    # Term order matters for bit-exact truncation; see module notes
    r = px[:, 0].astype(np.float64)
    g = px[:, 1].astype(np.float64)
    b = px[:, 2].astype(np.float64)
    return (w[0] * r) + (w[1] * g) + (w[2] * b)


def _truncate_u8(values: np.ndarray) -> np.ndarray:
    """Truncate toward zero, clamp to 255, store as uint8."""
    return np.minimum(np.trunc(values), 255.0).astype(np.uint8)


# -----------------------------------------------------------------------------
# Transforms
# -----------------------------------------------------------------------------
def to_greyscale(rgb: bytes, pixel_count: int, params: ToneParams | None = None) -> bytes:
    """
    Convert interleaved RGB to one luma byte per pixel.

    Parameters
    ----------
    rgb : bytes-like, length pixel_count * 3
    pixel_count : number of pixels
    params : ToneParams (defaults to BT.601 weights)

    Returns
    -------
    bytes of length pixel_count
    """
    p = params or DEFAULT_PARAMS
    px = _as_pixels(rgb, pixel_count)
    return _truncate_u8(_weighted_sum(px, p.luma)).tobytes()


def to_sepia(rgb: bytes, pixel_count: int, params: ToneParams | None = None) -> bytes:
    """
    Convert interleaved RGB to sepia-toned interleaved RGB.

    Returns
    -------
    bytes of length pixel_count * 3, channel order R, G, B
    """
    p = params or DEFAULT_PARAMS
    px = _as_pixels(rgb, pixel_count)

    out = np.empty((pixel_count, 3), dtype=np.uint8)
    out[:, 0] = _truncate_u8(_weighted_sum(px, p.sepia_r))
    out[:, 1] = _truncate_u8(_weighted_sum(px, p.sepia_g))
    out[:, 2] = _truncate_u8(_weighted_sum(px, p.sepia_b))
    return out.tobytes()


def apply_transform(
    rgb: bytes,
    pixel_count: int,
    mode: TransformMode,
    params: ToneParams | None = None,
) -> bytes:
    """Dispatch to the transform selected by `mode`."""
    if mode == TransformMode.GREYSCALE:
        return to_greyscale(rgb, pixel_count, params)
    if mode == TransformMode.SEPIA:
        return to_sepia(rgb, pixel_count, params)
    raise ValueError(f"Unsupported transform mode: {mode!r}")


def output_magic(mode: TransformMode) -> str:
    """Netpbm tag of the converted image: P5 (grey) or P6 (sepia RGB)."""
    return "P5" if mode == TransformMode.GREYSCALE else "P6"


def output_channels(mode: TransformMode) -> int:
    return 1 if mode == TransformMode.GREYSCALE else 3
