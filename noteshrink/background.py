# noteshrink/background.py
from __future__ import annotations

"""
Background colour detection.

The page colour is taken to be the mode of the samples after each channel is
binned to its top `bits_per_channel` bits. Bins are re-centred by adding half
a bin width so that detected colours are not biased towards 0.

Exports:
  quantize(colours, bits_per_channel)     -> uint8 rows
  pack_rgb_keys(quantized)                -> int64 keys
  find_background_color(samples, bits)    -> float32 (3,)
"""

import numpy as np

from .constants import BACKGROUND_BITS
from .core_types import RGBF, as_colour_rows


def quantize(colours: np.ndarray, bits_per_channel: int = BACKGROUND_BITS) -> np.ndarray:
    """Bin (..., 3) colours to `bits_per_channel` bits per channel. Returns uint8 (N, 3)."""
    if not 1 <= int(bits_per_channel) <= 8:
        raise ValueError(f"bits_per_channel must be in 1..8, got {bits_per_channel}")
    shift = 8 - int(bits_per_channel)
    half_bin = (1 << shift) >> 1

    rows = np.clip(as_colour_rows(colours), 0.0, 255.0).astype(np.uint8)
    binned = (rows >> np.uint8(shift)) << np.uint8(shift)
    return (binned + np.uint8(half_bin)).astype(np.uint8, copy=False)


def pack_rgb_keys(quantized: np.ndarray) -> np.ndarray:
    """Pack uint8 (N, 3) rows into one int64 key per row: (r << 16) | (g << 8) | b."""
    q = quantized.astype(np.int64, copy=False)
    return (q[:, 0] << 16) | (q[:, 1] << 8) | q[:, 2]


def find_background_color(
    samples: np.ndarray, bits_per_channel: int = BACKGROUND_BITS
) -> RGBF:
    """
    Most frequent quantised colour among samples.

    Ties go to the colour whose first occurrence comes earliest.
    """
    quantized = quantize(samples, bits_per_channel)
    if quantized.shape[0] == 0:
        raise ValueError("cannot find a background colour in an empty sample set")

    keys = pack_rgb_keys(quantized)
    _, first_index, counts = np.unique(keys, return_index=True, return_counts=True)
    top = counts == counts.max()
    winner = int(first_index[top].min())
    return quantized[winner].astype(np.float32)


__all__ = ["quantize", "pack_rgb_keys", "find_background_color"]
