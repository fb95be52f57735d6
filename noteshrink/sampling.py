# noteshrink/sampling.py
from __future__ import annotations

"""
Random pixel sampling for background detection and palette clustering.
"""

import math
from typing import Optional

import numpy as np

from .core_types import RGBF, as_colour_rows


def sample_count(num_pixels: int, fraction: float, min_samples: int = 0) -> int:
    """floor(num_pixels * fraction), raised to min(num_pixels, min_samples)."""
    count = int(math.floor(num_pixels * float(fraction)))
    if count < min_samples:
        count = min(num_pixels, int(min_samples))
    return count


def sample_pixels(
    pixels: np.ndarray,
    fraction: float,
    rng: Optional[np.random.Generator] = None,
    min_samples: int = 0,
) -> RGBF:
    """
    Draw a uniform subset of pixels without replacement.

    Args:
      pixels      : (H, W, 3) image or (N, 3) colour rows; never modified
      fraction    : share of pixels to keep, (0, 1]
      rng         : numpy Generator; a fresh unseeded one when None
      min_samples : floor on the sample count (capped at the pixel count)

    Returns:
      float32 (M, 3) rows, a prefix of a random permutation of pixel indices.
    """
    rows = as_colour_rows(pixels)
    count = sample_count(rows.shape[0], fraction, min_samples)
    if rng is None:
        rng = np.random.default_rng()
    order = rng.permutation(rows.shape[0])[:count]
    return rows[order].astype(np.float32, copy=True)


__all__ = ["sample_count", "sample_pixels"]
