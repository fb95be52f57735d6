# noteshrink/colour_convert.py
from __future__ import annotations

"""
RGB <-> HSV conversions. Vectorised NumPy implementations.

Exports:
  rgb_to_hsv(rgb)      -> (h, s, v)
  hsv_to_rgb(h, s, v)  -> rgb

RGB channels are in 0..255. Hue, saturation and value are in 0..1; hue is a
fraction of the wheel, not degrees.
"""

from typing import Tuple

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .core_types import RGBF


def rgb_to_hsv(
    rgb: ArrayLike,
) -> Tuple[NDArray[np.float32], NDArray[np.float32], NDArray[np.float32]]:
    """
    RGB[..., 3] (0..255) to hue, saturation, value, each shaped like rgb[..., 0].

    A single (3,) colour yields 0-d arrays; use float() to unwrap.
    Grey colours (max == min) get hue 0.
    """
    arr = np.asarray(rgb, dtype=np.float32) / np.float32(255.0)
    r = arr[..., 0]
    g = arr[..., 1]
    b = arr[..., 2]

    c_max = np.maximum(np.maximum(r, g), b)
    c_min = np.minimum(np.minimum(r, g), b)
    delta = c_max - c_min
    chromatic = delta > 0
    safe_delta = np.where(chromatic, delta, np.float32(1.0))

    h_red = (g - b) / safe_delta
    h_red = np.where(h_red < 0, h_red + np.float32(6.0), h_red)
    h_green = np.float32(2.0) + (b - r) / safe_delta
    h_blue = np.float32(4.0) + (r - g) / safe_delta

    hue = np.where(c_max == r, h_red, np.where(c_max == g, h_green, h_blue))
    hue = np.where(chromatic, hue, np.float32(0.0)) / np.float32(6.0)

    lit = c_max > 0
    sat = np.where(lit, delta / np.where(lit, c_max, np.float32(1.0)), delta)

    return (
        hue.astype(np.float32, copy=False),
        sat.astype(np.float32, copy=False),
        c_max.astype(np.float32, copy=False),
    )


def hsv_to_rgb(h: ArrayLike, s: ArrayLike, v: ArrayLike) -> RGBF:
    """
    Hue, saturation, value (0..1, broadcastable) to RGB[..., 3] (0..255).

    Six-sector formula with sector = floor(h * 6). A sector outside 0..5
    (h == 1.0) and any s <= 0 both give the grey (v, v, v).
    """
    hue, sat, val = np.broadcast_arrays(
        np.asarray(h, dtype=np.float32),
        np.asarray(s, dtype=np.float32),
        np.asarray(v, dtype=np.float32),
    )
    shape = hue.shape
    hue = hue.reshape(-1)
    sat = sat.reshape(-1)
    val = val.reshape(-1)

    h6 = hue * np.float32(6.0)
    sector = np.floor(h6)
    frac = h6 - sector
    sector = sector.astype(np.int64)

    p = val * (np.float32(1.0) - sat)
    q = val * (np.float32(1.0) - sat * frac)
    t = val * (np.float32(1.0) - sat * (np.float32(1.0) - frac))

    conds = [sector == i for i in range(6)]
    r = np.select(conds, [val, q, p, p, t, val], default=np.float32(0.0))
    g = np.select(conds, [t, val, val, q, p, p], default=np.float32(0.0))
    b = np.select(conds, [p, p, t, val, val, q], default=np.float32(0.0))

    # grey when unsaturated or outside sectors 0..5
    keep = (sat > 0) & (sector >= 0) & (sector <= 5)
    r = np.where(keep, r, val)
    g = np.where(keep, g, val)
    b = np.where(keep, b, val)

    out = np.stack([r, g, b], axis=-1).reshape(shape + (3,)) * np.float32(255.0)
    return out.astype(np.float32, copy=False)


__all__ = ["rgb_to_hsv", "hsv_to_rgb"]
