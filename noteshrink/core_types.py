# noteshrink/core_types.py
from __future__ import annotations

"""
Core type aliases and lightweight helpers.
"""

from typing import Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Basic aliases

RGBTuple = Tuple[int, int, int]
HexStr = str

U8Image = NDArray[np.uint8]  # (H, W, 3)
RGBF = NDArray[np.float32]  # (..., 3) float channels in [0, 255]
BoolMask = NDArray[np.bool_]  # (N,) or (H, W)
Labels = NDArray[np.intp]  # (N,) cluster / palette indices


# Small helpers


def rgb_to_hex(rgb: Union[Sequence[int], NDArray[np.generic]]) -> HexStr:
    """RGB triple to lowercase hex string '#rrggbb'."""
    r, g, b = coerce_to_rgb_tuple(rgb)
    return f"#{r:02x}{g:02x}{b:02x}"


def coerce_to_rgb_tuple(value: Union[Sequence[int], NDArray[np.generic]]) -> RGBTuple:
    """
    Coerce a 3-length sequence or array to an (int, int, int) RGB tuple.
    Float channels are truncated, matching the uint8 output cast.
    """
    if isinstance(value, np.ndarray):
        if value.size < 3:
            raise ValueError("array too small for RGB")
        flat = value.reshape(-1)
        return (int(flat[0]), int(flat[1]), int(flat[2]))
    if len(value) < 3:
        raise ValueError("sequence too small for RGB")
    return (int(value[0]), int(value[1]), int(value[2]))


def as_colour(value: Union[Sequence[float], NDArray[np.generic]]) -> RGBF:
    """Single colour as a float32 (3,) row."""
    arr = np.asarray(value, dtype=np.float32).reshape(-1)
    if arr.size != 3:
        raise ValueError(f"expected 3 channels, got {arr.size}")
    return arr


def as_colour_rows(colours: np.ndarray) -> RGBF:
    """Flatten (..., 3) colours to float32 (N, 3) rows."""
    arr = np.asarray(colours)
    if arr.shape[-1] != 3:
        raise ValueError(f"expected (..., 3) colours, got shape {arr.shape}")
    return arr.reshape(-1, 3).astype(np.float32, copy=False)


def assert_u8_image_rgb(image: np.ndarray) -> U8Image:
    """Validate a uint8 (H,W,3 or 4) image and return it typed as U8Image."""
    if (
        not isinstance(image, np.ndarray)
        or image.dtype != np.uint8
        or image.ndim != 3
        or image.shape[-1] not in (3, 4)
    ):
        raise TypeError("expected uint8 (H,W,3/4) image")
    return image  # type: ignore[return-value]


__all__ = [
    "RGBTuple",
    "HexStr",
    "U8Image",
    "RGBF",
    "BoolMask",
    "Labels",
    "rgb_to_hex",
    "coerce_to_rgb_tuple",
    "as_colour",
    "as_colour_rows",
    "assert_u8_image_rgb",
]
