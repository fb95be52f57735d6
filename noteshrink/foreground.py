# noteshrink/foreground.py
from __future__ import annotations

"""
Foreground / background classification in HSV space.
"""

import numpy as np

from .colour_convert import rgb_to_hsv
from .core_types import BoolMask, as_colour


def foreground_mask(
    reference: np.ndarray,
    colours: np.ndarray,
    brightness_threshold: float,
    saturation_threshold: float,
) -> BoolMask:
    """
    Mark colours that differ from the reference (background) colour.

    A colour is foreground when its HSV value differs by at least
    brightness_threshold OR its saturation differs by at least
    saturation_threshold. Either deviation alone is enough.

    Args:
      reference : (3,) background colour, 0..255
      colours   : (..., 3) colours, 0..255
    Returns:
      bool array shaped like colours[..., 0]
    """
    _, ref_s, ref_v = rgb_to_hsv(as_colour(reference))
    _, sat, val = rgb_to_hsv(colours)
    value_diff = np.abs(val - ref_v)
    sat_diff = np.abs(sat - ref_s)
    return (value_diff >= np.float32(brightness_threshold)) | (
        sat_diff >= np.float32(saturation_threshold)
    )


__all__ = ["foreground_mask"]
