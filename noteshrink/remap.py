# noteshrink/remap.py
from __future__ import annotations

"""
Full-image remap onto a finished palette.
"""

import numpy as np

from .constants import REMAP_BLOCK_PIXELS
from .core_types import U8Image, as_colour, as_colour_rows
from .foreground import foreground_mask
from .kmeans import closest
from .options import ShrinkOptions
from .utils import split_into_blocks


def apply_palette(
    image: np.ndarray,
    palette: np.ndarray,
    orig_background: np.ndarray,
    rendered_bg: np.ndarray,
    options: ShrinkOptions,
    block_pixels: int = REMAP_BLOCK_PIXELS,
) -> U8Image:
    """
    Map every pixel of a (H, W, 3) image to the palette.

    Background pixels (classified against orig_background) and foreground
    pixels whose nearest palette row is 0 both take rendered_bg. Other
    foreground pixels take their nearest palette row. Channels are clipped
    to 0..255 and truncated to uint8.
    """
    height, width = image.shape[0], image.shape[1]
    flat = as_colour_rows(image[..., :3])
    pal = as_colour_rows(palette)
    orig_bg = as_colour(orig_background)
    bg = as_colour(rendered_bg)

    out = np.empty_like(flat)
    for start, end in split_into_blocks(flat.shape[0], block_pixels):
        block = flat[start:end]
        fg = foreground_mask(
            orig_bg, block, options.brightness_threshold, options.saturation_threshold
        )
        colours = np.empty_like(block)
        colours[:] = bg
        if np.any(fg):
            idx = closest(block[fg], pal)
            matched = pal[idx]
            matched[idx == 0] = bg
            colours[fg] = matched
        out[start:end] = colours

    return np.clip(out, 0.0, 255.0).astype(np.uint8).reshape(height, width, 3)


__all__ = ["apply_palette"]
