# noteshrink/palette.py
from __future__ import annotations

"""
Palette construction and post-processing.

Exports:
  build_palette(samples, options, debug=False)  -> (palette, background)
  build_palette_details(samples, options, debug=False) -> PaletteBuild
  saturate_palette(palette, debug=False)         -> palette
  rendered_background(background, white)        -> colour

Palette row 0 is always the detected background; rows 1.. are k-means
centres of the foreground samples in seeding order.
"""

from typing import NamedTuple, Tuple

import numpy as np

from .background import find_background_color
from .colour_convert import hsv_to_rgb, rgb_to_hsv
from .constants import BACKGROUND_BITS, WHITE_RGB
from .core_types import RGBF, as_colour, as_colour_rows, rgb_to_hex
from .foreground import foreground_mask
from .kmeans import kmeans
from .options import ShrinkOptions
from .utils import debug_log, key_value_pairs_to_string, warn


class PaletteBuild(NamedTuple):
    palette: RGBF
    background: RGBF
    num_foreground: int
    kmeans_iterations: int
    converged: bool


def build_palette_details(
    samples: np.ndarray, options: ShrinkOptions, debug: bool = False
) -> PaletteBuild:
    """
    Detect the background and cluster foreground samples into num_colors - 1 inks.

    Returns a PaletteBuild:
      palette           : float32 [num_colors, 3], row 0 = background
      background        : float32 (3,), the detected background colour
      num_foreground    : samples that went into k-means
      kmeans_iterations : update rounds run before stopping
      converged         : whether the last round changed no memberships
    """
    rows = as_colour_rows(samples)
    background = find_background_color(rows, BACKGROUND_BITS)
    fg_mask = foreground_mask(
        background, rows, options.brightness_threshold, options.saturation_threshold
    )
    foreground = rows[fg_mask]

    result = kmeans(foreground, options.num_colors - 1, options.kmeans_max_iter)
    centres = np.floor(result.centres + np.float32(0.5)).astype(np.float32)

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Samples", int(rows.shape[0])),
                    ("Foreground", int(foreground.shape[0])),
                    ("Background", rgb_to_hex(background)),
                    ("K-means iters", result.iterations),
                    ("Converged", result.converged),
                ]
            )
        )

    palette = np.concatenate([background[None, :], centres], axis=0)
    return PaletteBuild(
        palette=palette.astype(np.float32, copy=False),
        background=background,
        num_foreground=int(foreground.shape[0]),
        kmeans_iterations=result.iterations,
        converged=result.converged,
    )


def build_palette(
    samples: np.ndarray, options: ShrinkOptions, debug: bool = False
) -> Tuple[RGBF, RGBF]:
    """(palette, background); see build_palette_details()."""
    built = build_palette_details(samples, options, debug=debug)
    return built.palette, built.background


def saturate_palette(palette: np.ndarray, debug: bool = False) -> RGBF:
    """
    Stretch saturation across all palette rows so [min, max] maps to [0, 1].

    Hue and value are kept. A palette whose rows all share one saturation is
    returned unchanged.
    """
    rows = as_colour_rows(palette)
    hue, sat, val = rgb_to_hsv(rows)
    sat_min = float(sat.min())
    sat_max = float(sat.max())
    if sat_max == sat_min:
        warn(f"palette saturation is flat ({sat_max:.3f}); skipping saturation stretch")
        return rows.copy()

    stretched = (sat - np.float32(sat_min)) / np.float32(sat_max - sat_min)
    if debug:
        debug_log(f"saturation stretch {sat_min:.3f}..{sat_max:.3f} -> 0..1")
    return hsv_to_rgb(hue, stretched, val)


def rendered_background(background: np.ndarray, white_background: bool) -> RGBF:
    """Colour written for background pixels: pure white or the detected background."""
    if white_background:
        return np.array(WHITE_RGB, dtype=np.float32)
    return as_colour(background).copy()


__all__ = [
    "PaletteBuild",
    "build_palette",
    "build_palette_details",
    "saturate_palette",
    "rendered_background",
]
