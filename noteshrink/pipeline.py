# noteshrink/pipeline.py
from __future__ import annotations

"""
Shrink entry points.

  shrink(image, options=None, *, rng=None, debug=False) -> U8Image
  shrink_with_details(image, options=None, *, rng=None, debug=False) -> ShrinkResult

Stages: sample -> background + palette -> optional saturation stretch ->
optional white background -> full-image remap.
"""

import time
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .constants import MIN_SAMPLES
from .core_types import RGBF, U8Image, assert_u8_image_rgb
from .options import ConfigError, ShrinkOptions
from .palette import build_palette_details, rendered_background, saturate_palette
from .remap import apply_palette
from .sampling import sample_pixels
from .utils import debug_log, format_seconds_compact, key_value_pairs_to_string


@dataclass(frozen=True)
class ShrinkResult:
    """Output image plus the palette that produced it."""

    image: U8Image
    palette: RGBF  # final palette, after optional saturation stretch
    background: RGBF  # detected background (classification reference)
    rendered_background: RGBF  # colour written for background pixels
    num_samples: int
    kmeans_iterations: int  # k-means update rounds run while building the palette


def _prepare_image(image: np.ndarray) -> U8Image:
    """Validate the input buffer and drop alpha."""
    img = assert_u8_image_rgb(image)
    if img.shape[0] == 0 or img.shape[1] == 0:
        raise ConfigError(f"cannot shrink an empty image ({img.shape[1]}x{img.shape[0]})")
    return img[..., :3]


def shrink_with_details(
    image: np.ndarray,
    options: Optional[ShrinkOptions] = None,
    *,
    rng: Optional[np.random.Generator] = None,
    debug: bool = False,
) -> ShrinkResult:
    """
    Flatten a document image to a small palette.

    Args:
      image   : uint8 (H, W, 3) or (H, W, 4); alpha is ignored
      options : ShrinkOptions; defaults when None
      rng     : numpy Generator used for sampling; pass a seeded one for repeatable output
      debug   : print per-stage details
    Raises:
      TypeError   : image is not a uint8 (H, W, 3/4) array
      ConfigError : invalid options or empty image
    """
    opts = (options if options is not None else ShrinkOptions()).validate()
    rgb = _prepare_image(image)

    t0 = time.perf_counter()
    samples = sample_pixels(rgb, opts.sample_fraction, rng=rng, min_samples=MIN_SAMPLES)
    built = build_palette_details(samples, opts, debug=debug)
    palette, background = built.palette, built.background
    t1 = time.perf_counter()

    if opts.saturate:
        palette = saturate_palette(palette, debug=debug)
    bg_out = rendered_background(background, opts.white_background)

    mapped = apply_palette(rgb, palette, background, bg_out, opts)
    t2 = time.perf_counter()

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Palette", format_seconds_compact(t1 - t0)),
                    ("Remap", format_seconds_compact(t2 - t1)),
                ]
            )
        )

    return ShrinkResult(
        image=mapped,
        palette=palette,
        background=background,
        rendered_background=bg_out,
        num_samples=int(samples.shape[0]),
        kmeans_iterations=built.kmeans_iterations,
    )


def shrink(
    image: np.ndarray,
    options: Optional[ShrinkOptions] = None,
    *,
    rng: Optional[np.random.Generator] = None,
    debug: bool = False,
) -> U8Image:
    """Flatten a document image to a small palette. See shrink_with_details()."""
    return shrink_with_details(image, options, rng=rng, debug=debug).image


__all__ = ["ShrinkResult", "shrink", "shrink_with_details"]
