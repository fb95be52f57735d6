# noteshrink/constants.py
"""
Tunables and defaults used across the project.

- DEFAULT_* : defaults for ShrinkOptions
- Background detection and sampling knobs
- Remap block size
- CLI naming (OUTPUT_PREFIX, IMAGE_EXTS)
"""
from __future__ import annotations

from typing import FrozenSet

# =========================
# Shrink defaults
# =========================
DEFAULT_SAMPLE_FRACTION: float = 0.05
DEFAULT_BRIGHTNESS_THRESHOLD: float = 0.25
DEFAULT_SATURATION_THRESHOLD: float = 0.20
DEFAULT_NUM_COLORS: int = 8
DEFAULT_KMEANS_MAX_ITER: int = 40
DEFAULT_SATURATE: bool = True
DEFAULT_WHITE_BACKGROUND: bool = True

# =========================
# Background / sampling
# =========================
# Bits kept per channel when binning samples for the background mode.
BACKGROUND_BITS: int = 6

# Floor on the sample count so small images still give a usable mode.
MIN_SAMPLES: int = 1024

# =========================
# Remap
# =========================
# Pixels per block when matching the full image against the palette.
REMAP_BLOCK_PIXELS: int = 1 << 18

WHITE_RGB = (255.0, 255.0, 255.0)

# =========================
# CLI
# =========================
OUTPUT_PREFIX: str = "shrinked_"
IMAGE_EXTS: FrozenSet[str] = frozenset({".png", ".jpg", ".jpeg", ".webp", ".bmp", ".tif", ".tiff"})
