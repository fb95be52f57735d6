# noteshrink/options.py
from __future__ import annotations

"""
Per-run configuration.

Exports:
  ConfigError   : raised for invalid options or unusable input images.
  ShrinkOptions : frozen set of shrink parameters with documented defaults.
"""

from dataclasses import asdict, dataclass, replace as dc_replace
from typing import Any, Dict, Iterable, Tuple

from .constants import (
    DEFAULT_BRIGHTNESS_THRESHOLD,
    DEFAULT_KMEANS_MAX_ITER,
    DEFAULT_NUM_COLORS,
    DEFAULT_SAMPLE_FRACTION,
    DEFAULT_SATURATE,
    DEFAULT_SATURATION_THRESHOLD,
    DEFAULT_WHITE_BACKGROUND,
)


class ConfigError(ValueError):
    """Invalid shrink configuration or input image."""


@dataclass(frozen=True)
class ShrinkOptions:
    """
    Parameters for one shrink run.

    sample_fraction      : share of pixels sampled for background/palette analysis, (0, 1].
    brightness_threshold : HSV value distance from background that marks foreground, [0, 1].
    saturation_threshold : HSV saturation distance from background that marks foreground, [0, 1].
    num_colors           : palette size including the background slot, >= 2.
    kmeans_max_iter      : cap on k-means update rounds, >= 0.
    saturate             : stretch palette saturation to the full [0, 1] range.
    white_background     : render background pixels as pure white.
    """

    sample_fraction: float = DEFAULT_SAMPLE_FRACTION
    brightness_threshold: float = DEFAULT_BRIGHTNESS_THRESHOLD
    saturation_threshold: float = DEFAULT_SATURATION_THRESHOLD
    num_colors: int = DEFAULT_NUM_COLORS
    kmeans_max_iter: int = DEFAULT_KMEANS_MAX_ITER
    saturate: bool = DEFAULT_SATURATE
    white_background: bool = DEFAULT_WHITE_BACKGROUND

    def validate(self) -> "ShrinkOptions":
        """Raise ConfigError on the first invalid field; return self otherwise."""
        if not 0.0 < float(self.sample_fraction) <= 1.0:
            raise ConfigError(
                f"sample_fraction must be in (0, 1], got {self.sample_fraction}"
            )
        for name in ("brightness_threshold", "saturation_threshold"):
            value = float(getattr(self, name))
            if not 0.0 <= value <= 1.0:
                raise ConfigError(f"{name} must be in [0, 1], got {value}")
        if int(self.num_colors) != self.num_colors or self.num_colors < 2:
            raise ConfigError(
                f"num_colors must be an integer >= 2 (background + at least one ink colour), "
                f"got {self.num_colors}"
            )
        if int(self.kmeans_max_iter) != self.kmeans_max_iter or self.kmeans_max_iter < 0:
            raise ConfigError(
                f"kmeans_max_iter must be an integer >= 0, got {self.kmeans_max_iter}"
            )
        return self

    def replace(self, **changes: Any) -> "ShrinkOptions":
        """Copy with changed fields, validated."""
        return dc_replace(self, **changes).validate()

    def as_pairs(self) -> Iterable[Tuple[str, Any]]:
        """(label, value) pairs for print_config_line."""
        labels: Dict[str, str] = {
            "sample_fraction": "Sample",
            "brightness_threshold": "Value thr",
            "saturation_threshold": "Sat thr",
            "num_colors": "Colours",
            "kmeans_max_iter": "K-means iters",
            "saturate": "Saturate",
            "white_background": "White bg",
        }
        return [(labels[k], v) for k, v in asdict(self).items()]


__all__ = ["ConfigError", "ShrinkOptions"]
