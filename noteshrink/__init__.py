# noteshrink/__init__.py
"""
noteshrink package.

Purpose:
  Flatten photographed or scanned notes to a small palette. See shrink_notes.py for CLI.

Public API:
  shrink               : image in, palette-mapped image out.
  shrink_with_details  : same, plus the palette and background colours.
  ShrinkOptions        : per-run parameters with defaults.
  ConfigError          : invalid options or empty input.
  colour_convert       : RGB <-> HSV transforms.
  image_io             : Pillow load/save and output naming.
  utils                : shared helpers (formatting, logging).

Quick start:
  from noteshrink import shrink, ShrinkOptions
  out = shrink(rgb, ShrinkOptions(num_colors=6))
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import colour_convert
from . import core_types
from . import image_io
from . import utils

from .options import ConfigError, ShrinkOptions  # noqa: E402
from .pipeline import ShrinkResult, shrink, shrink_with_details  # noqa: E402

__all__ = [
    "__version__",
    "colour_convert",
    "core_types",
    "image_io",
    "utils",
    "ConfigError",
    "ShrinkOptions",
    "ShrinkResult",
    "shrink",
    "shrink_with_details",
]
