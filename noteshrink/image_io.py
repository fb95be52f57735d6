# noteshrink/image_io.py
from __future__ import annotations

import io
from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from .constants import OUTPUT_PREFIX
from .core_types import U8Image, assert_u8_image_rgb

"""
Image I/O helpers (RGB in sRGB) and output naming.
"""

try:
    from PIL import ImageCms  # ICC conversion if profile present
except ImportError:  # pragma: no cover
    ImageCms = None  # type: ignore[assignment]


def _convert_to_srgb_rgb(im: Image.Image) -> Image.Image:
    im = ImageOps.exif_transpose(im)
    icc_bytes = im.info.get("icc_profile")

    if icc_bytes and ImageCms is not None:
        try:
            src_prof = ImageCms.ImageCmsProfile(io.BytesIO(icc_bytes))
            dst_prof = ImageCms.createProfile("sRGB")
            im2 = ImageCms.profileToProfile(
                im.convert("RGB"),
                src_prof,
                dst_prof,
                renderingIntent=ImageCms.Intent.PERCEPTUAL,
                outputMode="RGB",
            )
            if im2 is None:
                return im.convert("RGB")
            return im2
        except (OSError, ImageCms.PyCMSError):
            return im.convert("RGB")

    return im.convert("RGB")


def load_image_rgb(path: Path) -> U8Image:
    """Decode an image file to uint8 (H, W, 3). Alpha is dropped."""
    with Image.open(path) as im0:
        im = _convert_to_srgb_rgb(im0)
    return np.array(im, dtype=np.uint8)


def save_image_rgb(path: Path, rgb: np.ndarray) -> Path:
    """Encode a uint8 (H, W, 3) image as PNG; any other suffix is replaced."""
    arr = assert_u8_image_rgb(rgb)[..., :3]
    if path.suffix.lower() != ".png":
        path = path.with_suffix(".png")
    Image.fromarray(np.ascontiguousarray(arr)).save(path)
    return path


def output_path_for(
    src: Path, outdir: Optional[Path] = None, prefix: str = OUTPUT_PREFIX
) -> Path:
    """'<dir>/<prefix><stem>.png' next to src, or inside outdir when given."""
    parent = outdir if outdir is not None else src.parent
    return parent / f"{prefix}{src.stem}.png"


def is_image_file(path: Path) -> bool:
    try:
        with Image.open(path) as im:
            im.seek(0)
            im.load()
        return True
    except (UnidentifiedImageError, OSError):
        return False


__all__ = [
    "load_image_rgb",
    "save_image_rgb",
    "output_path_for",
    "is_image_file",
]
