# seed_recolor/image_io.py
from __future__ import annotations

import io
import os
import tempfile
from pathlib import Path

import numpy as np
from PIL import Image, ImageCms, ImageOps

from .core_types import U8Image, assert_u8_image_rgba

"""
Image I/O helpers (straight RGBA in sRGB).

Decode and encode errors (OSError, PIL.UnidentifiedImageError) are not
caught here; callers report them.
"""


def _convert_to_srgb_rgba(im: Image.Image) -> Image.Image:
    im = ImageOps.exif_transpose(im)
    icc_bytes = im.info.get("icc_profile")

    if icc_bytes:
        try:
            src_prof = ImageCms.ImageCmsProfile(io.BytesIO(icc_bytes))
            dst_prof = ImageCms.createProfile("sRGB")
            im2 = ImageCms.profileToProfile(
                im.convert("RGBA"),
                src_prof,
                dst_prof,
                renderingIntent=ImageCms.Intent.PERCEPTUAL,
                outputMode="RGBA",
            )
            if im2 is None:
                return im.convert("RGBA")
            return im2
        except (ImageCms.PyCMSError, OSError, ValueError):
            return im.convert("RGBA")

    return im.convert("RGBA")


def load_image_rgba(path: Path) -> U8Image:
    """Decode any Pillow-readable image to uint8 [H,W,4] straight RGBA."""
    with Image.open(path) as im0:
        im = _convert_to_srgb_rgba(im0)
    return np.array(im, dtype=np.uint8)


def save_png_rgba(path: Path, rgba: U8Image) -> Path:
    """
    Encode uint8 [H,W,4] as PNG at `path`.

    Writes to a temporary file in the target folder and renames it into
    place, so a failed encode never leaves a partial file behind.
    """
    assert_u8_image_rgba(rgba)
    path = Path(path)
    if path.suffix.lower() != ".png":
        path = path.with_suffix(".png")
    folder = path.parent if str(path.parent) else Path(".")
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.stem}.", suffix=".png", dir=folder)
    try:
        with os.fdopen(fd, "wb") as fh:
            Image.fromarray(np.ascontiguousarray(rgba)).save(fh, format="PNG")
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
    return path


__all__ = ["load_image_rgba", "save_png_rgba"]
