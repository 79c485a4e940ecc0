# seed_recolor/colour_math.py
from __future__ import annotations

"""
Integer colour maths for straight-alpha RGBA bytes.

Exports:
  blend(top, bottom)                 source-over of two Colours
  scale_alpha(colour, factor)        alpha * factor // 255
  grayscale(colour)                  (R + G + B) // 3
  blend_arrays(top, bottom)          vectorised blend over (..., 4) uint8
  scale_alpha_array(colours, f)      vectorised scale_alpha
  grayscale_array(rgb)               vectorised grayscale over (..., 3+) uint8
  mask_strength(mask)                (H, W) strength from a 2-D or RGB(A) mask

The vectorised forms are byte-identical to the scalar ones. All divisions are
floor divisions in the order written below; reference outputs depend on it.
"""

import numpy as np

from .constants import CHANNEL_MAX, CHANNEL_MAX_SQ
from .core_types import Colour, U8Image, U8Mask, assert_u8_mask_2d
from .errors import InvalidConfiguration


# Scalar


def _blend_channel(ct: int, at: int, cb: int, ab: int) -> int:
    return (ct * at) // CHANNEL_MAX + (cb * ab * (CHANNEL_MAX - at)) // CHANNEL_MAX_SQ


def blend(top: Colour, bottom: Colour) -> Colour:
    """
    Source-over composite of straight-alpha `top` onto `bottom`.

      outC = (Ct*At)//255 + (Cb*Ab*(255-At))//(255*255)
      outA = At + (Ab*(255-At))//255

    A fully transparent top returns `bottom` unchanged.
    """
    at = top.a
    if at == 0:
        return bottom
    ab = bottom.a
    return Colour(
        _blend_channel(top.r, at, bottom.r, ab),
        _blend_channel(top.g, at, bottom.g, ab),
        _blend_channel(top.b, at, bottom.b, ab),
        at + (ab * (CHANNEL_MAX - at)) // CHANNEL_MAX,
    )


def scale_alpha(colour: Colour, factor: int) -> Colour:
    """Copy of colour with alpha = colour.a * factor // 255."""
    return colour.with_alpha((colour.a * int(factor)) // CHANNEL_MAX)


def grayscale(colour: Colour) -> int:
    return (colour.r + colour.g + colour.b) // 3


# Vectorised


def blend_arrays(top: np.ndarray, bottom: np.ndarray) -> U8Image:
    """
    Vectorised blend(). top and bottom are uint8 (..., 4) and broadcast together.
    Rows whose top alpha is 0 are copied from bottom.
    """
    t = top.astype(np.int32)
    b = bottom.astype(np.int32)
    at = t[..., 3:4]
    ab = b[..., 3:4]
    inv = CHANNEL_MAX - at
    rgb = (t[..., :3] * at) // CHANNEL_MAX + (b[..., :3] * ab * inv) // CHANNEL_MAX_SQ
    a = at + (ab * inv) // CHANNEL_MAX
    out = np.concatenate([rgb, a], axis=-1).astype(np.uint8)
    return np.where(at == 0, bottom, out).astype(np.uint8, copy=False)


def scale_alpha_array(colours: np.ndarray, factors: np.ndarray) -> U8Image:
    """Vectorised scale_alpha(). colours uint8 (..., 4), factors broadcast to (...)."""
    out = np.array(colours, dtype=np.uint8, copy=True)
    scaled = (colours[..., 3].astype(np.int32) * np.asarray(factors, dtype=np.int32)) // CHANNEL_MAX
    out[..., 3] = scaled.astype(np.uint8)
    return out


def grayscale_array(rgb: np.ndarray) -> U8Mask:
    """Vectorised grayscale() over the first three channels."""
    c = rgb[..., :3].astype(np.int32)
    return ((c[..., 0] + c[..., 1] + c[..., 2]) // 3).astype(np.uint8)


def mask_strength(mask: np.ndarray) -> U8Mask:
    """
    Per-pixel blend strength from a mask raster.
      (H, W)          : used as is
      (H, W, 3 or 4)  : grayscale of the RGB channels (alpha ignored)
    """
    if mask.dtype != np.uint8:
        raise InvalidConfiguration(f"mask must be uint8, got {mask.dtype}")
    if mask.ndim == 2:
        return assert_u8_mask_2d(mask)
    if mask.ndim == 3 and mask.shape[-1] in (3, 4):
        return grayscale_array(mask)
    raise InvalidConfiguration(f"unsupported mask shape {mask.shape}")


__all__ = [
    "blend",
    "scale_alpha",
    "grayscale",
    "blend_arrays",
    "scale_alpha_array",
    "grayscale_array",
    "mask_strength",
]
