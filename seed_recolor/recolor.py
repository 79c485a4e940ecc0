# seed_recolor/recolor.py
from __future__ import annotations

"""
Per-pixel recolouring against the nearest seed colour.

For every pixel with mask strength g > 0:
  seed  = nearest seed colour at (x, y)
  a     = g * global_alpha // 255
  pixel = blend(scale_alpha(seed, a), pixel)
Pixels with g == 0 are skipped and stay byte-identical.

Threading: rows are split into contiguous spans, one task per span. Each task
reads the shared read-only mask and SeedIndex and writes only its own rows,
so no locking is needed. Leaving the executor is the join.

Ownership:
  recolor_in_place(original, ...)  mutates `original`, returns None
  recolor(original, ...)           returns a new raster, `original` untouched
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Tuple

import numpy as np

from .colour_math import (
    blend,
    blend_arrays,
    grayscale,
    mask_strength,
    scale_alpha,
    scale_alpha_array,
)
from .constants import CHANNEL_MAX
from .core_types import Colour, U8Image, U8Mask, assert_u8_image_rgba
from .errors import InvalidConfiguration
from .seed_index import SeedIndex
from .utils import split_rows_into_parts


def validate_global_alpha(global_alpha: int) -> int:
    alpha = int(global_alpha)
    if not 0 <= alpha <= CHANNEL_MAX:
        raise InvalidConfiguration(f"alpha must be in 0..255, got {global_alpha}")
    return alpha


def _prepare(
    original: np.ndarray, mask: np.ndarray, global_alpha: int, workers: int
) -> Tuple[U8Mask, int]:
    """Check every precondition before any pixel is touched."""
    assert_u8_image_rgba(original)
    strength = mask_strength(mask)
    if strength.shape != original.shape[:2]:
        raise InvalidConfiguration(
            f"mask size {strength.shape[1]}x{strength.shape[0]} does not match "
            f"image size {original.shape[1]}x{original.shape[0]}"
        )
    if int(workers) < 1:
        raise InvalidConfiguration(f"workers must be >= 1, got {workers}")
    return strength, validate_global_alpha(global_alpha)


def recolor_pixel(
    pixel: Colour, mask_pixel: Colour, x: int, y: int, seed_index: SeedIndex, global_alpha: int
) -> Colour:
    """Scalar reference for a single pixel."""
    g = grayscale(mask_pixel)
    if g == 0:
        return pixel
    seed_colour = seed_index.nearest(x, y)
    a = (g * global_alpha) // CHANNEL_MAX
    return blend(scale_alpha(seed_colour, a), pixel)


def _recolor_rows(
    image: U8Image,
    strength: U8Mask,
    seed_index: SeedIndex,
    global_alpha: int,
    start: int,
    end: int,
) -> int:
    """Recolour rows [start, end) of `image` in place. Returns pixels touched."""
    ys, xs = np.nonzero(strength[start:end])
    if ys.size == 0:
        return 0
    g = strength[start:end][ys, xs].astype(np.int32)
    seed_rgba = seed_index.nearest_colours(xs, ys + start)
    a = (g * global_alpha) // CHANNEL_MAX
    rows = image[start:end]
    rows[ys, xs] = blend_arrays(scale_alpha_array(seed_rgba, a), rows[ys, xs])
    return int(ys.size)


def recolor_in_place(
    original: U8Image,
    mask: np.ndarray,
    seed_index: SeedIndex,
    global_alpha: int,
    workers: int = 1,
) -> None:
    """
    Recolour `original` in place.

    Args:
      original     : uint8 [H,W,4], exclusively owned by this call until it returns
      mask         : uint8 [H,W] strength or [H,W,3/4] raster read via grayscale
      seed_index   : SeedIndex, read-only
      global_alpha : 0..255 attenuation of the whole overlay
      workers      : row spans processed concurrently (1 = sequential)
    """
    strength, alpha = _prepare(original, mask, global_alpha, workers)
    spans = split_rows_into_parts(original.shape[0], workers)

    if workers == 1 or len(spans) == 1:
        for start, end in spans:
            _recolor_rows(original, strength, seed_index, alpha, start, end)
        return

    with ThreadPoolExecutor(max_workers=workers) as ex:
        futures = [
            ex.submit(_recolor_rows, original, strength, seed_index, alpha, start, end)
            for start, end in spans
        ]
        for fut in futures:
            fut.result()


def recolor(
    original: U8Image,
    mask: np.ndarray,
    seed_index: SeedIndex,
    global_alpha: int,
    workers: int = 1,
) -> U8Image:
    """Like recolor_in_place(), but on a copy. `original` is left untouched."""
    assert_u8_image_rgba(original)
    out = np.array(original, dtype=np.uint8, copy=True)
    recolor_in_place(out, mask, seed_index, global_alpha, workers=workers)
    return out


__all__ = [
    "validate_global_alpha",
    "recolor_pixel",
    "recolor_in_place",
    "recolor",
]
