# seed_recolor/compositor.py
from __future__ import annotations

"""
Layered compositing of a pre-rendered overlay over the original.

compose(original, overlay, mask, global_alpha) runs three whole-image passes
on a fresh raster:
  1. start from `overlay`
  2. destination-in: keep overlay only where the attenuated mask is set,
     overlay alpha -> Ao * (m * global_alpha // 255) // 255
  3. destination-over: put `original` beneath what is left,
     result = blend(overlay', original)

Where the attenuated overlay alpha is 0 the original pixel is kept as is.
Cost does not depend on the seed count, unlike the nearest-seed recolourer.
"""

import numpy as np

from .colour_math import blend_arrays, mask_strength, scale_alpha_array
from .constants import CHANNEL_MAX
from .core_types import U8Image, U8Mask, assert_u8_image_rgba
from .errors import InvalidConfiguration
from .recolor import validate_global_alpha


def destination_in(overlay: U8Image, strength: U8Mask, global_alpha: int) -> U8Image:
    """Scale overlay alpha by the mask strength attenuated by global_alpha."""
    keep = (strength.astype(np.int32) * int(global_alpha)) // CHANNEL_MAX
    return scale_alpha_array(overlay, keep)


def destination_over(top: U8Image, original: U8Image) -> U8Image:
    """Draw `original` beneath `top`; transparent top pixels show the original."""
    return blend_arrays(top, original)


def compose(
    original: U8Image, overlay: U8Image, mask: np.ndarray, global_alpha: int
) -> U8Image:
    """
    Composite `overlay`, gated by `mask`, over `original`. Returns a new raster.

    Args:
      original     : uint8 [H,W,4]
      overlay      : uint8 [H,W,4], e.g. from build_voronoi_mask()
      mask         : uint8 [H,W] strength or [H,W,3/4] raster read via grayscale
      global_alpha : 0..255
    """
    assert_u8_image_rgba(original)
    assert_u8_image_rgba(overlay)
    strength = mask_strength(mask)
    if overlay.shape != original.shape or strength.shape != original.shape[:2]:
        raise InvalidConfiguration(
            f"raster sizes differ: original={original.shape} overlay={overlay.shape} "
            f"mask={strength.shape}"
        )
    alpha = validate_global_alpha(global_alpha)

    gated = destination_in(overlay, strength, alpha)
    return destination_over(gated, original)


__all__ = ["destination_in", "destination_over", "compose"]
