# seed_recolor/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.
"""

from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np
from numpy.typing import NDArray

from .errors import InvalidConfiguration

# Basic aliases

RGBATuple = Tuple[int, int, int, int]
Number = Union[int, float]

U8Image = NDArray[np.uint8]  # (H, W, 4) straight-alpha RGBA
U8Mask = NDArray[np.uint8]  # (H, W) blend strength, 0 = none, 255 = full

# Value objects


@dataclass(frozen=True)
class Point:
    """2-D coordinate. Ints for pixel grids, floats for geometry."""

    x: Number
    y: Number


@dataclass(frozen=True)
class Colour:
    """Four 8-bit straight-alpha channels."""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            v = getattr(self, name)
            if not 0 <= v <= 255:
                raise InvalidConfiguration(f"channel {name}={v} outside 0..255")

    def as_tuple(self) -> RGBATuple:
        return (self.r, self.g, self.b, self.a)

    def with_alpha(self, alpha: int) -> "Colour":
        return Colour(self.r, self.g, self.b, alpha)


@dataclass(frozen=True)
class Seed:
    """A point bound to a colour. site_id is the insertion index."""

    point: Point
    colour: Colour
    site_id: int = 0


@dataclass(frozen=True)
class SeedRecord:
    """Raw seed record as read from JSON, before scaling."""

    id: str
    x: Number
    y: Number


# Small helpers


def assert_u8_image_rgba(image: np.ndarray) -> U8Image:
    """Validate a uint8 (H,W,4) image with positive size and return it typed as U8Image."""
    if image.dtype != np.uint8 or image.ndim != 3 or image.shape[-1] != 4:
        raise InvalidConfiguration("expected uint8 (H,W,4) RGBA image")
    if image.shape[0] <= 0 or image.shape[1] <= 0:
        raise InvalidConfiguration("image width and height must be positive")
    return image  # type: ignore[return-value]


def assert_u8_mask_2d(mask_array: np.ndarray) -> U8Mask:
    """Validate a uint8 (H,W) mask and return it typed as U8Mask."""
    if mask_array.dtype != np.uint8 or mask_array.ndim != 2:
        raise InvalidConfiguration("expected uint8 (H,W) mask")
    return mask_array  # type: ignore[return-value]


def assert_positive_size(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise InvalidConfiguration(f"size must be positive, got {width}x{height}")


__all__ = [
    # aliases / types
    "RGBATuple",
    "Number",
    "U8Image",
    "U8Mask",
    # value objects
    "Point",
    "Colour",
    "Seed",
    "SeedRecord",
    # helpers
    "assert_u8_image_rgba",
    "assert_u8_mask_2d",
    "assert_positive_size",
]
