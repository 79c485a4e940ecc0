# seed_recolor/mask.py
from __future__ import annotations

"""
Influence masks and cell overlays.

Polarity: a mask value is the blend strength itself, 0 = no influence,
255 = full influence. Every builder here writes that convention.

Exports:
  disc_coverage(...)        anti-aliased coverage of one disc over a pixel window
  build_circle_mask(...)    (H, W) uint8 mask of discs around each point
  build_voronoi_mask(...)   (H, W, 4) RGBA raster of seed-coloured cells
"""

from typing import List, Mapping, Sequence, Tuple, Union

import numpy as np
from PIL import Image, ImageDraw

from .constants import CHANNEL_MAX
from .core_types import Colour, Point, U8Image, U8Mask, assert_positive_size
from .errors import GeometryLookupFailure, InvalidConfiguration
from .voronoi import VoronoiEdge

SiteColours = Union[Sequence[Colour], Mapping[Point, Colour]]


# Circles


def disc_coverage(
    cx: float, cy: float, radius: float, x0: int, y0: int, x1: int, y1: int
) -> np.ndarray:
    """
    Coverage in [0, 1] of a disc over pixels [x0, x1) x [y0, y1).

    Distance is taken from pixel centres; the edge ramps linearly over one
    pixel, which gives the sub-pixel gradient at the rim.
    """
    ys = np.arange(y0, y1, dtype=np.float64)[:, None] + 0.5
    xs = np.arange(x0, x1, dtype=np.float64)[None, :] + 0.5
    dist = np.sqrt((xs - cx) ** 2 + (ys - cy) ** 2)
    return np.clip(radius + 0.5 - dist, 0.0, 1.0)


def build_circle_mask(
    width: int, height: int, radius: float, points: Sequence[Point]
) -> U8Mask:
    """
    Rasterise a filled anti-aliased disc of `radius` around every point.

    Discs are painted source-over in full strength onto a zero background,
    so overlaps saturate at 255 and rims keep their partial coverage.
    """
    assert_positive_size(width, height)
    if radius <= 0:
        raise InvalidConfiguration(f"radius must be positive, got {radius}")

    mask = np.zeros((height, width), dtype=np.int32)
    reach = float(radius) + 1.0
    for p in points:
        cx, cy = float(p.x), float(p.y)
        x0 = max(0, int(np.floor(cx - reach)))
        y0 = max(0, int(np.floor(cy - reach)))
        x1 = min(width, int(np.ceil(cx + reach)) + 1)
        y1 = min(height, int(np.ceil(cy + reach)) + 1)
        if x0 >= x1 or y0 >= y1:
            continue
        cov = np.rint(disc_coverage(cx, cy, radius, x0, y0, x1, y1) * CHANNEL_MAX)
        cov = cov.astype(np.int32)
        window = mask[y0:y1, x0:x1]
        window += (cov * (CHANNEL_MAX - window)) // CHANNEL_MAX
    return mask.astype(np.uint8)


# Voronoi cells


def _site_colour(site_colours: SiteColours, site: Point, site_id: int) -> Colour:
    if isinstance(site_colours, Mapping):
        try:
            return site_colours[site]
        except KeyError:
            raise GeometryLookupFailure(
                f"no colour for site at ({site.x!r}, {site.y!r})"
            ) from None
    if not 0 <= site_id < len(site_colours):
        raise GeometryLookupFailure(
            f"site id {site_id} outside 0..{len(site_colours) - 1}"
        )
    return site_colours[site_id]


def _cell_triangles(
    edges: Sequence[VoronoiEdge], site_colours: SiteColours
) -> List[Tuple[List[Tuple[float, float]], Tuple[int, int, int, int]]]:
    """Resolve every (triangle, fill) pair up front so lookups fail before drawing."""
    out = []
    for edge in edges:
        start = (float(edge.start.x), float(edge.start.y))
        end = (float(edge.end.x), float(edge.end.y))
        for site, site_id in edge.sites():
            fill = _site_colour(site_colours, site, site_id).as_tuple()
            out.append(([(float(site.x), float(site.y)), start, end], fill))
    return out


def build_voronoi_mask(
    width: int,
    height: int,
    edges: Sequence[VoronoiEdge],
    site_colours: SiteColours,
) -> U8Image:
    """
    Paint each site's cell in its colour on a transparent canvas.

    Each edge contributes one triangle (site, edge.start, edge.end) per side.
    No anti-aliasing: neighbouring cells meet on a hard edge.

    site_colours:
      Sequence[Colour]        indexed by site id (edge.left_id / edge.right_id)
      Mapping[Point, Colour]  exact coordinate lookup (edge.left / edge.right)
    """
    assert_positive_size(width, height)
    triangles = _cell_triangles(edges, site_colours)

    canvas = Image.new("RGBA", (width, height), (0, 0, 0, 0))
    draw = ImageDraw.Draw(canvas)
    for polygon, fill in triangles:
        draw.polygon(polygon, fill=fill)
    return np.array(canvas, dtype=np.uint8)


__all__ = [
    "SiteColours",
    "disc_coverage",
    "build_circle_mask",
    "build_voronoi_mask",
]
