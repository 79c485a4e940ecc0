# seed_recolor/voronoi.py
from __future__ import annotations

"""
Voronoi geometry on top of scipy.spatial.Voronoi.

voronoi_edges(width, height, sites) returns the ridges of the diagram as
VoronoiEdge records. Each edge names the site(s) it bounds both by id
(position in `sites`) and by the exact Point passed in, so callers can look
colours up by id instead of by floating-point coordinate.

A ring of boundary points is placed outside the image (margin = max(w, h))
so every real site gets a finite cell. Walking a site's edges and joining
each to the site yields a triangle fan that covers its cell inside the
rectangle once clipped by the canvas.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np
from scipy.spatial import QhullError, Voronoi

from .constants import BOUNDARY_MIN_POINTS, BOUNDARY_STEP_PX
from .core_types import Point, assert_positive_size
from .errors import InvalidConfiguration
from .utils import debug_log


@dataclass(frozen=True)
class VoronoiEdge:
    """One ridge. right/right_id are None when the other side is the outer frame."""

    start: Point
    end: Point
    left: Point
    left_id: int
    right: Optional[Point] = None
    right_id: Optional[int] = None

    def sites(self) -> Iterator[Tuple[Point, int]]:
        """Yield (site, site_id) for each real site bordering this edge."""
        yield self.left, self.left_id
        if self.right is not None and self.right_id is not None:
            yield self.right, self.right_id


def boundary_ring(width: int, height: int) -> np.ndarray:
    """Points on a rectangle one image-size outside the canvas, float64 [K,2]."""
    margin = float(max(width, height))
    n_x = max(BOUNDARY_MIN_POINTS, width // BOUNDARY_STEP_PX)
    n_y = max(BOUNDARY_MIN_POINTS, height // BOUNDARY_STEP_PX)
    left, right = -margin, width + margin
    top, bottom = -margin, height + margin

    xs = np.linspace(left, right, num=n_x)
    ys = np.linspace(top, bottom, num=n_y)
    ring = np.concatenate(
        [
            np.column_stack([xs, np.full_like(xs, top)]),
            np.column_stack([np.full_like(ys, right), ys]),
            np.column_stack([xs[::-1], np.full_like(xs, bottom)]),
            np.column_stack([np.full_like(ys, left), ys[::-1]]),
        ]
    )
    # Corners appear twice; Qhull rejects exact duplicates in some modes.
    return np.unique(ring, axis=0)


def voronoi_edges(
    width: int, height: int, sites: Sequence[Point], debug: bool = False
) -> List[VoronoiEdge]:
    """
    Voronoi ridges for `sites` within a width x height frame.

    Ridges between two boundary points are dropped. Ridges between a real
    site and a boundary point keep the real site as `left` only.
    """
    assert_positive_size(width, height)
    if len(sites) == 0:
        raise InvalidConfiguration("at least one site is required")

    interior = np.array([(float(p.x), float(p.y)) for p in sites], dtype=np.float64)
    n_sites = interior.shape[0]
    if not np.isfinite(interior).all():
        raise InvalidConfiguration(f"non-finite site coordinates among {n_sites:,} sites")
    all_points = np.vstack([interior, boundary_ring(width, height)])
    try:
        vor = Voronoi(all_points)
    except QhullError as e:
        raise InvalidConfiguration(f"Voronoi failed for {n_sites:,} sites: {e}") from e

    edges: List[VoronoiEdge] = []
    skipped_infinite = 0
    for (i, j), ridge in zip(vor.ridge_points.tolist(), vor.ridge_vertices):
        i_real = i < n_sites
        j_real = j < n_sites
        if not (i_real or j_real):
            continue
        if -1 in ridge:
            skipped_infinite += 1
            continue
        v0, v1 = vor.vertices[ridge[0]], vor.vertices[ridge[1]]
        start = Point(float(v0[0]), float(v0[1]))
        end = Point(float(v1[0]), float(v1[1]))
        if not i_real:
            i, j = j, i
            i_real, j_real = j_real, i_real
        edges.append(
            VoronoiEdge(
                start=start,
                end=end,
                left=sites[i],
                left_id=i,
                right=sites[j] if j_real else None,
                right_id=j if j_real else None,
            )
        )

    if debug:
        debug_log(
            f"voronoi: sites={n_sites:,} ridges={len(vor.ridge_points):,} "
            f"edges={len(edges):,} skipped_infinite={skipped_infinite}"
        )
    return edges


__all__ = ["VoronoiEdge", "boundary_ring", "voronoi_edges"]
