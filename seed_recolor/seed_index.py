# seed_recolor/seed_index.py
from __future__ import annotations

"""
Nearest-seed lookup (brute-force Voronoi assignment by Euclidean distance).

SeedIndex snapshots the seeds into read-only arrays so it can be shared by
worker threads without locking.

Tie rule: seeds are scanned in insertion order and a candidate only wins
with a strictly smaller distance, so the first-inserted seed wins ties.
"""

from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from .core_types import Colour, Number, Seed
from .errors import InvalidConfiguration


class SeedIndex:
    """Immutable set of seeds answering nearest(x, y) queries."""

    def __init__(self, seeds: Sequence[Seed]) -> None:
        if len(seeds) == 0:
            raise InvalidConfiguration("at least one seed is required")
        self._seeds = tuple(seeds)
        points = np.array(
            [(float(s.point.x), float(s.point.y)) for s in self._seeds],
            dtype=np.float64,
        )
        colours = np.array([s.colour.as_tuple() for s in self._seeds], dtype=np.uint8)
        points.setflags(write=False)
        colours.setflags(write=False)
        self._points = points
        self._colours = colours

    def __len__(self) -> int:
        return len(self._seeds)

    @property
    def points(self) -> NDArray[np.float64]:
        """Seed coordinates, float64 [N,2], read-only."""
        return self._points

    @property
    def colours(self) -> NDArray[np.uint8]:
        """Seed colours, uint8 [N,4], read-only."""
        return self._colours

    def nearest_index(self, x: Number, y: Number) -> int:
        """Index of the closest seed to (x, y); first-inserted wins ties."""
        px, py = float(x), float(y)
        best_idx = 0
        best_d2 = float("inf")
        for i, (sx, sy) in enumerate(self._points.tolist()):
            dx = px - sx
            dy = py - sy
            d2 = dx * dx + dy * dy
            if d2 < best_d2:
                best_d2 = d2
                best_idx = i
        return best_idx

    def nearest(self, x: Number, y: Number) -> Colour:
        """Colour of the closest seed to (x, y)."""
        return self._seeds[self.nearest_index(x, y)].colour

    def nearest_indices(self, xs: np.ndarray, ys: np.ndarray) -> NDArray[np.intp]:
        """
        Vectorised nearest_index() for coordinate arrays of equal shape.

        Sweeps the seeds once, keeping a running minimum per query point, so
        memory stays O(points) and the tie rule matches the scalar scan.
        """
        qx = np.asarray(xs, dtype=np.float64)
        qy = np.asarray(ys, dtype=np.float64)
        if qx.shape != qy.shape:
            raise ValueError(f"xs/ys shape mismatch: {qx.shape} vs {qy.shape}")
        best_d2 = np.full(qx.shape, np.inf, dtype=np.float64)
        best_idx = np.zeros(qx.shape, dtype=np.intp)
        for i, (sx, sy) in enumerate(self._points.tolist()):
            dx = qx - sx
            dy = qy - sy
            d2 = dx * dx + dy * dy
            closer = d2 < best_d2
            best_d2[closer] = d2[closer]
            best_idx[closer] = i
        return best_idx

    def nearest_colours(self, xs: np.ndarray, ys: np.ndarray) -> NDArray[np.uint8]:
        """Vectorised nearest(): uint8 [..., 4] colours."""
        return self._colours[self.nearest_indices(xs, ys)]


__all__ = ["SeedIndex"]
