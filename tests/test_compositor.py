"""Unit tests for layered compose of overlay, mask and original."""

from __future__ import annotations

import numpy as np
import pytest

from seed_recolor.compositor import compose, destination_in
from seed_recolor.core_types import Colour, Point, Seed
from seed_recolor.errors import InvalidConfiguration
from seed_recolor.mask import build_circle_mask
from seed_recolor.recolor import recolor
from seed_recolor.seed_index import SeedIndex


def _scene(h: int = 24, w: int = 32):
    rng = np.random.default_rng(21)
    original = rng.integers(0, 256, size=(h, w, 4), dtype=np.uint8)
    overlay = rng.integers(0, 256, size=(h, w, 4), dtype=np.uint8)
    overlay[..., 3] = 255
    return original, overlay


def test_zero_mask_keeps_original():
    original, overlay = _scene()
    mask = np.zeros(original.shape[:2], dtype=np.uint8)
    np.testing.assert_array_equal(compose(original, overlay, mask, 255), original)


def test_zero_alpha_keeps_original():
    original, overlay = _scene()
    mask = np.full(original.shape[:2], 255, dtype=np.uint8)
    np.testing.assert_array_equal(compose(original, overlay, mask, 0), original)


def test_full_mask_and_alpha_show_opaque_overlay():
    original, overlay = _scene()
    mask = np.full(original.shape[:2], 255, dtype=np.uint8)
    np.testing.assert_array_equal(compose(original, overlay, mask, 255), overlay)


def test_destination_in_scales_alpha_only():
    _, overlay = _scene()
    strength = np.full(overlay.shape[:2], 255, dtype=np.uint8)
    gated = destination_in(overlay, strength, 128)
    np.testing.assert_array_equal(gated[..., :3], overlay[..., :3])
    assert (gated[..., 3] == 128).all()


def test_nearest_colour_overlay_matches_recolorer():
    h, w = 24, 32
    original, _ = _scene(h, w)
    points = [Point(4, 4), Point(25, 6), Point(12, 20)]
    seeds = [
        Seed(p, c, i)
        for i, (p, c) in enumerate(
            zip(points, [Colour(200, 140, 130, 255), Colour(130, 220, 160, 255), Colour(150, 150, 250, 255)])
        )
    ]
    index = SeedIndex(seeds)
    ys, xs = np.mgrid[0:h, 0:w]
    overlay = index.nearest_colours(xs, ys)
    mask = build_circle_mask(w, h, 7, points)

    np.testing.assert_array_equal(
        compose(original, overlay, mask, 127), recolor(original, mask, index, 127)
    )


def test_size_mismatch_is_rejected():
    original, overlay = _scene()
    mask = np.zeros(original.shape[:2], dtype=np.uint8)
    with pytest.raises(InvalidConfiguration):
        compose(original, overlay[:-1], mask, 10)
    with pytest.raises(InvalidConfiguration):
        compose(original, overlay, mask[:, :-1], 10)
    with pytest.raises(InvalidConfiguration):
        compose(original, overlay, mask, 300)
