"""Unit tests for the nearest-seed recolourer: short-circuit, ownership, threading."""

from __future__ import annotations

import numpy as np
import pytest

from seed_recolor.core_types import Colour, Point, Seed
from seed_recolor.errors import InvalidConfiguration
from seed_recolor.mask import build_circle_mask
from seed_recolor.recolor import recolor, recolor_in_place, recolor_pixel
from seed_recolor.seed_index import SeedIndex

RED = Colour(255, 0, 0, 255)


def _grey_4x4() -> np.ndarray:
    img = np.zeros((4, 4, 4), dtype=np.uint8)
    img[...] = (128, 128, 128, 255)
    return img


def _white_mask_4x4() -> np.ndarray:
    return np.full((4, 4, 4), 255, dtype=np.uint8)


def _random_scene(seed: int = 3, h: int = 48, w: int = 64, n_seeds: int = 7):
    rng = np.random.default_rng(seed)
    img = rng.integers(0, 256, size=(h, w, 4), dtype=np.uint8)
    points = [Point(int(x), int(y)) for x, y in zip(rng.integers(0, w, n_seeds), rng.integers(0, h, n_seeds))]
    seeds = [
        Seed(p, Colour(*rng.integers(127, 256, size=3).tolist(), 255), i)
        for i, p in enumerate(points)
    ]
    mask = build_circle_mask(w, h, 9, points)
    return img, mask, SeedIndex(seeds)


def test_full_alpha_replaces_every_pixel():
    index = SeedIndex([Seed(Point(1, 1), RED, 0)])
    out = recolor(_grey_4x4(), _white_mask_4x4(), index, 255)
    expected = np.zeros((4, 4, 4), dtype=np.uint8)
    expected[...] = RED.as_tuple()
    np.testing.assert_array_equal(out, expected)


def test_zero_alpha_is_identity():
    img = _grey_4x4()
    index = SeedIndex([Seed(Point(1, 1), RED, 0)])
    out = recolor(img, _white_mask_4x4(), index, 0)
    np.testing.assert_array_equal(out, img)


def test_zero_mask_pixels_are_byte_identical():
    img, mask, index = _random_scene()
    out = recolor(img, mask, index, 200, workers=3)
    untouched = mask == 0
    assert untouched.any()
    np.testing.assert_array_equal(out[untouched], img[untouched])
    assert not np.array_equal(out[~untouched], img[~untouched])


def test_recolor_returns_copy_and_in_place_mutates():
    img, mask, index = _random_scene()
    before = img.copy()
    out = recolor(img, mask, index, 127)
    np.testing.assert_array_equal(img, before)

    target = img.copy()
    assert recolor_in_place(target, mask, index, 127) is None
    np.testing.assert_array_equal(target, out)


@pytest.mark.parametrize("workers", [2, 4, 13, 100])
def test_parallel_matches_sequential(workers):
    img, mask, index = _random_scene()
    sequential = recolor(img, mask, index, 180, workers=1)
    parallel = recolor(img, mask, index, 180, workers=workers)
    np.testing.assert_array_equal(parallel, sequential)


def test_vectorised_rows_match_scalar_reference():
    img, mask, index = _random_scene(seed=5, h=10, w=12, n_seeds=3)
    out = recolor(img, mask, index, 150)
    for y in range(img.shape[0]):
        for x in range(img.shape[1]):
            m = int(mask[y, x])
            expected = recolor_pixel(
                Colour(*map(int, img[y, x])), Colour(m, m, m, 255), x, y, index, 150
            )
            assert tuple(out[y, x]) == expected.as_tuple()


def test_rgba_mask_equals_single_channel_mask():
    img, mask, index = _random_scene()
    rgba_mask = np.repeat(mask[..., None], 4, axis=2)
    np.testing.assert_array_equal(
        recolor(img, rgba_mask, index, 99), recolor(img, mask, index, 99)
    )


def test_preconditions_fail_before_any_write():
    img, mask, index = _random_scene()
    before = img.copy()
    with pytest.raises(InvalidConfiguration):
        recolor_in_place(img, mask[:-1], index, 100)
    with pytest.raises(InvalidConfiguration):
        recolor_in_place(img, mask, index, 256)
    with pytest.raises(InvalidConfiguration):
        recolor_in_place(img, mask, index, -1)
    with pytest.raises(InvalidConfiguration):
        recolor_in_place(img, mask, index, 100, workers=0)
    with pytest.raises(InvalidConfiguration):
        recolor_in_place(img[..., :3], mask, index, 100)
    np.testing.assert_array_equal(img, before)
