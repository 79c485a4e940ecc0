"""Unit tests for RGBA image load/save."""

from __future__ import annotations

import numpy as np
import pytest
from PIL import Image, ImageCms

from seed_recolor.errors import InvalidConfiguration
from seed_recolor.image_io import load_image_rgba, save_png_rgba


def test_png_round_trip(tmp_path):
    rng = np.random.default_rng(1)
    rgba = rng.integers(0, 256, size=(9, 13, 4), dtype=np.uint8)
    path = save_png_rgba(tmp_path / "out.png", rgba)
    assert path.exists()
    np.testing.assert_array_equal(load_image_rgba(path), rgba)
    assert [p.name for p in tmp_path.iterdir()] == ["out.png"]


def test_suffix_is_forced_to_png(tmp_path):
    rgba = np.zeros((2, 2, 4), dtype=np.uint8)
    path = save_png_rgba(tmp_path / "out.jpg", rgba)
    assert path.suffix == ".png"


def test_rgb_source_gets_opaque_alpha(tmp_path):
    src = tmp_path / "in.png"
    Image.new("RGB", (3, 2), (10, 20, 30)).save(src)
    rgba = load_image_rgba(src)
    assert rgba.shape == (2, 3, 4)
    assert (rgba[..., 3] == 255).all()
    assert tuple(rgba[0, 0]) == (10, 20, 30, 255)


def test_invalid_raster_writes_nothing(tmp_path):
    with pytest.raises(InvalidConfiguration):
        save_png_rgba(tmp_path / "bad.png", np.zeros((2, 2, 3), dtype=np.uint8))
    assert list(tmp_path.iterdir()) == []


def test_embedded_srgb_profile_is_converted(tmp_path):
    src = tmp_path / "tagged.png"
    icc = ImageCms.ImageCmsProfile(ImageCms.createProfile("sRGB")).tobytes()
    Image.new("RGB", (4, 3), (200, 100, 50)).save(src, icc_profile=icc)
    rgba = load_image_rgba(src)
    assert rgba.shape == (3, 4, 4)
    assert (rgba[..., 3] == 255).all()
    diff = np.abs(rgba[..., :3].astype(int) - np.array([200, 100, 50]))
    assert diff.max() <= 2
