"""Unit tests for the scipy-backed Voronoi edge extraction."""

from __future__ import annotations

import numpy as np
import pytest
from scipy.spatial import QhullError

import seed_recolor.voronoi as voronoi_module
from seed_recolor.core_types import Point
from seed_recolor.errors import InvalidConfiguration
from seed_recolor.voronoi import boundary_ring, voronoi_edges


def test_edges_carry_site_ids_and_points():
    sites = [Point(5.0, 5.0), Point(15.0, 5.0), Point(10.0, 15.0)]
    edges = voronoi_edges(20, 20, sites)
    assert edges
    seen = set()
    for edge in edges:
        assert 0 <= edge.left_id < len(sites)
        assert edge.left is sites[edge.left_id]
        if edge.right_id is not None:
            assert edge.right is sites[edge.right_id]
        for _site, site_id in edge.sites():
            seen.add(site_id)
    assert seen == {0, 1, 2}


def test_shared_ridge_is_the_bisector():
    sites = [Point(5.0, 5.0), Point(15.0, 5.0)]
    edges = voronoi_edges(20, 10, sites)
    shared = [e for e in edges if e.right_id is not None]
    assert len(shared) == 1
    edge = shared[0]
    assert {edge.left_id, edge.right_id} == {0, 1}
    assert edge.start.x == pytest.approx(10.0)
    assert edge.end.x == pytest.approx(10.0)


def test_single_site_has_only_frame_edges():
    edges = voronoi_edges(16, 16, [Point(8.0, 8.0)])
    assert edges
    assert all(e.right is None and e.left_id == 0 for e in edges)


def test_boundary_ring_lies_outside_canvas():
    ring = boundary_ring(30, 20)
    assert ring.shape[1] == 2
    inside = (ring[:, 0] >= 0) & (ring[:, 0] < 30) & (ring[:, 1] >= 0) & (ring[:, 1] < 20)
    assert not inside.any()
    assert len(np.unique(ring, axis=0)) == len(ring)


def test_rejects_empty_sites_and_bad_size():
    with pytest.raises(InvalidConfiguration):
        voronoi_edges(10, 10, [])
    with pytest.raises(InvalidConfiguration):
        voronoi_edges(10, -1, [Point(1.0, 1.0)])


def test_non_finite_site_rejected():
    with pytest.raises(InvalidConfiguration, match="non-finite"):
        voronoi_edges(10, 10, [Point(1.0, 1.0), Point(float("nan"), 2.0)])


def test_qhull_failure_is_reported_with_site_count(monkeypatch):
    def failing_voronoi(points):
        raise QhullError("QH6154 initial simplex is flat")

    monkeypatch.setattr(voronoi_module, "Voronoi", failing_voronoi)
    with pytest.raises(InvalidConfiguration, match="3 sites"):
        voronoi_edges(20, 20, [Point(1.0, 1.0), Point(2.0, 2.0), Point(3.0, 3.0)])
