"""Tests for polygon helpers."""

from __future__ import annotations

import numpy as np
import pytest

from shapescan.utils.contour import (
    inscribed_polygon,
    polygon_perimeter,
    rdp_simplify,
    rdp_simplify_closed,
)


def _densify(corners: np.ndarray, per_edge: int = 20) -> np.ndarray:
    pts = []
    for a, b in zip(corners, np.roll(corners, -1, axis=0)):
        for t in np.linspace(0, 1, per_edge, endpoint=False):
            pts.append(a + t * (b - a))
    pts.append(corners[0])
    return np.array(pts)


def test_rdp_collinear_collapses():
    line = np.column_stack([np.linspace(0, 10, 11), np.zeros(11)])
    assert len(rdp_simplify(line, 0.1)) == 2


def test_rdp_keeps_corner():
    pts = np.array([[0, 0], [5, 0], [10, 0], [10, 5], [10, 10]], dtype=float)
    simplified = rdp_simplify(pts, 0.5)
    assert simplified.tolist() == [[0, 0], [10, 0], [10, 10]]


def test_closed_square_starting_mid_edge():
    corners = np.array([[0, 0], [40, 0], [40, 40], [0, 40]], dtype=float)
    ring = _densify(corners)
    # Start halfway along the top edge
    ring = np.vstack([ring[10:-1], ring[:11]])
    poly = rdp_simplify_closed(ring, epsilon=2.0)

    assert len(poly) == 4
    assert {tuple(p) for p in np.round(poly).astype(int)} == {(0, 0), (40, 0), (40, 40), (0, 40)}


def test_closed_triangle():
    corners = np.array([[0, 0], [50, 0], [25, 40]], dtype=float)
    poly = rdp_simplify_closed(_densify(corners), epsilon=2.0)
    assert len(poly) == 3


def test_closed_circle_keeps_many_vertices():
    theta = np.linspace(0, 2 * np.pi, 400)
    ring = np.column_stack([50 * np.cos(theta), 50 * np.sin(theta)])
    eps = 0.04 * polygon_perimeter(ring)
    assert len(rdp_simplify_closed(ring, eps)) > 4


def test_perimeter():
    square = np.array([[0, 0], [1, 0], [1, 1], [0, 1]], dtype=float)
    assert polygon_perimeter(square) == pytest.approx(4.0)
    assert polygon_perimeter(square, closed=False) == pytest.approx(3.0)


def test_inscribed_polygon():
    pent = inscribed_polygon(5, 20, 10)
    assert pent.shape == (5, 2)
    assert np.all(np.abs(pent[:, 0]) <= 10 + 1e-9)
    assert np.all(np.abs(pent[:, 1]) <= 5 + 1e-9)
    assert inscribed_polygon(5, 20, 20, inner_ratio=0.4).shape == (10, 2)
