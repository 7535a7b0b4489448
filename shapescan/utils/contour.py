"""Polygon helpers — RDP simplification (open and closed), perimeters."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def rdp_simplify(
    points: NDArray[np.float64],
    epsilon: float,
) -> NDArray[np.float64]:
    """Ramer-Douglas-Peucker line simplification.

    Reduces point count while preserving shape within epsilon tolerance.
    Endpoints are always kept.
    """
    if len(points) <= 2:
        return points

    start = points[0]
    end = points[-1]

    line_vec = end - start
    line_len = np.linalg.norm(line_vec)

    if line_len < 1e-10:
        # Degenerate chord: fall back to distance from the start point
        distances = np.linalg.norm(points - start, axis=1)
    else:
        line_unit = line_vec / line_len
        vecs = points - start
        projections = np.dot(vecs, line_unit)
        closest = start + np.outer(projections, line_unit)
        distances = np.linalg.norm(points - closest, axis=1)

    max_idx = int(np.argmax(distances))
    max_dist = distances[max_idx]

    if max_dist > epsilon and 0 < max_idx < len(points) - 1:
        left = rdp_simplify(points[: max_idx + 1], epsilon)
        right = rdp_simplify(points[max_idx:], epsilon)
        return np.vstack([left[:-1], right])
    return points[[0, -1]]


def rdp_simplify_closed(
    points: NDArray[np.float64],
    epsilon: float,
) -> NDArray[np.float64]:
    """RDP for a closed ring. Returns the vertices without repeating the first.

    The ring is split at the point farthest from its start so both halves
    have a non-degenerate chord; the start point itself is then pruned if it
    sits on a straight run.
    """
    pts = np.asarray(points, dtype=np.float64)
    if len(pts) > 1 and np.allclose(pts[0], pts[-1]):
        pts = pts[:-1]
    if len(pts) <= 3:
        return pts

    far = int(np.argmax(np.linalg.norm(pts - pts[0], axis=1)))
    first = rdp_simplify(pts[: far + 1], epsilon)
    second = rdp_simplify(np.vstack([pts[far:], pts[:1]]), epsilon)
    ring = np.vstack([first[:-1], second[:-1]])
    return _prune_collinear(ring, epsilon)


def _prune_collinear(ring: NDArray[np.float64], epsilon: float) -> NDArray[np.float64]:
    """Drop vertices within epsilon of the chord joining their neighbours."""
    pts = [p for p in ring]
    changed = True
    while changed and len(pts) > 3:
        changed = False
        for i in range(len(pts)):
            prev_pt, pt, next_pt = pts[i - 1], pts[i], pts[(i + 1) % len(pts)]
            if _point_line_distance(pt, prev_pt, next_pt) <= epsilon:
                del pts[i]
                changed = True
                break
    return np.array(pts)


def _point_line_distance(
    p: NDArray[np.float64], a: NDArray[np.float64], b: NDArray[np.float64],
) -> float:
    ab = b - a
    length = float(np.linalg.norm(ab))
    if length < 1e-10:
        return float(np.linalg.norm(p - a))
    # |cross(ab, ap)| / |ab|
    return abs(float(ab[0] * (p[1] - a[1]) - ab[1] * (p[0] - a[0]))) / length


def polygon_perimeter(points: NDArray[np.float64], closed: bool = True) -> float:
    """Sum of edge lengths, including the closing edge when closed."""
    pts = np.asarray(points, dtype=np.float64)
    if len(pts) < 2:
        return 0.0
    if closed:
        pts = np.vstack([pts, pts[:1]])
    return float(np.sum(np.linalg.norm(np.diff(pts, axis=0), axis=1)))


def inscribed_polygon(
    n_vertices: int,
    width: float,
    height: float,
    inner_ratio: float = 1.0,
) -> NDArray[np.float64]:
    """Regular n-gon (or 2n-point star when inner_ratio < 1) inscribed in a
    width × height ellipse, first vertex at the top."""
    rx, ry = width / 2.0, height / 2.0
    if inner_ratio < 1.0:
        angles = -np.pi / 2 + np.arange(2 * n_vertices) * np.pi / n_vertices
        scale = np.where(np.arange(2 * n_vertices) % 2 == 0, 1.0, inner_ratio)
    else:
        angles = -np.pi / 2 + np.arange(n_vertices) * 2 * np.pi / n_vertices
        scale = np.ones(n_vertices)
    return np.column_stack([rx * scale * np.cos(angles), ry * scale * np.sin(angles)])
