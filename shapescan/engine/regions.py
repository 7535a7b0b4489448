"""Region extractor — 8-connected components of an edge mask via flood fill."""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from shapescan.engine.types import EDGE_ON, Region

logger = logging.getLogger(__name__)

# (dx, dy) for the 8 surrounding cells
_NEIGHBORS_8 = [
    (-1, -1), (0, -1), (1, -1),
    (-1, 0),           (1, 0),
    (-1, 1),  (0, 1),  (1, 1),
]


def extract_regions(mask: NDArray[np.uint8], min_region_size: int = 80) -> list[Region]:
    """Label connected "on" pixels, keeping regions of at least min_region_size.

    Seeds are taken in row-major order, so regions come out in the order
    their first pixel is met. Discarded regions stay visited and are never
    rescanned.
    """
    if min_region_size < 1:
        raise ValueError(f"min_region_size must be >= 1, got {min_region_size}")

    h, w = mask.shape
    on = (mask == EDGE_ON).ravel()
    visited = np.zeros(h * w, dtype=bool)

    regions: list[Region] = []
    discarded = 0

    # flatnonzero is already row-major
    for seed in np.flatnonzero(on):
        if visited[seed]:
            continue
        members = _flood_fill(on, visited, int(seed), w, h)
        if len(members) < min_region_size:
            discarded += 1
            continue
        idx = np.array(members, dtype=np.intp)
        regions.append(Region(seed=(int(seed) % w, int(seed) // w), xs=idx % w, ys=idx // w))

    logger.debug("Regions: %d kept, %d below %d px", len(regions), discarded, min_region_size)
    return regions


def _flood_fill(
    on: NDArray[np.bool_],
    visited: NDArray[np.bool_],
    start: int,
    width: int,
    height: int,
) -> list[int]:
    """Stack-based fill over flat indices y*W + x. Marks visited in place."""
    visited[start] = True
    stack = [start]
    members: list[int] = []

    while stack:
        idx = stack.pop()
        members.append(idx)
        y, x = divmod(idx, width)
        for dx, dy in _NEIGHBORS_8:
            nx, ny = x + dx, y + dy
            if nx < 0 or nx >= width or ny < 0 or ny >= height:
                continue
            nidx = ny * width + nx
            if on[nidx] and not visited[nidx]:
                visited[nidx] = True
                stack.append(nidx)

    return members
