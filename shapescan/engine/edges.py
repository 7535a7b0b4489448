"""Edge detector — 3×3 Sobel gradient with a hard magnitude threshold.

No hysteresis, no non-maximum suppression. The outermost one-pixel frame
has no full neighbourhood and is always 0.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from shapescan.engine.types import EDGE_OFF, EDGE_ON

SOBEL_X = np.array([[-1, 0, 1],
                    [-2, 0, 2],
                    [-1, 0, 1]], dtype=np.int32)
SOBEL_Y = np.array([[-1, -2, -1],
                    [0, 0, 0],
                    [1, 2, 1]], dtype=np.int32)

# Smallest grid with an interior pixel
_MIN_KERNEL = 3


def _correlate_interior(lum: NDArray[np.int32], kernel: NDArray[np.int32]) -> NDArray[np.int32]:
    """Apply a 3×3 kernel to every interior pixel via shifted slices."""
    h, w = lum.shape
    out = np.zeros((h - 2, w - 2), dtype=np.int32)
    for dy in range(_MIN_KERNEL):
        for dx in range(_MIN_KERNEL):
            weight = kernel[dy, dx]
            if weight:
                out += weight * lum[dy : dy + h - 2, dx : dx + w - 2]
    return out


def gradient_magnitude(luminance: NDArray[np.uint8]) -> NDArray[np.float64]:
    """sqrt(sumX² + sumY²) for interior pixels, 0 on the border frame."""
    h, w = luminance.shape
    mag = np.zeros((h, w), dtype=np.float64)
    if h < _MIN_KERNEL or w < _MIN_KERNEL:
        return mag

    lum = luminance.astype(np.int32)
    gx = _correlate_interior(lum, SOBEL_X)
    gy = _correlate_interior(lum, SOBEL_Y)
    mag[1:-1, 1:-1] = np.sqrt(gx.astype(np.float64) ** 2 + gy.astype(np.float64) ** 2)
    return mag


def sobel_edges(luminance: NDArray[np.uint8], threshold: float = 100.0) -> NDArray[np.uint8]:
    """Binary edge mask: 255 where gradient magnitude > threshold, else 0."""
    if threshold < 0:
        raise ValueError(f"gradient threshold must be >= 0, got {threshold}")
    mag = gradient_magnitude(luminance)
    return np.where(mag > threshold, EDGE_ON, EDGE_OFF).astype(np.uint8)
