"""Grayscale reducer — RGBA to ITU-R BT.601 luma."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

# BT.601 luma weights in thousandths, so the weighted sum is exact
_W_R = 299
_W_G = 587
_W_B = 114
_SCALE = 1000


def to_luminance(image: NDArray[np.uint8]) -> NDArray[np.uint8]:
    """round(0.299·R + 0.587·G + 0.114·B) per pixel, alpha ignored.

    Computed in integers, so exact halves such as (0, 36, 12) -> 22.5 round
    up. The weights sum to the scale, so the result never exceeds 255.
    """
    rgb = image[:, :, :3].astype(np.int32)
    luma = _W_R * rgb[:, :, 0] + _W_G * rgb[:, :, 1] + _W_B * rgb[:, :, 2]
    return ((luma + _SCALE // 2) // _SCALE).astype(np.uint8)
