"""Shared test fixtures — synthetic RGBA images."""

from __future__ import annotations

import numpy as np
import pytest
from skimage.draw import disk, polygon

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)

# Solid triangle, ~30 px wide: edge band of roughly 200 pixels
TRIANGLE_VERTICES = [(85, 80), (115, 80), (100, 106)]  # (x, y)


def blank_image(width: int = 200, height: int = 200, color=WHITE, alpha: int = 255) -> np.ndarray:
    img = np.zeros((height, width, 4), dtype=np.uint8)
    img[:, :, :3] = color
    img[:, :, 3] = alpha
    return img


def draw_square(img: np.ndarray, x0: int, y0: int, side: int, color=BLACK) -> np.ndarray:
    img[y0 : y0 + side, x0 : x0 + side, :3] = color
    return img


def draw_triangle(img: np.ndarray, vertices, color=BLACK) -> np.ndarray:
    xs = [v[0] for v in vertices]
    ys = [v[1] for v in vertices]
    rr, cc = polygon(ys, xs, shape=img.shape[:2])
    img[rr, cc, :3] = color
    return img


def draw_disk(img: np.ndarray, cx: int, cy: int, radius: int, color=BLACK) -> np.ndarray:
    rr, cc = disk((cy, cx), radius, shape=img.shape[:2])
    img[rr, cc, :3] = color
    return img


@pytest.fixture
def empty_image() -> np.ndarray:
    return blank_image()


@pytest.fixture
def triangle_image() -> np.ndarray:
    return draw_triangle(blank_image(), TRIANGLE_VERTICES)


@pytest.fixture
def square_image() -> np.ndarray:
    # 60 px square: edge ring of exactly 8 × 60 = 480 pixels
    return draw_square(blank_image(), 70, 70, 60)


@pytest.fixture
def two_squares_image() -> np.ndarray:
    img = blank_image()
    draw_square(img, 30, 30, 20)
    draw_square(img, 140, 140, 20)
    return img


@pytest.fixture
def noise_image() -> np.ndarray:
    img = blank_image()
    for x, y in [(20, 20), (60, 150), (100, 40), (150, 90), (180, 180), (40, 110)]:
        img[y, x, :3] = BLACK
    return img
