"""Data model shared by every detection stage.

Buffers are plain numpy arrays:
  PixelBuffer     (H, W, 4) uint8, RGBA, row-major, origin top-left
  LuminanceBuffer (H, W)    uint8
  EdgeMask        (H, W)    uint8, values in {0, 255}

Regions and shapes are small dataclasses; shapes are frozen once produced.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

# Structural: R, G, B, A
RGBA_CHANNELS = 4

EDGE_ON = 255
EDGE_OFF = 0


class InvalidImageError(ValueError):
    """The pixel buffer handed to the pipeline breaks the RGBA contract."""


class ShapeLabel(str, enum.Enum):
    CIRCLE = "circle"
    TRIANGLE = "triangle"
    RECTANGLE = "rectangle"
    PENTAGON = "pentagon"
    STAR = "star"


def validate_pixel_buffer(image: NDArray) -> None:
    """Fail fast on anything that is not a non-empty (H, W, 4) uint8 array."""
    if not isinstance(image, np.ndarray):
        raise InvalidImageError(f"expected a numpy array, got {type(image).__name__}")
    if image.ndim != 3:
        raise InvalidImageError(f"expected a 3-D (H, W, 4) buffer, got {image.ndim}-D")
    h, w, channels = image.shape
    if channels != RGBA_CHANNELS:
        raise InvalidImageError(f"expected {RGBA_CHANNELS} RGBA channels, got {channels}")
    if h < 1 or w < 1:
        raise InvalidImageError(f"image dimensions must be positive, got {w}x{h}")
    if image.dtype != np.uint8:
        raise InvalidImageError(f"expected 8-bit channels (uint8), got {image.dtype}")


@dataclass
class Region:
    """One 8-connected component of edge pixels."""

    seed: tuple[int, int]                  # (x, y) where the row-major scan met it
    xs: NDArray[np.intp] = field(default_factory=lambda: np.empty(0, dtype=np.intp))
    ys: NDArray[np.intp] = field(default_factory=lambda: np.empty(0, dtype=np.intp))

    @property
    def size(self) -> int:
        return int(len(self.xs))

    def coordinates(self) -> list[tuple[int, int]]:
        return [(int(x), int(y)) for x, y in zip(self.xs, self.ys)]


@dataclass(frozen=True)
class BoundingBox:
    x: int
    y: int
    width: int
    height: int

    @property
    def x2(self) -> int:
        return self.x + self.width

    @property
    def y2(self) -> int:
        return self.y + self.height

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px <= self.x2 and self.y <= py <= self.y2

    def overlaps(self, other: BoundingBox) -> bool:
        return not (
            self.x2 < other.x or other.x2 < self.x
            or self.y2 < other.y or other.y2 < self.y
        )

    def as_list(self) -> list[int]:
        return [self.x, self.y, self.width, self.height]


@dataclass(frozen=True)
class DetectedShape:
    label: ShapeLabel
    confidence: float                      # 0-1
    bbox: BoundingBox
    centroid: tuple[float, float]          # (x, y), not rounded
    area: int                              # bbox.width * bbox.height
    pixel_count: int                       # raw region size


@dataclass(frozen=True)
class DetectionResult:
    shapes: tuple[DetectedShape, ...]
    processing_time_ms: float
    image_width: int
    image_height: int
    backend: str = "pixel"

    def shapes_equal(self, other: DetectionResult) -> bool:
        """Equality ignoring wall-clock timing."""
        return (
            self.shapes == other.shapes
            and self.image_width == other.image_width
            and self.image_height == other.image_height
            and self.backend == other.backend
        )
