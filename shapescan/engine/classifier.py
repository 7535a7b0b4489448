"""Shape classifier — bbox, centroid, area and a pixel-count label per region.

Labels come purely from the region's raw pixel count, banded by ordered cut
points. This tracks shape *scale*, not shape: a large triangle outline is
reported as a circle. Cut points are configuration (DetectionConfig).

Confidence:
  fixed → the configured constant
  fit   → 1 - |count - expected| / expected, where expected is the edge-band
          pixel count of a perfect outline of the assigned label inscribed
          in the bounding box. Clamped to [0, 1].
"""

from __future__ import annotations

import math

import numpy as np

from shapescan.engine.config import DetectionConfig, LabelThreshold
from shapescan.engine.types import BoundingBox, DetectedShape, Region, ShapeLabel
from shapescan.utils.contour import inscribed_polygon, polygon_perimeter

# Regular pentagram: inner/outer radius = 1/φ² ≈ 0.382
_STAR_INNER_RATIO = (3 - math.sqrt(5)) / 2
_STAR_POINTS = 5
_PENTAGON_SIDES = 5


def label_for_count(
    count: int,
    thresholds: tuple[LabelThreshold, ...],
    fallback: ShapeLabel = ShapeLabel.CIRCLE,
) -> ShapeLabel:
    for band in thresholds:
        if count < band.upper_bound:
            return band.label
    return fallback


def outline_perimeter(label: ShapeLabel, width: float, height: float) -> float:
    """Perimeter of an ideal ``label`` outline filling a width × height box."""
    if label is ShapeLabel.RECTANGLE:
        return 2.0 * (width + height)
    if label is ShapeLabel.TRIANGLE:
        # Isosceles: base along the bottom, apex top-centre
        return width + 2.0 * math.hypot(width / 2.0, height)
    if label is ShapeLabel.CIRCLE:
        # Ramanujan's ellipse approximation
        a, b = width / 2.0, height / 2.0
        return math.pi * (3 * (a + b) - math.sqrt((3 * a + b) * (a + 3 * b)))
    if label is ShapeLabel.PENTAGON:
        return polygon_perimeter(inscribed_polygon(_PENTAGON_SIDES, width, height))
    return polygon_perimeter(inscribed_polygon(_STAR_POINTS, width, height, _STAR_INNER_RATIO))


def fit_confidence(count: int, label: ShapeLabel, bbox: BoundingBox, band_width: float) -> float:
    expected = outline_perimeter(label, bbox.width, bbox.height) * band_width
    if expected <= 0:
        return 0.0
    score = 1.0 - abs(count - expected) / expected
    return float(min(1.0, max(0.0, score)))


def classify_region(region: Region, config: DetectionConfig | None = None) -> DetectedShape:
    config = config or DetectionConfig()

    min_x, max_x = int(region.xs.min()), int(region.xs.max())
    min_y, max_y = int(region.ys.min()), int(region.ys.max())
    bbox = BoundingBox(min_x, min_y, max_x - min_x, max_y - min_y)

    centroid = (float(np.mean(region.xs)), float(np.mean(region.ys)))
    count = region.size
    label = label_for_count(count, config.label_thresholds, config.fallback_label)

    if config.confidence_mode == "fit":
        confidence = fit_confidence(count, label, bbox, config.edge_band_width)
    else:
        confidence = config.fixed_confidence

    return DetectedShape(
        label=label,
        confidence=round(confidence, 4),
        bbox=bbox,
        centroid=centroid,
        area=bbox.width * bbox.height,
        pixel_count=count,
    )


def classify_regions(regions: list[Region], config: DetectionConfig | None = None) -> list[DetectedShape]:
    return [classify_region(r, config) for r in regions]
