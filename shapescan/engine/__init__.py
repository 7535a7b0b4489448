"""ShapeScan detection engine."""

from shapescan.engine.config import DetectionConfig, LabelThreshold
from shapescan.engine.pipeline import Pipeline, create_pipeline, detect, detect_async
from shapescan.engine.types import (
    BoundingBox,
    DetectedShape,
    DetectionResult,
    InvalidImageError,
    Region,
    ShapeLabel,
)

__all__ = [
    "DetectionConfig",
    "LabelThreshold",
    "Pipeline",
    "create_pipeline",
    "detect",
    "detect_async",
    "BoundingBox",
    "DetectedShape",
    "DetectionResult",
    "InvalidImageError",
    "Region",
    "ShapeLabel",
]
