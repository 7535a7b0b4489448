"""Pipeline orchestrator — buffer → luminance → edge mask → regions → shapes.

Each stage fully consumes its input before the next starts. Every buffer,
including the visited set, is allocated per call; nothing is shared between
calls, so independent detections may run concurrently.
"""

from __future__ import annotations

import asyncio
import functools
import logging
import time
from typing import Any, Protocol

import numpy as np
from numpy.typing import NDArray

from shapescan.engine.classifier import classify_regions
from shapescan.engine.config import DetectionConfig
from shapescan.engine.edges import sobel_edges
from shapescan.engine.grayscale import to_luminance
from shapescan.engine.regions import extract_regions
from shapescan.engine.types import DetectionResult, validate_pixel_buffer

logger = logging.getLogger(__name__)

BACKENDS = ("pixel", "contour")


class DetectionBackend(Protocol):
    backend_name: str
    config: DetectionConfig

    def run(self, image: NDArray[np.uint8]) -> DetectionResult: ...


class Pipeline:
    """Hand-rolled Sobel + flood-fill detector."""

    backend_name = "pixel"

    def __init__(self, config: DetectionConfig | None = None) -> None:
        self.config = (config or DetectionConfig()).validate()

    def run(self, image: NDArray[np.uint8]) -> DetectionResult:
        """Run all four stages. Raises InvalidImageError before any work."""
        validate_pixel_buffer(image)
        h, w = image.shape[:2]
        start = time.perf_counter()

        t0 = time.perf_counter()
        luminance = to_luminance(image)
        t0 = _log_stage("grayscale", t0)

        mask = sobel_edges(luminance, self.config.gradient_threshold)
        t0 = _log_stage("edges", t0)

        regions = extract_regions(mask, self.config.min_region_size)
        t0 = _log_stage("regions", t0)

        shapes = classify_regions(regions, self.config)
        _log_stage("classify", t0)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Detection complete: %d shapes in %dx%d image in %.1fms",
            len(shapes), w, h, total,
        )
        return DetectionResult(
            shapes=tuple(shapes),
            processing_time_ms=round(total, 3),
            image_width=w,
            image_height=h,
            backend=self.backend_name,
        )


def _log_stage(name: str, t0: float) -> float:
    now = time.perf_counter()
    logger.debug("  %s completed in %.1fms", name, (now - t0) * 1000)
    return now


def create_pipeline(config: DetectionConfig | None = None, backend: str = "pixel") -> DetectionBackend:
    """Factory function for creating a detector for the named back end."""
    if backend == "pixel":
        return Pipeline(config=config)
    if backend == "contour":
        from shapescan.engine.delegate import ContourPipeline

        return ContourPipeline(config=config)
    raise ValueError(f"Unknown backend {backend!r}; expected one of {BACKENDS}")


def detect(
    image: NDArray[np.uint8],
    config: DetectionConfig | None = None,
    backend: str = "pixel",
    **options: Any,
) -> DetectionResult:
    """Detect shapes in an RGBA buffer.

    Keyword options (gradient_threshold, min_region_size, ...) override the
    matching DetectionConfig fields.
    """
    cfg = (config or DetectionConfig()).with_options(**options)
    return create_pipeline(cfg, backend=backend).run(image)


async def detect_async(
    image: NDArray[np.uint8],
    config: DetectionConfig | None = None,
    backend: str = "pixel",
    **options: Any,
) -> DetectionResult:
    """detect() in the loop's default executor so the event loop stays free."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(
        None, functools.partial(detect, image, config, backend, **options)
    )
