"""POST /api/detect — shape detection on an uploaded image."""

from __future__ import annotations

import numpy as np
from fastapi import APIRouter, Depends, HTTPException
from numpy.typing import NDArray

from shapescan.config import Settings
from shapescan.dependencies import get_settings
from shapescan.engine.config import DetectionConfig
from shapescan.engine.pipeline import detect_async
from shapescan.engine.types import DetectionResult, InvalidImageError
from shapescan.imaging.loader import ImageLoadError, ImageTooLargeError, decode_base64_image
from shapescan.imaging.render import render_overlay_svg, render_summary
from shapescan.models.requests import DetectRequest
from shapescan.models.responses import DetectResponse, OverlayResponse

router = APIRouter()


def _decode(req: DetectRequest, settings: Settings) -> NDArray[np.uint8]:
    try:
        return decode_base64_image(req.image, max_pixels=settings.max_image_pixels)
    except ImageTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e)) from e
    except ImageLoadError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


async def _run(req: DetectRequest, image: NDArray[np.uint8], settings: Settings) -> DetectionResult:
    config = DetectionConfig(
        gradient_threshold=settings.default_gradient_threshold,
        min_region_size=settings.default_min_region_size,
    ).with_options(
        gradient_threshold=req.gradient_threshold,
        min_region_size=req.min_region_size,
        confidence_mode=req.confidence_mode,
    )
    try:
        return await detect_async(image, config, backend=req.backend or settings.default_backend)
    except (InvalidImageError, ValueError) as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


@router.post("/detect", response_model=DetectResponse)
async def detect(req: DetectRequest, settings: Settings = Depends(get_settings)) -> DetectResponse:
    image = _decode(req, settings)
    result = await _run(req, image, settings)
    return DetectResponse.from_result(result)


@router.post("/detect/overlay", response_model=OverlayResponse)
async def detect_overlay(req: DetectRequest, settings: Settings = Depends(get_settings)) -> OverlayResponse:
    image = _decode(req, settings)
    result = await _run(req, image, settings)
    return OverlayResponse(
        svg=render_overlay_svg(result, image),
        summary=render_summary(result),
        detection=DetectResponse.from_result(result),
    )
