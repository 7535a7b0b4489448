"""API request models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class DetectRequest(BaseModel):
    image: str = Field(..., description="Base64-encoded image (PNG, JPEG, ...) or data URL")
    gradient_threshold: float | None = Field(
        default=None, ge=0, description="Sobel magnitude threshold (default from settings)"
    )
    min_region_size: int | None = Field(
        default=None, ge=1, description="Smallest edge region kept, in pixels"
    )
    backend: Literal["pixel", "contour"] | None = Field(
        default=None, description="Detector back end (default from settings)"
    )
    confidence_mode: Literal["fixed", "fit"] | None = Field(
        default=None, description="Confidence scoring for the pixel back end"
    )
