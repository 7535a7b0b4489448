"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from shapescan.engine.types import DetectionResult, DetectedShape


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    backends: list[str] = Field(default_factory=list)


class ShapeModel(BaseModel):
    label: str
    confidence: float
    bbox: list[int] = Field(..., description="[x, y, width, height]")
    centroid: tuple[float, float]
    area: int
    pixel_count: int

    @classmethod
    def from_shape(cls, shape: DetectedShape) -> ShapeModel:
        return cls(
            label=shape.label.value,
            confidence=shape.confidence,
            bbox=shape.bbox.as_list(),
            centroid=shape.centroid,
            area=shape.area,
            pixel_count=shape.pixel_count,
        )


class DetectResponse(BaseModel):
    shapes: list[ShapeModel] = Field(default_factory=list)
    processing_time_ms: float = 0.0
    image_width: int = 0
    image_height: int = 0
    backend: str = "pixel"

    @classmethod
    def from_result(cls, result: DetectionResult) -> DetectResponse:
        return cls(
            shapes=[ShapeModel.from_shape(s) for s in result.shapes],
            processing_time_ms=result.processing_time_ms,
            image_width=result.image_width,
            image_height=result.image_height,
            backend=result.backend,
        )


class OverlayResponse(BaseModel):
    svg: str
    summary: str
    detection: DetectResponse
