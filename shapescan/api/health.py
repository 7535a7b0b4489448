"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from shapescan import __version__
from shapescan.engine.pipeline import BACKENDS
from shapescan.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__, backends=list(BACKENDS))
