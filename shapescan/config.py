"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    shapescan_env: str = "development"
    shapescan_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Detection defaults
    default_gradient_threshold: float = 100.0
    default_min_region_size: int = 80
    default_backend: str = "pixel"

    # Upload guard (4 MP); region extraction is a per-pixel Python loop
    max_image_pixels: int = 2048 * 2048

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
