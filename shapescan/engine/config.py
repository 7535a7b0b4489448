"""Detection configuration — every tunable the pipeline reads."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from shapescan.engine.types import ShapeLabel

CONFIDENCE_MODES = ("fixed", "fit")


@dataclass(frozen=True)
class LabelThreshold:
    """Regions with fewer than ``upper_bound`` edge pixels get ``label``."""

    upper_bound: int
    label: ShapeLabel


# Pixel-count bands, smallest first. Anything at or above the last bound
# falls through to DEFAULT_FALLBACK_LABEL.
DEFAULT_LABEL_THRESHOLDS: tuple[LabelThreshold, ...] = (
    LabelThreshold(400, ShapeLabel.TRIANGLE),
    LabelThreshold(900, ShapeLabel.RECTANGLE),
    LabelThreshold(1500, ShapeLabel.PENTAGON),
)
DEFAULT_FALLBACK_LABEL = ShapeLabel.CIRCLE


@dataclass
class DetectionConfig:
    """Options for one detection call."""

    # Edge detector
    gradient_threshold: float = 100.0

    # Region extractor
    min_region_size: int = 80

    # Classifier
    label_thresholds: tuple[LabelThreshold, ...] = DEFAULT_LABEL_THRESHOLDS
    fallback_label: ShapeLabel = DEFAULT_FALLBACK_LABEL
    confidence_mode: str = "fixed"
    fixed_confidence: float = 0.8
    # A Sobel step edge lights up one pixel on each side of the boundary
    edge_band_width: float = 2.0

    # Contour back end
    canny_low: float = 100.0
    canny_high: float = 200.0
    canny_sigma: float = 1.0
    approx_epsilon_pct: float = 0.04  # of contour perimeter

    def validate(self) -> DetectionConfig:
        if self.gradient_threshold < 0:
            raise ValueError(f"gradient_threshold must be >= 0, got {self.gradient_threshold}")
        if self.min_region_size < 1:
            raise ValueError(f"min_region_size must be >= 1, got {self.min_region_size}")
        bounds = [t.upper_bound for t in self.label_thresholds]
        if any(b2 <= b1 for b1, b2 in zip(bounds, bounds[1:])):
            raise ValueError(f"label cut points must be strictly increasing, got {bounds}")
        if self.confidence_mode not in CONFIDENCE_MODES:
            raise ValueError(
                f"confidence_mode must be one of {CONFIDENCE_MODES}, got {self.confidence_mode!r}"
            )
        if not 0.0 <= self.fixed_confidence <= 1.0:
            raise ValueError(f"fixed_confidence must be in [0, 1], got {self.fixed_confidence}")
        if self.edge_band_width <= 0:
            raise ValueError(f"edge_band_width must be > 0, got {self.edge_band_width}")
        if self.canny_low < 0 or self.canny_low > self.canny_high:
            raise ValueError(
                f"canny thresholds must satisfy 0 <= low <= high, got {self.canny_low}/{self.canny_high}"
            )
        if not 0.0 < self.approx_epsilon_pct < 1.0:
            raise ValueError(f"approx_epsilon_pct must be in (0, 1), got {self.approx_epsilon_pct}")
        return self

    def with_options(self, **options: Any) -> DetectionConfig:
        """Copy with the non-None keyword overrides applied."""
        updates = {k: v for k, v in options.items() if v is not None}
        return replace(self, **updates) if updates else self
