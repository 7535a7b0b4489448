"""Renderers for detection results — SVG overlay and text summary.

The overlay is a standalone SVG document the size of the source image:
bounding boxes, centroid markers and the label text at each centroid.
Nothing here touches the pixel buffer passed to detection beyond reading it
for the optional embedded background.
"""

from __future__ import annotations

import base64

import numpy as np
from numpy.typing import NDArray

from shapescan.engine.types import DetectionResult, ShapeLabel
from shapescan.imaging.loader import encode_png

_LABEL_COLORS = {
    ShapeLabel.CIRCLE: "#e6194b",
    ShapeLabel.TRIANGLE: "#3cb44b",
    ShapeLabel.RECTANGLE: "#4363d8",
    ShapeLabel.PENTAGON: "#f58231",
    ShapeLabel.STAR: "#911eb4",
}

# Label text starts this far left of the centroid
_LABEL_OFFSET_X = 20


def _svg_wrap(content: str, w: int, h: int) -> str:
    """Wrap SVG content in a standalone SVG document."""
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {w} {h}"'
        f' width="{w}" height="{h}">'
        f'\n{content}\n</svg>'
    )


def render_overlay_svg(result: DetectionResult, image: NDArray[np.uint8] | None = None) -> str:
    w, h = result.image_width, result.image_height
    parts: list[str] = []

    if image is not None:
        png = base64.b64encode(encode_png(image)).decode("ascii")
        parts.append(
            f'<image x="0" y="0" width="{w}" height="{h}" '
            f'href="data:image/png;base64,{png}"/>'
        )

    font_size = max(8.0, min(w, h) / 20)
    for shape in result.shapes:
        color = _LABEL_COLORS.get(shape.label, "#ffffff")
        b = shape.bbox
        cx, cy = shape.centroid
        parts.append(
            f'<rect x="{b.x}" y="{b.y}" width="{b.width}" height="{b.height}" '
            f'fill="none" stroke="{color}" stroke-width="1" stroke-opacity="0.9"/>'
        )
        parts.append(f'<circle cx="{cx:.1f}" cy="{cy:.1f}" r="2" fill="{color}"/>')
        parts.append(
            f'<text x="{cx - _LABEL_OFFSET_X:.1f}" y="{cy:.1f}" '
            f'font-family="monospace" font-size="{font_size:.1f}" '
            f'fill="{color}" font-weight="bold">{shape.label.value}</text>'
        )

    return _svg_wrap("\n".join(parts), w, h)


def render_summary(result: DetectionResult) -> str:
    lines = [
        f"{len(result.shapes)} shape(s) in {result.image_width}x{result.image_height} image "
        f"[{result.backend}, {result.processing_time_ms:.1f}ms]"
    ]
    for i, s in enumerate(result.shapes):
        cx, cy = s.centroid
        b = s.bbox
        lines.append(
            f"  #{i} {s.label.value:<9} conf={s.confidence:.2f} "
            f"centroid=({cx:.1f}, {cy:.1f}) bbox=({b.x}, {b.y}, {b.width}, {b.height}) "
            f"area={s.area} px={s.pixel_count}"
        )
    return "\n".join(lines)
