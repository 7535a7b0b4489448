"""ShapeScan command-line detector.

Usage:
    shapescan photo.png
    shapescan photo.png --backend contour --json
    shapescan photo.png --threshold 80 --min-region-size 120 --svg overlay.svg
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv

from shapescan.config import settings
from shapescan.engine.config import DetectionConfig
from shapescan.engine.pipeline import BACKENDS, detect
from shapescan.imaging.loader import ImageLoadError, load_image
from shapescan.imaging.render import render_overlay_svg, render_summary
from shapescan.models.responses import DetectResponse

logger = logging.getLogger("shapescan.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shapescan",
        description="Detect simple geometric shapes in a raster image.",
    )
    parser.add_argument("image", type=Path, help="Image file (PNG, JPEG, ...)")
    parser.add_argument(
        "--threshold", type=float, default=settings.default_gradient_threshold,
        help="Sobel gradient magnitude threshold (default: %(default)s)",
    )
    parser.add_argument(
        "--min-region-size", type=int, default=settings.default_min_region_size,
        help="Smallest edge region kept, in pixels (default: %(default)s)",
    )
    parser.add_argument(
        "--backend", choices=BACKENDS, default=settings.default_backend,
        help="Detector back end (default: %(default)s)",
    )
    parser.add_argument(
        "--confidence", choices=("fixed", "fit"), default="fixed",
        help="Confidence scoring (default: %(default)s)",
    )
    parser.add_argument("--json", action="store_true", help="Print JSON instead of a text summary")
    parser.add_argument("--svg", type=Path, default=None, help="Write an SVG overlay to this path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    level = logging.DEBUG if args.verbose else getattr(
        logging, settings.shapescan_log_level.upper(), logging.INFO
    )
    logging.basicConfig(level=level, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    try:
        image = load_image(args.image, max_pixels=settings.max_image_pixels)
    except ImageLoadError as e:
        print(f"shapescan: {e}", file=sys.stderr)
        return 1

    config = DetectionConfig(
        gradient_threshold=args.threshold,
        min_region_size=args.min_region_size,
        confidence_mode=args.confidence,
    )
    try:
        result = detect(image, config, backend=args.backend)
    except ValueError as e:
        print(f"shapescan: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(DetectResponse.from_result(result).model_dump(), indent=2))
    else:
        print(render_summary(result))

    if args.svg is not None:
        try:
            args.svg.write_text(render_overlay_svg(result, image), encoding="utf-8")
        except OSError as e:
            print(f"shapescan: cannot write {args.svg}: {e}", file=sys.stderr)
            return 1
        logger.info("Overlay written to %s", args.svg)

    return 0


if __name__ == "__main__":
    sys.exit(main())
