"""Tests for the detection pipeline and its detect() entry points."""

from __future__ import annotations

import asyncio

import numpy as np
import pytest

from shapescan.engine.config import DetectionConfig
from shapescan.engine.pipeline import Pipeline, create_pipeline, detect, detect_async
from shapescan.engine.types import InvalidImageError, ShapeLabel
from tests.conftest import TRIANGLE_VERTICES, blank_image, draw_disk, draw_square, draw_triangle


class TestScenarios:
    def test_single_triangle(self, triangle_image):
        result = detect(triangle_image)

        assert len(result.shapes) == 1
        shape = result.shapes[0]
        assert shape.label is ShapeLabel.TRIANGLE
        xs = [v[0] for v in TRIANGLE_VERTICES]
        ys = [v[1] for v in TRIANGLE_VERTICES]
        b = shape.bbox
        assert abs(b.x - min(xs)) <= 3
        assert abs(b.y - min(ys)) <= 3
        assert abs(b.x2 - max(xs)) <= 3
        assert abs(b.y2 - max(ys)) <= 3

    def test_empty_image(self, empty_image):
        result = detect(empty_image)
        assert result.shapes == ()
        assert (result.image_width, result.image_height) == (200, 200)

    def test_noise_rejected(self, noise_image):
        assert detect(noise_image).shapes == ()

    def test_two_disjoint_shapes(self, two_squares_image):
        result = detect(two_squares_image)

        assert len(result.shapes) == 2
        a, b = result.shapes
        assert not a.bbox.overlaps(b.bbox)

    def test_square_geometry(self, square_image):
        (shape,) = detect(square_image).shapes

        assert shape.pixel_count == 480
        assert shape.label is ShapeLabel.RECTANGLE
        assert shape.bbox.as_list() == [69, 69, 61, 61]
        assert shape.area == 61 * 61
        assert shape.centroid == pytest.approx((99.5, 99.5))


class TestProperties:
    def test_deterministic(self, two_squares_image):
        draw_triangle(two_squares_image, TRIANGLE_VERTICES)
        first = detect(two_squares_image)
        second = detect(two_squares_image)
        assert first.shapes_equal(second)

    def test_centroid_inside_bbox(self):
        img = blank_image(240, 240)
        draw_square(img, 20, 20, 40)
        draw_triangle(img, [(150, 30), (210, 30), (180, 90)])
        draw_disk(img, 80, 170, 30)
        result = detect(img)

        assert len(result.shapes) == 3
        for s in result.shapes:
            assert s.bbox.width >= 0 and s.bbox.height >= 0
            assert s.bbox.contains(*s.centroid)
            assert 0.0 <= s.confidence <= 1.0

    def test_input_not_mutated(self, square_image):
        before = square_image.copy()
        detect(square_image)
        assert np.array_equal(square_image, before)

    def test_regions_emitted_in_scan_order(self, two_squares_image):
        a, b = detect(two_squares_image).shapes
        assert (a.bbox.y, a.bbox.x) < (b.bbox.y, b.bbox.x)


class TestOptions:
    def test_min_region_size_override(self, two_squares_image):
        # Each 20 px square leaves a 160 px edge ring
        assert len(detect(two_squares_image, min_region_size=160).shapes) == 2
        assert detect(two_squares_image, min_region_size=161).shapes == ()

    def test_gradient_threshold_override(self):
        img = draw_square(blank_image(), 70, 70, 60, color=(230, 230, 230))
        # Step of 25 → magnitude 100 on straight runs
        assert len(detect(img).shapes) == 0
        assert len(detect(img, gradient_threshold=50).shapes) == 1

    def test_invalid_config(self, square_image):
        with pytest.raises(ValueError):
            detect(square_image, min_region_size=0)
        with pytest.raises(ValueError):
            Pipeline(DetectionConfig(confidence_mode="guess"))

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            create_pipeline(backend="opencv")

    def test_async_matches_sync(self, square_image):
        sync = detect(square_image)
        result = asyncio.run(detect_async(square_image))
        assert result.shapes_equal(sync)
        assert result.processing_time_ms >= 0


class TestInvalidInput:
    def test_wrong_channel_count(self):
        with pytest.raises(InvalidImageError):
            detect(np.zeros((10, 10, 3), dtype=np.uint8))

    def test_zero_dimension(self):
        with pytest.raises(InvalidImageError):
            detect(np.zeros((0, 10, 4), dtype=np.uint8))

    def test_wrong_dtype(self):
        with pytest.raises(InvalidImageError):
            detect(np.zeros((10, 10, 4), dtype=np.float32))

    def test_not_an_array(self):
        with pytest.raises(InvalidImageError):
            detect([[0, 0, 0, 255]])

    def test_single_pixel_is_valid(self):
        result = detect(np.full((1, 1, 4), 255, dtype=np.uint8))
        assert result.shapes == ()
        assert (result.image_width, result.image_height) == (1, 1)
