"""
Unit tests for the shared Pydantic types.
"""

import numpy as np
import pytest
from pydantic import ValidationError

from src.common.types import ImageBuffer, Point, Quadrilateral


class TestImageBuffer:
    """Tests for ImageBuffer validation."""

    def test_accepts_grayscale_and_color(self):
        """Test that 2-D and 3-channel uint8 arrays are accepted with the right dimensions."""
        gray = ImageBuffer(data=np.zeros((10, 20), dtype=np.uint8))
        color = ImageBuffer(data=np.zeros((10, 20, 3), dtype=np.uint8))

        assert gray.height == 10 and gray.width == 20
        assert gray.channels == 1 and gray.is_grayscale
        assert color.channels == 3 and not color.is_grayscale

    def test_accepts_single_channel_and_alpha(self):
        """Test that single-channel and 4-channel images are accepted."""
        assert ImageBuffer(data=np.zeros((4, 4, 1), dtype=np.uint8)).channels == 1
        assert ImageBuffer(data=np.zeros((4, 4, 4), dtype=np.uint8)).channels == 4

    @pytest.mark.parametrize(
        "array",
        [
            np.zeros((0, 0), dtype=np.uint8),  # Empty
            np.zeros((10, 10), dtype=np.float32),  # Wrong dtype
            np.zeros((10, 10, 2), dtype=np.uint8),  # Two channels
            np.zeros((2, 10, 10, 3), dtype=np.uint8),  # Batch
        ],
    )
    def test_rejects_invalid_arrays(self, array):
        """Test that empty, non-uint8, two-channel and batched arrays raise ValidationError."""
        with pytest.raises(ValidationError):
            ImageBuffer(data=array)

    def test_try_from_returns_none_for_invalid_input(self):
        """Test that try_from returns None instead of raising for unusable input."""
        assert ImageBuffer.try_from(None) is None
        assert ImageBuffer.try_from("image.jpg") is None
        assert ImageBuffer.try_from(np.zeros((5, 5), dtype=np.int16)) is None

    def test_try_from_wraps_valid_image(self):
        """Test that try_from wraps a valid image without copying it."""
        image = np.zeros((5, 6, 3), dtype=np.uint8)
        buffer = ImageBuffer.try_from(image)

        assert buffer is not None
        assert buffer.to_numpy() is image


class TestPoint:
    """Tests for Point."""

    def test_coordinates_are_floats(self):
        """Test that integer coordinates are stored as floats."""
        point = Point(x=np.int32(3), y=4)

        assert isinstance(point.x, float)
        assert point.to_tuple() == (3.0, 4.0)

    def test_rejects_non_finite_and_non_numeric(self):
        """Test that inf, nan, strings and booleans are rejected as coordinates."""
        with pytest.raises(ValidationError):
            Point(x=float("inf"), y=0)
        with pytest.raises(ValidationError):
            Point(x=float("nan"), y=0)
        with pytest.raises(ValidationError):
            Point(x="1", y=0)
        with pytest.raises(ValidationError):
            Point(x=True, y=0)

    def test_numpy_conversion(self):
        """Test conversion to and from a float64 numpy array."""
        point = Point.from_numpy(np.array([1.5, 2.5]))

        np.testing.assert_array_equal(point.to_numpy(), [1.5, 2.5])
        assert point.to_numpy().dtype == np.float64

    def test_from_numpy_rejects_wrong_shape(self):
        """Test that a 3-element array is rejected."""
        with pytest.raises(ValueError, match="shape"):
            Point.from_numpy(np.array([1.0, 2.0, 3.0]))

    def test_distance_and_scaling(self):
        """Test Euclidean distance and per-axis scaling."""
        a = Point(x=0, y=0)
        b = Point(x=3, y=4)

        assert a.distance_to(b) == pytest.approx(5.0)
        assert b.scaled(2.0, 0.5).to_tuple() == (6.0, 2.0)

    def test_is_immutable(self):
        """Test that points cannot be mutated after creation."""
        point = Point(x=1, y=2)
        with pytest.raises(ValidationError):
            point.x = 5


class TestQuadrilateral:
    """Tests for Quadrilateral."""

    def test_from_numpy_accepts_contour_layout(self):
        """Test that an OpenCV (4, 1, 2) contour array becomes a raw quadrilateral."""
        arr = np.array([[[0, 0]], [[10, 0]], [[10, 10]], [[0, 10]]], dtype=np.int32)
        quad = Quadrilateral.from_numpy(arr)

        assert quad.to_numpy().shape == (4, 2)
        assert quad.canonical is False

    @pytest.mark.parametrize("shape", [(3, 2), (5, 2), (4, 3), (8,)])
    def test_from_numpy_rejects_wrong_point_count(self, shape):
        """Test that arrays without exactly four 2-D points raise ValueError."""
        with pytest.raises(ValueError, match="Expected exactly 4 points"):
            Quadrilateral.from_numpy(np.zeros(shape))

    def test_full_image_corners(self):
        """Test that full-image corners span the whole image in canonical order."""
        quad = Quadrilateral.full_image(640, 480)

        assert quad.canonical is True
        assert quad.to_list() == [[0.0, 0.0], [640.0, 0.0], [640.0, 480.0], [0.0, 480.0]]

    def test_scaled_keeps_canonical_flag(self):
        """Test that uniform scaling keeps the canonical flag."""
        quad = Quadrilateral.full_image(100, 50).scaled(2.0)

        assert quad.canonical is True
        assert quad.to_list()[2] == [200.0, 100.0]

    def test_scaled_per_axis(self):
        """Test scaling with separate x and y factors."""
        quad = Quadrilateral.full_image(100, 50).scaled(2.0, 3.0)
        assert quad.to_list()[2] == [200.0, 150.0]

    def test_requires_exactly_four_points(self):
        """Test that constructing with three points raises ValidationError."""
        with pytest.raises(ValidationError):
            Quadrilateral(points=(Point(x=0, y=0), Point(x=1, y=0), Point(x=1, y=1)))
