"""
Unit tests for contour extraction.
"""

import cv2
import numpy as np
import pytest

from src.extraction.contour_extractor import detect_edges, extract_contours, to_grayscale
from src.extraction.types import Contour, ExtractionConfig


class TestToGrayscale:
    """Tests for to_grayscale function."""

    def test_bgr_image(self):
        """Test luminance conversion of a pure red BGR image."""
        image = np.zeros((20, 30, 3), dtype=np.uint8)
        image[:, :, 2] = 255  # Pure red in BGR

        gray = to_grayscale(image, "bgr")

        assert gray.shape == (20, 30)
        # Red weight is ~0.299
        assert 70 <= gray[0, 0] <= 80

    def test_rgb_order_changes_weights(self):
        """Test that the channel order selects which channel gets the red weight."""
        image = np.zeros((5, 5, 3), dtype=np.uint8)
        image[:, :, 0] = 255

        bgr_gray = to_grayscale(image, "bgr")
        rgb_gray = to_grayscale(image, "rgb")

        assert bgr_gray[0, 0] < rgb_gray[0, 0]

    def test_alpha_is_dropped(self):
        """Test that the alpha channel is ignored during conversion."""
        image = np.full((10, 10, 4), 128, dtype=np.uint8)
        gray = to_grayscale(image)

        assert gray.shape == (10, 10)
        assert gray[0, 0] == 128

    def test_single_channel_returns_copy(self):
        """Test that a single-channel image is returned as an independent 2-D copy."""
        image = np.full((10, 10, 1), 42, dtype=np.uint8)
        gray = to_grayscale(image)

        assert gray.shape == (10, 10)
        gray[0, 0] = 0
        assert image[0, 0, 0] == 42

    @pytest.mark.parametrize(
        "image",
        [
            None,
            np.zeros((0, 0, 3), dtype=np.uint8),
            np.zeros((10, 10, 3), dtype=np.float64),
            np.zeros((10, 10, 2), dtype=np.uint8),
        ],
    )
    def test_invalid_images_return_none(self, image):
        """Test that unusable images return None."""
        assert to_grayscale(image) is None

    def test_unknown_channel_order_returns_none(self):
        """Test that an unknown channel order returns None."""
        assert to_grayscale(np.zeros((5, 5, 3), dtype=np.uint8), "hsv") is None


class TestDetectEdges:
    """Tests for detect_edges function."""

    def test_edge_map_is_binary(self, document_image):
        """Test that the edge map only holds 0 and 255."""
        gray = to_grayscale(document_image)
        edges = detect_edges(gray, ExtractionConfig())

        assert edges.shape == gray.shape
        assert set(np.unique(edges)) <= {0, 255}
        assert edges.max() == 255

    def test_uniform_image_has_no_edges(self, white_image):
        """Test that a uniform image yields an empty edge map."""
        edges = detect_edges(to_grayscale(white_image), ExtractionConfig())
        assert edges.max() == 0

    def test_closing_does_not_remove_edges(self, document_image):
        """Test that morphological closing never reduces the edge pixel count."""
        gray = to_grayscale(document_image)
        plain = detect_edges(gray, ExtractionConfig())
        closed = detect_edges(gray, ExtractionConfig(close_kernel_size=5))

        assert np.count_nonzero(closed) >= np.count_nonzero(plain)


class TestExtractContours:
    """Tests for extract_contours function."""

    def test_document_produces_contours(self, document_image):
        """Test that a document image yields float64 (N, 2) contours."""
        contours = extract_contours(document_image)

        assert len(contours) > 0
        for contour in contours:
            assert isinstance(contour, Contour)
            assert contour.points.ndim == 2 and contour.points.shape[1] == 2
            assert contour.points.dtype == np.float64

    def test_blank_images_produce_no_contours(self, black_image, white_image):
        """Test that black and white images yield no contours."""
        assert extract_contours(black_image) == []
        assert extract_contours(white_image) == []

    def test_invalid_image_produces_empty_list(self):
        """Test that invalid images yield an empty list instead of raising."""
        assert extract_contours(None) == []
        assert extract_contours(np.zeros((10, 10, 3), dtype=np.float32)) == []

    def test_external_mode_returns_outer_boundaries_only(self, document_image):
        """Test that external retrieval returns no more contours than list retrieval."""
        all_contours = extract_contours(document_image)
        outer = extract_contours(
            document_image, ExtractionConfig(retrieval_mode="external")
        )

        assert 0 < len(outer) <= len(all_contours)

    def test_grayscale_input(self, document_image):
        """Test contour extraction from a grayscale image."""
        gray = cv2.cvtColor(document_image, cv2.COLOR_BGR2GRAY)
        assert len(extract_contours(gray)) > 0

    def test_invalid_retrieval_mode_raises(self, document_image):
        """Test that an unsupported retrieval mode raises ValueError."""
        with pytest.raises(ValueError, match="retrieval_mode"):
            extract_contours(document_image, ExtractionConfig(retrieval_mode="tree"))


class TestContour:
    """Tests for the Contour value type."""

    def test_square_measurements(self):
        """Test length, perimeter and area of a square contour."""
        contour = Contour(
            points=np.array([[0, 0], [10, 0], [10, 10], [0, 10]], dtype=np.float64)
        )

        assert len(contour) == 4
        assert contour.perimeter == pytest.approx(40.0)
        assert contour.area == pytest.approx(100.0)

    def test_opencv_layout(self):
        """Test conversion to the OpenCV (N, 1, 2) float32 layout."""
        contour = Contour(points=np.array([[1, 2], [3, 4], [5, 6]], dtype=np.float64))
        cv_points = contour.to_cv()

        assert cv_points.shape == (3, 1, 2)
        assert cv_points.dtype == np.float32
