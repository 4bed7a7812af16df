"""
Unit tests for analysis-resolution preview detection.
"""

import numpy as np
import pytest

from src.locator.corner_ordering import order_corners
from src.locator.preview import detect_preview_quadrilateral, downscale_for_analysis
from src.locator.types import PreviewConfig


class TestDownscaleForAnalysis:
    """Tests for downscale_for_analysis function."""

    def test_large_frame_is_downscaled(self, document_image):
        """Test that a frame larger than the limit is scaled down to fit."""
        analysis, scale = downscale_for_analysis(document_image, 640)

        assert analysis.shape == (480, 640, 3)
        assert scale == 0.8

    def test_small_frame_is_returned_unchanged(self, black_image):
        """Test that a frame within the limit is returned as is."""
        analysis, scale = downscale_for_analysis(black_image, 640)

        assert analysis is black_image
        assert scale == 1.0

    def test_non_positive_dimension_disables_scaling(self, document_image):
        """Test that a zero limit disables downscaling."""
        analysis, scale = downscale_for_analysis(document_image, 0)

        assert analysis is document_image
        assert scale == 1.0


class TestDetectPreviewQuadrilateral:
    """Tests for detect_preview_quadrilateral function."""

    def test_corners_mapped_back_to_full_resolution(
        self, document_image, document_corners, assert_corners_close
    ):
        """Test that corners are returned in full-resolution coordinates."""
        quad = detect_preview_quadrilateral(document_image)

        assert quad is not None
        assert_corners_close(order_corners(quad), document_corners, tol=10.0)

    def test_matches_full_resolution_detection(self, document_image):
        """Test that downscaled detection agrees with full-resolution detection."""
        downscaled = detect_preview_quadrilateral(document_image)
        full = detect_preview_quadrilateral(
            document_image, preview_config=PreviewConfig(analysis_max_dimension=0)
        )

        errors = np.linalg.norm(
            order_corners(downscaled).to_numpy() - order_corners(full).to_numpy(), axis=1
        )
        assert errors.max() <= 10.0

    def test_blank_frame(self, white_image):
        """Test that a blank frame yields no corners."""
        assert detect_preview_quadrilateral(white_image) is None

    def test_missing_frame(self):
        """Test that an absent or empty frame yields no corners."""
        assert detect_preview_quadrilateral(None) is None
        assert detect_preview_quadrilateral(np.zeros((0, 0, 3), dtype=np.uint8)) is None

    @pytest.mark.parametrize(
        "frame",
        [
            np.zeros((1000, 1000), dtype=bool),
            np.zeros((1000, 1000), dtype=np.int64),
            np.zeros((480, 640, 3), dtype=np.float32),
            np.zeros(10, dtype=np.uint8),
            np.zeros((480, 640, 2), dtype=np.uint8),
        ],
    )
    def test_unsupported_frame_yields_no_corners(self, frame):
        """Test that frames with unsupported dtype or shape return None instead of raising."""
        assert detect_preview_quadrilateral(frame) is None
