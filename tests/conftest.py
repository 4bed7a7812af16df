"""
Pytest Configuration and Shared Fixtures

This file contains pytest configuration and fixtures that are available
to all test modules.
"""

import numpy as np
import pytest

# Ground-truth corners of the synthetic document [TL, TR, BR, BL]
DOCUMENT_CORNERS = np.array(
    [[150, 100], [650, 130], [630, 500], [170, 470]], dtype=np.float64
)


def _assert_corners_close(quad, expected, tol=6.0):
    actual = quad.to_numpy()
    errors = np.linalg.norm(actual - np.asarray(expected, dtype=np.float64), axis=1)
    assert errors.max() <= tol, f"Corner errors {errors} exceed {tol}px: {actual}"


@pytest.fixture
def assert_corners_close():
    """Checker asserting every canonical corner lies within ``tol`` px of the expected one."""
    return _assert_corners_close


@pytest.fixture
def sample_quadrilateral_points():
    """Fixture providing sample 4-corner points in scrambled order."""
    return np.array(
        [
            [300, 150],  # Top-right area
            [100, 200],  # Top-left area
            [320, 400],  # Bottom-right area
            [80, 380],  # Bottom-left area
        ],
        dtype=np.float64,
    )


@pytest.fixture
def document_image():
    """A bright, slightly skewed page on a dark uniform background."""
    import cv2

    image = np.full((600, 800, 3), 30, dtype=np.uint8)
    cv2.fillPoly(image, [DOCUMENT_CORNERS.astype(np.int32)], (230, 230, 230))
    return image


@pytest.fixture
def document_corners():
    """Ground-truth corners of ``document_image`` in canonical order."""
    return DOCUMENT_CORNERS.copy()


@pytest.fixture
def black_image():
    return np.zeros((480, 640, 3), dtype=np.uint8)


@pytest.fixture
def white_image():
    return np.full((480, 640, 3), 255, dtype=np.uint8)


@pytest.fixture
def warped_document():
    """
    A 300x200 page (left half dark, right half light) warped into perspective.

    Returns:
        Tuple of (warped image, warped corners [TL, TR, BR, BL]).
    """
    import cv2

    page = np.full((200, 300, 3), 220, dtype=np.uint8)
    page[:, :150] = 40

    src = np.array([[0, 0], [299, 0], [299, 199], [0, 199]], dtype=np.float32)
    dst = np.array([[100, 80], [420, 100], [410, 300], [90, 290]], dtype=np.float32)
    matrix = cv2.getPerspectiveTransform(src, dst)

    canvas = cv2.warpPerspective(page, matrix, (560, 420), flags=cv2.INTER_LINEAR)
    return canvas, dst.astype(np.float64)
