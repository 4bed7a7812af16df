"""
Perspective Rectification

Warps the document region bounded by a canonical quadrilateral into an
upright, axis-aligned rectangle whose size is measured from the corners.
"""

import logging
from typing import Optional

import cv2
import numpy as np

from src.common.types import ImageBuffer, Quadrilateral
from src.rectification.geometric_validator import check_quadrilateral
from src.rectification.homography import solve_homography
from src.rectification.types import RectificationConfig

logger = logging.getLogger(__name__)

INTERPOLATION_FLAGS = {
    "linear": cv2.INTER_LINEAR,
    "cubic": cv2.INTER_CUBIC,
    "nearest": cv2.INTER_NEAREST,
    "area": cv2.INTER_AREA,
    "lanczos": cv2.INTER_LANCZOS4,
}

BORDER_MODES = {
    "replicate": cv2.BORDER_REPLICATE,
    "constant": cv2.BORDER_CONSTANT,
    "reflect": cv2.BORDER_REFLECT,
}


def destination_rectangle(width: int, height: int) -> np.ndarray:
    """Corners (0,0), (W-1,0), (W-1,H-1), (0,H-1) as a (4, 2) array."""
    return np.array(
        [
            [0, 0],  # Top-Left
            [width - 1, 0],  # Top-Right
            [width - 1, height - 1],  # Bottom-Right
            [0, height - 1],  # Bottom-Left
        ],
        dtype=np.float64,
    )


def rectify(
    image: np.ndarray,
    quad: Quadrilateral,
    config: Optional[RectificationConfig] = None,
) -> np.ndarray:
    """
    Produce a top-down rendering of the document bounded by ``quad``.

    Args:
        image: Source image (H, W) or (H, W, C), uint8. Not modified.
        quad: Canonical quadrilateral in the source image's coordinates.
        config: Interpolation, border handling and degenerate-quad limits.

    Returns:
        New image of size W x H where W is the longer of the top/bottom
        edges and H the longer of the left/right edges (both truncated).

    Raises:
        ValueError: If the image is invalid or ``quad`` is not canonical.
        DegenerateQuadrilateralError: If corners coincide or the output
            would be narrower than ``config.min_output_size``.
        HomographyError: If the corner correspondence is singular.

    Example:
        >>> quad = order_corners([[120, 180], [450, 165], [470, 250], [100, 270]])
        >>> flat = rectify(image, quad)
    """
    if config is None:
        config = RectificationConfig()

    if ImageBuffer.try_from(image) is None:
        raise ValueError("Invalid input image: image is None, empty or not uint8")

    if not isinstance(quad, Quadrilateral) or not quad.canonical:
        raise ValueError(
            "rectify requires a canonical Quadrilateral; call order_corners first"
        )

    interpolation = INTERPOLATION_FLAGS.get(config.interpolation)
    if interpolation is None:
        raise ValueError(f"Invalid interpolation: {config.interpolation}")
    border_mode = BORDER_MODES.get(config.border_mode)
    if border_mode is None:
        raise ValueError(f"Invalid border_mode: {config.border_mode}")

    src = quad.to_numpy()
    width, height = check_quadrilateral(
        src,
        min_output_size=config.min_output_size,
        min_corner_separation=config.min_corner_separation,
    )

    matrix = solve_homography(src, destination_rectangle(width, height))

    rectified = cv2.warpPerspective(
        image, matrix, (width, height), flags=interpolation, borderMode=border_mode
    )

    logger.info(f"Rectified document to {width}x{height} rectangle")
    return rectified
