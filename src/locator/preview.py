"""
Preview Detection at Analysis Resolution

Runs the live-preview detection on a downscaled copy of a frame and maps
the corners back onto the full-resolution coordinate space.
"""

import logging
from typing import Optional, Tuple

import cv2
import numpy as np

from src.common.types import ImageBuffer, Quadrilateral
from src.extraction.types import ExtractionConfig
from src.locator.quad_search import detect_largest_convex_quadrilateral
from src.locator.types import PreviewConfig

logger = logging.getLogger(__name__)


def downscale_for_analysis(
    image: np.ndarray, max_dimension: int
) -> Tuple[np.ndarray, float]:
    """
    Shrink an image so its long side is at most ``max_dimension``.

    Args:
        image: Full-resolution image.
        max_dimension: Target long side in pixels. Values <= 0 disable scaling.

    Returns:
        Tuple of (analysis image, scale) where scale = analysis / full size.
        The original array is returned unchanged when no scaling is needed.
    """
    h, w = image.shape[:2]
    long_side = max(h, w)
    if max_dimension <= 0 or long_side <= max_dimension:
        return image, 1.0

    scale = max_dimension / long_side
    analysis = cv2.resize(image, None, fx=scale, fy=scale, interpolation=cv2.INTER_AREA)
    return analysis, scale


def detect_preview_quadrilateral(
    image: np.ndarray,
    extraction_config: Optional[ExtractionConfig] = None,
    preview_config: Optional[PreviewConfig] = None,
) -> Optional[Quadrilateral]:
    """
    Detect the preview quadrilateral of a full-resolution frame.

    Args:
        image: Full-resolution frame.
        extraction_config: Base extraction parameters.
        preview_config: Preview thresholds and analysis resolution.

    Returns:
        Raw Quadrilateral in the full-resolution coordinate space, or None.
    """
    if preview_config is None:
        preview_config = PreviewConfig()
    if ImageBuffer.try_from(image) is None:
        logger.debug("Preview skipped: frame is not a processable image")
        return None

    analysis, scale = downscale_for_analysis(image, preview_config.analysis_max_dimension)
    quad = detect_largest_convex_quadrilateral(analysis, extraction_config, preview_config)
    if quad is None:
        return None

    if scale != 1.0:
        # Use exact per-axis ratios since resize rounds the analysis size
        sx = image.shape[1] / analysis.shape[1]
        sy = image.shape[0] / analysis.shape[0]
        quad = quad.scaled(sx, sy)
        logger.debug(f"Preview corners scaled by ({sx:.3f}, {sy:.3f})")

    return quad
