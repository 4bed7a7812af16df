"""
Contour Extraction

Converts a raw raster image into candidate closed contours:
grayscale -> Gaussian blur -> Canny edges -> (optional close) -> findContours.

An image that cannot be processed produces an empty list. "No contours" is a
normal outcome (a blank wall, a black frame), not an error.
"""

import logging
from typing import List, Optional

import cv2
import numpy as np

from src.common.types import ImageBuffer
from src.extraction.types import Contour, ExtractionConfig

logger = logging.getLogger(__name__)

_RETRIEVAL_MODES = {
    "list": cv2.RETR_LIST,
    "external": cv2.RETR_EXTERNAL,
}

_GRAY_CONVERSIONS = {
    ("bgr", 3): cv2.COLOR_BGR2GRAY,
    ("bgr", 4): cv2.COLOR_BGRA2GRAY,
    ("rgb", 3): cv2.COLOR_RGB2GRAY,
    ("rgb", 4): cv2.COLOR_RGBA2GRAY,
}


def to_grayscale(image: np.ndarray, channel_order: str = "bgr") -> Optional[np.ndarray]:
    """
    Convert an image to a single-channel uint8 grayscale copy.

    Args:
        image: Image of shape (H, W), (H, W, 1), (H, W, 3) or (H, W, 4).
        channel_order: "bgr" (OpenCV convention) or "rgb".

    Returns:
        New grayscale array of shape (H, W), or None if the image is not
        processable (None, empty, wrong shape/dtype, unknown channel order).
    """
    buffer = ImageBuffer.try_from(image)
    if buffer is None:
        logger.warning("Cannot convert image to grayscale: not a valid uint8 image")
        return None

    if buffer.channels == 1:
        return buffer.data.reshape(buffer.height, buffer.width).copy()

    conversion = _GRAY_CONVERSIONS.get((channel_order.lower(), buffer.channels))
    if conversion is None:
        logger.warning(f"Unsupported channel order: {channel_order}")
        return None

    return cv2.cvtColor(buffer.data, conversion)


def detect_edges(gray: np.ndarray, config: ExtractionConfig) -> np.ndarray:
    """
    Blur a grayscale image and run Canny edge detection on it.

    Args:
        gray: Single-channel uint8 image.
        config: Blur kernel, Canny thresholds and optional close kernel.

    Returns:
        Binary edge map (uint8, 0 or 255) of the same size.
    """
    k = config.blur_kernel_size
    blurred = cv2.GaussianBlur(gray, (k, k), 0)
    edges = cv2.Canny(blurred, config.canny_low_threshold, config.canny_high_threshold)

    # Close small gaps so thin edges form connected boundaries
    if config.close_kernel_size > 0:
        kernel = cv2.getStructuringElement(
            cv2.MORPH_RECT, (config.close_kernel_size, config.close_kernel_size)
        )
        edges = cv2.dilate(edges, kernel)
        edges = cv2.erode(edges, kernel)

    return edges


def extract_contours(
    image: np.ndarray, config: Optional[ExtractionConfig] = None
) -> List[Contour]:
    """
    Turn an image into a flat list of candidate closed contours.

    Args:
        image: Decoded image (grayscale, BGR/RGB or with alpha), uint8.
        config: Extraction parameters. Uses defaults if None
            (5x5 blur, Canny 75/200, flat retrieval).

    Returns:
        Contours in detection order (arbitrary). Empty if the image is not
        processable or contains no edges.

    Example:
        >>> image = cv2.imread("receipt.jpg")
        >>> contours = extract_contours(image)
        >>> print(f"Found {len(contours)} contours")
    """
    if config is None:
        config = ExtractionConfig()

    gray = to_grayscale(image, config.channel_order)
    if gray is None:
        return []

    mode = _RETRIEVAL_MODES.get(config.retrieval_mode)
    if mode is None:
        raise ValueError(
            f"Invalid retrieval_mode: {config.retrieval_mode}. "
            f"Must be one of {list(_RETRIEVAL_MODES)}"
        )

    edges = detect_edges(gray, config)
    raw_contours, _ = cv2.findContours(edges, mode, cv2.CHAIN_APPROX_SIMPLE)

    contours = [
        Contour(points=c.reshape(-1, 2).astype(np.float64))
        for c in raw_contours
        if len(c) > 0
    ]

    logger.debug(
        f"Extracted {len(contours)} contours from {gray.shape[1]}x{gray.shape[0]} image"
    )
    return contours
