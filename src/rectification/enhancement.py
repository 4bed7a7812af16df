"""
Document Enhancement

Optional clean-up applied to a rectified page:
- CLAHE on the lightness channel (shadows and uneven lighting, colour kept)
- Otsu binarization (black-and-white scan look)
"""

import logging
from typing import Optional

import cv2
import numpy as np

from src.extraction.contour_extractor import to_grayscale
from src.rectification.types import EnhancementConfig

logger = logging.getLogger(__name__)

_LAB_CONVERSIONS = {
    "bgr": (cv2.COLOR_BGR2LAB, cv2.COLOR_LAB2BGR),
    "rgb": (cv2.COLOR_RGB2LAB, cv2.COLOR_LAB2RGB),
}

ENHANCEMENT_METHODS = ("clahe", "binarize", "none")


def enhance_contrast(
    image: np.ndarray,
    clip_limit: float = 2.0,
    tile_grid_size: int = 8,
    channel_order: str = "bgr",
) -> np.ndarray:
    """
    Equalize local contrast without shifting colours.

    Colour images are converted to Lab, CLAHE is applied to L only, and the
    result is converted back. Grayscale images are equalized directly and an
    alpha channel, if present, is carried over untouched.

    Args:
        image: Rectified image, uint8, 1/3/4 channels.
        clip_limit: CLAHE contrast limit.
        tile_grid_size: CLAHE tiles per side.
        channel_order: "bgr" or "rgb" for colour input.

    Returns:
        New enhanced image with the same shape as the input.
    """
    clahe = cv2.createCLAHE(clipLimit=clip_limit, tileGridSize=(tile_grid_size, tile_grid_size))

    if image.ndim == 2 or image.shape[2] == 1:
        gray = image.reshape(image.shape[0], image.shape[1])
        return clahe.apply(gray).reshape(image.shape)

    to_lab, from_lab = _LAB_CONVERSIONS[channel_order.lower()]
    color = image[:, :, :3]
    lab = cv2.cvtColor(np.ascontiguousarray(color), to_lab)
    l_channel, a_channel, b_channel = cv2.split(lab)
    lab = cv2.merge([clahe.apply(l_channel), a_channel, b_channel])
    enhanced = cv2.cvtColor(lab, from_lab)

    if image.shape[2] == 4:
        enhanced = np.dstack([enhanced, image[:, :, 3]])

    return enhanced


def binarize(image: np.ndarray, channel_order: str = "bgr") -> np.ndarray:
    """
    Convert to a black-and-white page using Otsu's threshold.

    Returns:
        Single-channel uint8 image with values 0 or 255.

    Raises:
        ValueError: If the image cannot be converted to grayscale.
    """
    gray = to_grayscale(image, channel_order)
    if gray is None:
        raise ValueError("Invalid input image: cannot binarize")
    _, binary = cv2.threshold(gray, 0, 255, cv2.THRESH_BINARY | cv2.THRESH_OTSU)
    return binary


def enhance_document(
    image: np.ndarray,
    config: Optional[EnhancementConfig] = None,
    channel_order: str = "bgr",
) -> np.ndarray:
    """
    Apply the configured enhancement to a rectified page.

    Args:
        image: Rectified image.
        config: Enhancement method and CLAHE parameters.
        channel_order: Colour layout of the image.

    Returns:
        Enhanced image (the input itself when method is "none").
    """
    if config is None:
        config = EnhancementConfig()

    if config.method == "none":
        return image
    if config.method == "clahe":
        logger.debug("Applying CLAHE enhancement")
        return enhance_contrast(
            image,
            clip_limit=config.clahe_clip_limit,
            tile_grid_size=config.clahe_tile_grid_size,
            channel_order=channel_order,
        )
    if config.method == "binarize":
        logger.debug("Applying Otsu binarization")
        return binarize(image, channel_order)

    raise ValueError(
        f"Invalid enhancement method: {config.method}. "
        f"Must be one of {list(ENHANCEMENT_METHODS)}"
    )
