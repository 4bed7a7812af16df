"""
Data types for the Contour Extraction module.
"""

from dataclasses import dataclass

import cv2
import numpy as np


@dataclass(frozen=True)
class ExtractionConfig:
    """Configuration for grayscale, blur and edge detection."""

    blur_kernel_size: int = 5  # Gaussian kernel (odd), sigma derived from size
    canny_low_threshold: float = 75.0  # Hysteresis low threshold (0-255)
    canny_high_threshold: float = 200.0  # Hysteresis high threshold (0-255)
    close_kernel_size: int = 0  # Dilate+erode kernel, 0 disables
    retrieval_mode: str = "list"  # "list" (flat, all boundaries) or "external"
    channel_order: str = "bgr"  # Colour layout of 3/4 channel input


@dataclass(frozen=True)
class Contour:
    """
    A traced closed boundary found in an edge map.

    Attributes:
        points: Vertex array of shape (N, 2), float64, in image coordinates.
    """

    points: np.ndarray

    def __len__(self) -> int:
        return int(self.points.shape[0])

    @property
    def perimeter(self) -> float:
        """Closed arc length."""
        return float(cv2.arcLength(self.to_cv(), True))

    @property
    def area(self) -> float:
        """Absolute enclosed area."""
        return abs(float(cv2.contourArea(self.to_cv())))

    def to_cv(self) -> np.ndarray:
        """OpenCV contour layout: float32 array of shape (N, 1, 2)."""
        return self.points.astype(np.float32).reshape(-1, 1, 2)
