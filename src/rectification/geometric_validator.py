"""
Geometric validation functions for the Rectification module.

Measures the ordered corners and rejects degenerate quadrilaterals before
any homography is solved.
"""

import logging
from itertools import combinations
from typing import Tuple, Union

import numpy as np

from src.common.types import Quadrilateral
from src.rectification.types import DegenerateQuadrilateralError

logger = logging.getLogger(__name__)


def _as_corner_array(corners: Union[Quadrilateral, np.ndarray, list]) -> np.ndarray:
    if isinstance(corners, Quadrilateral):
        return corners.to_numpy()
    arr = np.array(corners, dtype=np.float64)
    if arr.shape != (4, 2):
        raise ValueError(f"Expected 4 corners with shape (4, 2), got {arr.shape}")
    return arr


def calculate_edge_lengths(
    corners: Union[Quadrilateral, np.ndarray, list],
) -> Tuple[float, float, float, float]:
    """
    Calculate the length of all 4 edges of a quadrilateral.

    Args:
        corners: 4 corner points in order [TL, TR, BR, BL].

    Returns:
        Tuple of (top_edge, right_edge, bottom_edge, left_edge) lengths.

    Example:
        >>> points = np.array([[100, 100], [400, 100], [400, 200], [100, 200]])
        >>> top, right, bottom, left = calculate_edge_lengths(points)
        >>> print(f"Width: {top:.0f}, Height: {right:.0f}")
        Width: 300, Height: 100
    """
    tl, tr, br, bl = _as_corner_array(corners)

    top_edge = float(np.linalg.norm(tr - tl))
    right_edge = float(np.linalg.norm(tr - br))
    bottom_edge = float(np.linalg.norm(br - bl))
    left_edge = float(np.linalg.norm(tl - bl))

    logger.debug(
        f"Edge lengths - Top: {top_edge:.1f}, Right: {right_edge:.1f}, "
        f"Bottom: {bottom_edge:.1f}, Left: {left_edge:.1f}"
    )

    return top_edge, right_edge, bottom_edge, left_edge


def calculate_destination_size(
    corners: Union[Quadrilateral, np.ndarray, list],
) -> Tuple[int, int]:
    """
    Calculate the output (width, height) of the rectified document.

    The longer of each pair of opposite edges is used, so a foreshortened
    edge does not shrink the output. Values are truncated, not rounded,
    which can cost up to one pixel per axis.

    Args:
        corners: 4 corner points in order [TL, TR, BR, BL].

    Returns:
        Tuple of (width, height) in whole pixels.

    Example:
        >>> points = np.array([[0, 0], [500, 0], [500, 100.7], [0, 100.7]])
        >>> calculate_destination_size(points)
        (500, 100)
    """
    top, right, bottom, left = calculate_edge_lengths(corners)

    width = int(max(bottom, top))
    height = int(max(right, left))

    logger.debug(f"Destination size: {width} x {height}")

    return width, height


def check_quadrilateral(
    corners: Union[Quadrilateral, np.ndarray, list],
    min_output_size: int = 2,
    min_corner_separation: float = 1.0,
) -> Tuple[int, int]:
    """
    Reject quadrilaterals that cannot produce a valid transform.

    Args:
        corners: 4 corner points in order [TL, TR, BR, BL].
        min_output_size: Smallest accepted output width/height in pixels.
        min_corner_separation: Corners closer than this are coincident.

    Returns:
        Tuple of (width, height) of the destination rectangle.

    Raises:
        DegenerateQuadrilateralError: If two corners coincide or the
            destination width or height is below ``min_output_size``.
    """
    pts = _as_corner_array(corners)

    for i, j in combinations(range(4), 2):
        distance = float(np.linalg.norm(pts[i] - pts[j]))
        if distance < min_corner_separation:
            raise DegenerateQuadrilateralError(
                f"Corners {i} and {j} coincide (distance {distance:.2f}px)"
            )

    width, height = calculate_destination_size(pts)
    if width < min_output_size or height < min_output_size:
        raise DegenerateQuadrilateralError(
            f"Destination too small: width={width}, height={height} "
            f"(minimum {min_output_size}px)"
        )

    return width, height
