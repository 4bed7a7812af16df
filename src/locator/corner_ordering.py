"""
Corner Ordering

Canonicalizes four corner points to [top-left, top-right, bottom-right,
bottom-left] so that the rectifier maps each corner to the right place.
"""

import logging
import math
from typing import Sequence, Union

import numpy as np

from src.common.types import Quadrilateral

logger = logging.getLogger(__name__)


def order_corners(points: Union[np.ndarray, Sequence, Quadrilateral]) -> Quadrilateral:
    """
    Order 4 points as Top-Left, Top-Right, Bottom-Right, Bottom-Left.

    The algorithm:
    1. Compute the centroid of the four points.
    2. Sort points by atan2(y - cy, x - cx). With y growing downward this
       walks the corners clockwise on screen.
    3. Take the point with the smallest x + y as top-left.
    4. Rotate the sorted list so top-left comes first.

    The smallest-sum anchor is a heuristic: it is reliable only while the
    document is rotated less than about 45 degrees from upright. Past that
    the "top-left" handle moves to a different physical corner.

    Args:
        points: Four [x, y] points in any order, as an array-like of shape
            (4, 2) or a raw Quadrilateral.

    Returns:
        Canonical Quadrilateral.

    Raises:
        ValueError: If input does not contain exactly 4 finite points.

    Example:
        >>> quad = order_corners([[300, 150], [100, 200], [320, 400], [80, 380]])
        >>> quad.points[0]  # top-left
        Point(x=100.00, y=200.00)
    """
    if isinstance(points, Quadrilateral):
        pts = points.to_numpy()
    else:
        pts = np.array(points, dtype=np.float64)
        if pts.shape == (4, 1, 2):
            pts = pts.reshape(4, 2)

    if pts.shape != (4, 2):
        raise ValueError(
            f"Expected exactly 4 points with shape (4, 2), got shape {pts.shape}"
        )
    if not np.all(np.isfinite(pts)):
        raise ValueError("Corner coordinates must be finite")

    cx, cy = pts.mean(axis=0)

    # Python's sort is stable, so coincident angles keep input order
    by_angle = sorted(
        (tuple(p) for p in pts),
        key=lambda p: math.atan2(p[1] - cy, p[0] - cx),
    )

    tl_index = 0
    min_sum = math.inf
    for i, (x, y) in enumerate(by_angle):
        if x + y < min_sum:
            min_sum = x + y
            tl_index = i

    ordered = [by_angle[(tl_index + i) % 4] for i in range(4)]

    logger.debug(
        f"Ordered corners: TL={ordered[0]}, TR={ordered[1]}, "
        f"BR={ordered[2]}, BL={ordered[3]}"
    )

    return Quadrilateral.from_numpy(ordered, canonical=True)
