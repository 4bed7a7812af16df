"""
Homography Solver

Solves the 3x3 projective transform that maps four source points onto four
destination points, using the standard 8-unknown linear system with h33 = 1.
"""

import logging
from typing import Union

import numpy as np

from src.rectification.types import HomographyError

logger = logging.getLogger(__name__)


def solve_homography(
    src: Union[np.ndarray, list], dst: Union[np.ndarray, list]
) -> np.ndarray:
    """
    Compute the homography H with dst ~ H @ [x, y, 1] for 4 correspondences.

    Each pair (x, y) -> (u, v) contributes two rows:
        [x, y, 1, 0, 0, 0, -u*x, -u*y] . h = u
        [0, 0, 0, x, y, 1, -v*x, -v*y] . h = v

    Args:
        src: Source points, shape (4, 2).
        dst: Destination points, shape (4, 2).

    Returns:
        3x3 float64 matrix with H[2, 2] == 1.

    Raises:
        ValueError: If inputs are not shaped (4, 2).
        HomographyError: If the system is singular (three collinear or
            duplicate points on either side).

    Example:
        >>> src = [[10, 10], [110, 20], [100, 120], [5, 100]]
        >>> dst = [[0, 0], [99, 0], [99, 99], [0, 99]]
        >>> H = solve_homography(src, dst)
    """
    src = np.asarray(src, dtype=np.float64)
    dst = np.asarray(dst, dtype=np.float64)
    if src.shape != (4, 2) or dst.shape != (4, 2):
        raise ValueError(
            f"Expected source and destination of shape (4, 2), "
            f"got {src.shape} and {dst.shape}"
        )

    a = np.zeros((8, 8), dtype=np.float64)
    b = np.zeros(8, dtype=np.float64)
    for i, ((x, y), (u, v)) in enumerate(zip(src, dst)):
        a[2 * i] = [x, y, 1.0, 0.0, 0.0, 0.0, -u * x, -u * y]
        a[2 * i + 1] = [0.0, 0.0, 0.0, x, y, 1.0, -v * x, -v * y]
        b[2 * i] = u
        b[2 * i + 1] = v

    # Rank check catches near-singular systems that solve() would accept
    if np.linalg.matrix_rank(a) < 8:
        raise HomographyError(
            "Point correspondence is singular: source or destination "
            "contains collinear or duplicate points"
        )

    try:
        h = np.linalg.solve(a, b)
    except np.linalg.LinAlgError as e:
        raise HomographyError(f"Homography solve failed: {e}") from e

    matrix = np.append(h, 1.0).reshape(3, 3)
    if not np.all(np.isfinite(matrix)) or np.linalg.matrix_rank(matrix) < 3:
        raise HomographyError("Homography is not invertible")

    logger.debug(f"Homography matrix:\n{matrix}")
    return matrix


def apply_homography(matrix: np.ndarray, points: Union[np.ndarray, list]) -> np.ndarray:
    """
    Map points through a homography.

    Args:
        matrix: 3x3 projective transform.
        points: Points of shape (N, 2).

    Returns:
        Transformed points of shape (N, 2), float64.
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    homogeneous = np.hstack([pts, np.ones((len(pts), 1))]) @ matrix.T
    return homogeneous[:, :2] / homogeneous[:, 2:3]
