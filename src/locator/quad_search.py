"""
Quadrilateral Search

Finds the most plausible document outline among extracted contours.

Two entry points share one search core:
- ``find_document_quadrilateral``: capture-time path, returns canonical corners.
- ``detect_largest_convex_quadrilateral``: live-preview path, adds a
  convexity filter and area gates, returns raw corners.
"""

import dataclasses
import logging
from typing import Iterable, Optional, Tuple

import cv2
import numpy as np

from src.common.types import Quadrilateral
from src.extraction.contour_extractor import extract_contours
from src.extraction.types import Contour, ExtractionConfig
from src.locator.corner_ordering import order_corners
from src.locator.types import LocatorConfig, PreviewConfig

logger = logging.getLogger(__name__)


def approximate_polygon(contour: Contour, epsilon_ratio: float = 0.02) -> np.ndarray:
    """
    Simplify a contour with Douglas-Peucker.

    Args:
        contour: Closed contour to simplify.
        epsilon_ratio: Tolerance as a fraction of the contour's own perimeter.

    Returns:
        Vertex array of shape (K, 2), float64.
    """
    cv_points = contour.to_cv()
    perimeter = cv2.arcLength(cv_points, True)
    approx = cv2.approxPolyDP(cv_points, epsilon_ratio * perimeter, True)
    return approx.reshape(-1, 2).astype(np.float64)


def polygon_area(points: np.ndarray) -> float:
    """
    Absolute enclosed area of a polygon (shoelace formula).

    Args:
        points: Ordered vertices of shape (N, 2).
    """
    pts = np.asarray(points, dtype=np.float64)
    x, y = pts[:, 0], pts[:, 1]
    return float(abs(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))) / 2.0)


def is_convex_polygon(points: np.ndarray) -> bool:
    """
    Check if ordered vertices form a strictly convex polygon.

    A polygon is convex when the cross products of all consecutive edge
    pairs share one sign. Mixed signs mean a concave or self-intersecting
    outline; near-zero products mean collinear vertices and are rejected.

    Args:
        points: Ordered vertices of shape (N, 2), N >= 3.
    """
    pts = np.asarray(points, dtype=np.float64)
    n = len(pts)
    if n < 3:
        return False

    cross_products = []
    for i in range(n):
        v1 = pts[(i + 1) % n] - pts[i]
        v2 = pts[(i + 2) % n] - pts[(i + 1) % n]
        cross_products.append(v1[0] * v2[1] - v1[1] * v2[0])

    eps = 1e-6
    return all(cp > eps for cp in cross_products) or all(
        cp < -eps for cp in cross_products
    )


def _select_largest_quadrilateral(
    contours: Iterable[Contour],
    epsilon_ratio: float,
    require_convex: bool,
    min_area: float = 0.0,
    max_area: float = float("inf"),
) -> Tuple[Optional[np.ndarray], float]:
    """
    Shared search core for both detection paths.

    Returns the 4-vertex approximation with the largest area (first found
    wins on ties) and that area, or (None, 0.0).
    """
    best: Optional[np.ndarray] = None
    best_area = 0.0
    candidates = 0

    for contour in contours:
        if len(contour) < 4:
            continue

        approx = approximate_polygon(contour, epsilon_ratio)
        if len(approx) != 4:
            continue

        if require_convex and not is_convex_polygon(approx):
            continue

        candidates += 1
        area = polygon_area(approx)
        if area < min_area or area > max_area:
            continue

        if area > best_area:
            best_area = area
            best = approx

    logger.debug(
        f"Quadrilateral search: {candidates} candidates, "
        f"best area {best_area:.1f} (convex filter: {require_convex})"
    )
    return best, best_area


def find_document_quadrilateral(
    contours: Iterable[Contour],
    config: Optional[LocatorConfig] = None,
    image_shape: Optional[Tuple[int, ...]] = None,
) -> Optional[Quadrilateral]:
    """
    Pick the largest 4-sided contour and return its canonical corners.

    Args:
        contours: Candidate contours (any order).
        config: Search parameters. Uses defaults if None.
        image_shape: Shape of the source image. Required for the area-ratio
            gates to take effect.

    Returns:
        Canonical Quadrilateral, or None when no 4-vertex candidate exists.
        Callers fall back to ``Quadrilateral.full_image`` for manual editing.

    Example:
        >>> contours = extract_contours(image)
        >>> quad = find_document_quadrilateral(contours, image_shape=image.shape)
        >>> if quad is None:
        ...     quad = Quadrilateral.full_image(image.shape[1], image.shape[0])
    """
    if config is None:
        config = LocatorConfig()

    min_area, max_area = 0.0, float("inf")
    if image_shape is not None:
        image_area = float(image_shape[0] * image_shape[1])
        min_area = image_area * config.min_area_ratio
        max_area = image_area * config.max_area_ratio

    best, area = _select_largest_quadrilateral(
        contours,
        epsilon_ratio=config.approx_epsilon_ratio,
        require_convex=config.require_convex,
        min_area=min_area,
        max_area=max_area,
    )

    if best is None:
        logger.info("No 4-sided document candidate found")
        return None

    quad = order_corners(best)
    logger.info(f"Document quadrilateral found (area {area:.0f}px): {quad}")
    return quad


def detect_largest_convex_quadrilateral(
    image: np.ndarray,
    extraction_config: Optional[ExtractionConfig] = None,
    preview_config: Optional[PreviewConfig] = None,
) -> Optional[Quadrilateral]:
    """
    Live-preview detection: largest convex quadrilateral in a frame.

    Runs the same contour pipeline with outer-boundary retrieval and edge
    closing, keeps only convex 4-vertex approximations whose area lies
    between the preview area gates, and returns the raw corners (callers
    needing ordered corners call ``order_corners``).

    Args:
        image: Frame to analyze, usually a downscaled analysis copy.
        extraction_config: Base extraction parameters.
        preview_config: Preview thresholds. Uses defaults if None.

    Returns:
        Raw Quadrilateral in the frame's coordinates, or None.
    """
    if extraction_config is None:
        extraction_config = ExtractionConfig()
    if preview_config is None:
        preview_config = PreviewConfig()

    frame_config = dataclasses.replace(
        extraction_config,
        retrieval_mode="external",
        close_kernel_size=preview_config.close_kernel_size,
    )

    contours = extract_contours(image, frame_config)
    if not contours:
        return None

    image_area = float(image.shape[0] * image.shape[1])
    best, _ = _select_largest_quadrilateral(
        contours,
        epsilon_ratio=preview_config.approx_epsilon_ratio,
        require_convex=True,
        min_area=image_area * preview_config.min_area_ratio,
        max_area=image_area * preview_config.max_area_ratio,
    )

    if best is None:
        logger.debug("Preview: no convex quadrilateral in frame")
        return None

    return Quadrilateral.from_numpy(best)
