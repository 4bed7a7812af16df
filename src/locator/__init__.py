"""
Document Locator

Finds the most plausible document-shaped contour and normalizes its corners.

Entry points:
1. find_document_quadrilateral - capture path, canonical corners
2. detect_largest_convex_quadrilateral - live preview, raw convex corners
3. order_corners - canonical [TL, TR, BR, BL] ordering
"""

from src.locator.corner_ordering import order_corners
from src.locator.preview import detect_preview_quadrilateral, downscale_for_analysis
from src.locator.quad_search import (
    approximate_polygon,
    detect_largest_convex_quadrilateral,
    find_document_quadrilateral,
    is_convex_polygon,
    polygon_area,
)
from src.locator.types import LocatorConfig, PreviewConfig

__all__ = [
    "find_document_quadrilateral",
    "detect_largest_convex_quadrilateral",
    "detect_preview_quadrilateral",
    "downscale_for_analysis",
    "order_corners",
    "approximate_polygon",
    "polygon_area",
    "is_convex_polygon",
    "LocatorConfig",
    "PreviewConfig",
]
