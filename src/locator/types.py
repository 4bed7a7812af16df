"""
Data types for the Document Locator module.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class LocatorConfig:
    """Configuration for the capture-time quadrilateral search."""

    approx_epsilon_ratio: float = 0.02  # Douglas-Peucker epsilon / perimeter
    require_convex: bool = False  # Capture path keeps self-intersecting quads
    min_area_ratio: float = 0.0  # Minimum quad area / image area
    max_area_ratio: float = 1.0  # Maximum quad area / image area


@dataclass(frozen=True)
class PreviewConfig:
    """Configuration for the per-frame live-preview detection."""

    approx_epsilon_ratio: float = 0.02
    min_area_ratio: float = 0.10  # Ignore small rectangles in the frame
    max_area_ratio: float = 0.95  # Ignore the whole-frame border
    close_kernel_size: int = 5  # Reconnect broken Canny edges
    analysis_max_dimension: int = 640  # Long side of the analysis copy
