"""
Data types and errors for the Perspective Rectification module.
"""

from dataclasses import dataclass


class RectificationError(ValueError):
    """Base class for recoverable rectification failures."""


class DegenerateQuadrilateralError(RectificationError):
    """Corners coincide or the output would have no usable width/height."""


class HomographyError(RectificationError):
    """The 4-point correspondence system has no unique solution."""


@dataclass(frozen=True)
class RectificationConfig:
    """Configuration for homography warping."""

    interpolation: str = "linear"  # linear | cubic | nearest | area | lanczos
    border_mode: str = "replicate"  # replicate | constant | reflect
    min_output_size: int = 2  # Smallest accepted output width/height (px)
    min_corner_separation: float = 1.0  # Corners closer than this coincide (px)


@dataclass(frozen=True)
class EnhancementConfig:
    """Configuration for post-rectification enhancement."""

    method: str = "clahe"  # clahe | binarize | none
    clahe_clip_limit: float = 2.0
    clahe_tile_grid_size: int = 8
