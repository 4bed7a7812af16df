"""
Perspective Rectification

Transforms a document bounded by an ordered quadrilateral into a rectangular
top-down view.

Pipeline stages:
1. Geometric validation (edge lengths, degenerate-quad guard)
2. Homography solve (4-point correspondence)
3. Resampling (bilinear warp)
4. Optional enhancement (CLAHE or binarization)
"""

from src.rectification.enhancement import binarize, enhance_contrast, enhance_document
from src.rectification.geometric_validator import (
    calculate_destination_size,
    calculate_edge_lengths,
    check_quadrilateral,
)
from src.rectification.homography import apply_homography, solve_homography
from src.rectification.image_rectification import destination_rectangle, rectify
from src.rectification.types import (
    DegenerateQuadrilateralError,
    EnhancementConfig,
    HomographyError,
    RectificationConfig,
    RectificationError,
)

__all__ = [
    "rectify",
    "destination_rectangle",
    "solve_homography",
    "apply_homography",
    "calculate_edge_lengths",
    "calculate_destination_size",
    "check_quadrilateral",
    "enhance_document",
    "enhance_contrast",
    "binarize",
    "RectificationConfig",
    "EnhancementConfig",
    "RectificationError",
    "DegenerateQuadrilateralError",
    "HomographyError",
]
