"""
Data types and structures for the scanning pipeline.

Provides type-safe containers for configuration and results.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import numpy as np

from src.common.types import Quadrilateral
from src.extraction.types import ExtractionConfig
from src.locator.types import LocatorConfig, PreviewConfig
from src.rectification.types import EnhancementConfig, RectificationConfig


class FailureReason(Enum):
    """Why a scan did not produce a rectified page."""

    NONE = "None"  # Detected and rectified (or detection-only success)
    INVALID_IMAGE = "Invalid Image"  # Empty, wrong dtype or channel layout
    NO_CONTOURS = "No Contours"  # Blank frame, no edges at all
    NO_QUADRILATERAL = "No Quadrilateral"  # Edges, but nothing 4-sided
    DEGENERATE_QUADRILATERAL = "Degenerate Quadrilateral"  # Coincident corners
    HOMOGRAPHY_FAILED = "Homography Failed"  # Singular correspondence


@dataclass(frozen=True)
class ScannerConfig:
    """Complete scanner configuration."""

    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    locator: LocatorConfig = field(default_factory=LocatorConfig)
    preview: PreviewConfig = field(default_factory=PreviewConfig)
    rectification: RectificationConfig = field(default_factory=RectificationConfig)
    enhancement: EnhancementConfig = field(default_factory=EnhancementConfig)

    @classmethod
    def default(cls) -> "ScannerConfig":
        """Create the built-in default configuration without reading a file."""
        return cls()


@dataclass(frozen=True)
class RectifiedResult:
    """
    Output of one detection/rectification attempt.

    Attributes:
        original: The input image, in whose coordinates the corners live.
        quadrilateral: Canonical corners, None if no document was found.
        rectified: Perspective-corrected page, None until rectification
            succeeds.
        failure_reason: Why no rectified page exists (NONE on success).
    """

    original: np.ndarray
    quadrilateral: Optional[Quadrilateral] = None
    rectified: Optional[np.ndarray] = None
    failure_reason: FailureReason = FailureReason.NONE

    def has_quadrilateral(self) -> bool:
        return self.quadrilateral is not None

    def is_rectified(self) -> bool:
        return self.rectified is not None

    @property
    def deliverable(self) -> np.ndarray:
        """The rectified page, or the original when rectification did not happen."""
        return self.rectified if self.rectified is not None else self.original

    def editable_corners(self) -> Quadrilateral:
        """Detected corners, or full-image corners for manual placement."""
        if self.quadrilateral is not None:
            return self.quadrilateral
        h, w = self.original.shape[:2]
        return Quadrilateral.full_image(w, h)

    def get_error_message(self) -> str:
        """Get human-readable status message."""
        if self.failure_reason == FailureReason.NONE:
            if self.is_rectified():
                return "Document detected and rectified"
            return "Document detected"

        reason_messages = {
            FailureReason.INVALID_IMAGE: "Input image could not be processed",
            FailureReason.NO_CONTOURS: "No edges found in image",
            FailureReason.NO_QUADRILATERAL: "No 4-sided document outline found",
            FailureReason.DEGENERATE_QUADRILATERAL: (
                "Corners are degenerate; original image kept"
            ),
            FailureReason.HOMOGRAPHY_FAILED: (
                "Perspective transform could not be solved; original image kept"
            ),
        }
        return reason_messages[self.failure_reason]
