"""
Main processor for the document scanner.

Orchestrates the complete pipeline:
1. Contour extraction (grayscale, blur, Canny, findContours)
2. Document location (largest quadrilateral, canonical corners)
3. Perspective rectification (homography warp)
4. Enhancement (CLAHE or binarization)

Every failure is recoverable: detection failure leaves the corners empty so
the caller can offer full-image corners, and rectification failure keeps the
original image as the deliverable.
"""

import dataclasses
import logging
from pathlib import Path
from typing import Optional

import numpy as np

from src.common.types import ImageBuffer, Quadrilateral
from src.extraction.contour_extractor import extract_contours
from src.locator.corner_ordering import order_corners
from src.locator.preview import detect_preview_quadrilateral
from src.locator.quad_search import find_document_quadrilateral
from src.pipeline.config_loader import load_config
from src.pipeline.types import FailureReason, RectifiedResult, ScannerConfig
from src.rectification.enhancement import enhance_document
from src.rectification.image_rectification import rectify
from src.rectification.types import DegenerateQuadrilateralError, HomographyError

logger = logging.getLogger(__name__)


class DocumentScanner:
    """
    Detects and rectifies a document in a photographed image.

    The scanner holds only its configuration, so one instance can be shared
    across threads working on independent images.

    Example:
        >>> scanner = DocumentScanner()
        >>> image = cv2.imread("receipt.jpg")
        >>> result = scanner.scan(image)
        >>> cv2.imwrite("receipt_scan.png", result.deliverable)
    """

    def __init__(
        self,
        config: Optional[ScannerConfig] = None,
        config_path: Optional[Path] = None,
    ):
        """
        Initialize the scanner.

        Args:
            config: Pre-loaded configuration object. If None, will load from file.
            config_path: Path to config file. If None, uses default location.
        """
        if config is not None:
            self.config = config
            logger.info("Using provided configuration")
        else:
            self.config = load_config(config_path) if config_path else load_config()
            logger.info("Loaded configuration from file")

    def detect(self, image: np.ndarray) -> RectifiedResult:
        """
        Locate the document and return its canonical corners.

        Args:
            image: Decoded image (grayscale, BGR/RGB, or with alpha).

        Returns:
            RectifiedResult with ``quadrilateral`` set on success, otherwise
            with the failure reason (INVALID_IMAGE, NO_CONTOURS,
            NO_QUADRILATERAL). Never raises for a bad image.
        """
        if ImageBuffer.try_from(image) is None:
            logger.warning("Detection skipped: input image is not processable")
            return RectifiedResult(
                original=image, failure_reason=FailureReason.INVALID_IMAGE
            )

        contours = extract_contours(image, self.config.extraction)
        if not contours:
            logger.info("Detection found no contours")
            return RectifiedResult(
                original=image, failure_reason=FailureReason.NO_CONTOURS
            )

        quad = find_document_quadrilateral(
            contours, self.config.locator, image_shape=image.shape
        )
        if quad is None:
            return RectifiedResult(
                original=image, failure_reason=FailureReason.NO_QUADRILATERAL
            )

        return RectifiedResult(original=image, quadrilateral=quad)

    def rectify(
        self,
        result: RectifiedResult,
        quadrilateral: Optional[Quadrilateral] = None,
    ) -> RectifiedResult:
        """
        Rectify the document of a detection result.

        Args:
            result: Output of ``detect`` (or any result holding the original).
            quadrilateral: Corners to use instead of the detected ones, e.g.
                after manual adjustment. Must be in the original image's
                coordinates; raw corners are canonicalized first.

        Returns:
            New RectifiedResult. ``rectified`` is set on success. If no
            corners are available, or the original image is not
            processable (INVALID_IMAGE), rectification is skipped.
            Degenerate corners or a singular transform yield a result
            without ``rectified``. In every skipped or failed case the
            original stays the deliverable.
        """
        quad = quadrilateral if quadrilateral is not None else result.quadrilateral
        if quad is None:
            logger.info("Rectification skipped: no corners available")
            return result

        if ImageBuffer.try_from(result.original) is None:
            logger.warning("Rectification skipped: original image is not processable")
            if result.failure_reason is FailureReason.INVALID_IMAGE:
                return result
            return dataclasses.replace(
                result, rectified=None, failure_reason=FailureReason.INVALID_IMAGE
            )

        if not quad.canonical:
            quad = order_corners(quad)

        try:
            warped = rectify(result.original, quad, self.config.rectification)
        except DegenerateQuadrilateralError as e:
            logger.warning(f"Rectification rejected degenerate corners: {e}")
            return RectifiedResult(
                original=result.original,
                quadrilateral=quad,
                failure_reason=FailureReason.DEGENERATE_QUADRILATERAL,
            )
        except HomographyError as e:
            logger.error(f"Rectification failed: {e}")
            return RectifiedResult(
                original=result.original,
                quadrilateral=quad,
                failure_reason=FailureReason.HOMOGRAPHY_FAILED,
            )

        enhanced = enhance_document(
            warped, self.config.enhancement, self.config.extraction.channel_order
        )

        return dataclasses.replace(
            result,
            quadrilateral=quad,
            rectified=enhanced,
            failure_reason=FailureReason.NONE,
        )

    def scan(self, image: np.ndarray) -> RectifiedResult:
        """
        Detect and rectify in one call.

        Returns:
            RectifiedResult; use ``deliverable`` for the page to keep and
            ``editable_corners()`` for the corners to show for adjustment.
        """
        logger.info("Starting document scan")
        detection = self.detect(image)
        if not detection.has_quadrilateral():
            logger.info(f"Scan ended without corners: {detection.get_error_message()}")
            return detection

        result = self.rectify(detection)
        logger.info(f"Scan finished: {result.get_error_message()}")
        return result

    def preview(self, frame: np.ndarray) -> Optional[Quadrilateral]:
        """
        Live-preview corners for a full-resolution frame.

        Detection runs on an analysis-resolution copy; the returned corners
        are canonical and in the frame's own coordinates.
        """
        quad = detect_preview_quadrilateral(
            frame, self.config.extraction, self.config.preview
        )
        if quad is None:
            return None
        return order_corners(quad)


def scan_document(
    image: np.ndarray,
    config: Optional[ScannerConfig] = None,
) -> RectifiedResult:
    """
    Convenience function for one-shot document scanning.

    Args:
        image: Decoded image containing a document.
        config: Optional custom configuration. Uses built-in defaults if None.

    Returns:
        RectifiedResult object.

    Example:
        >>> result = scan_document(cv2.imread("receipt.jpg"))
        >>> if result.is_rectified():
        ...     print("Page ready")
    """
    scanner = DocumentScanner(config=config if config is not None else ScannerConfig.default())
    return scanner.scan(image)
