"""
Contour Extraction

Converts a raw image into candidate closed contours for document location.
"""

from src.extraction.contour_extractor import detect_edges, extract_contours, to_grayscale
from src.extraction.types import Contour, ExtractionConfig

__all__ = [
    "extract_contours",
    "detect_edges",
    "to_grayscale",
    "Contour",
    "ExtractionConfig",
]
