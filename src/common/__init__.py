"""
Common types shared across all modules.

Standardized data types for the document rectification pipeline, keeping
extraction, location and rectification consistent.
"""

from src.common.types import CORNER_NAMES, ImageBuffer, Point, Quadrilateral

__all__ = ["CORNER_NAMES", "ImageBuffer", "Point", "Quadrilateral"]
