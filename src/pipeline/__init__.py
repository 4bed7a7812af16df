"""
Document Scanning Pipeline

Locates a document in an image and produces a de-skewed, top-down page.

Pipeline stages:
1. Contour extraction
2. Document location and corner ordering
3. Perspective rectification
4. Enhancement
"""

from src.pipeline.config_loader import load_config
from src.pipeline.page_collection import PageCollection
from src.pipeline.processor import DocumentScanner, scan_document
from src.pipeline.types import FailureReason, RectifiedResult, ScannerConfig

__all__ = [
    "DocumentScanner",
    "scan_document",
    "load_config",
    "PageCollection",
    "FailureReason",
    "RectifiedResult",
    "ScannerConfig",
]
