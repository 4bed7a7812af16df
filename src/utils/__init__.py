"""
Shared Utilities

Common functions used across all modules.
"""

from src.utils.io import list_images, load_image, save_image
from src.utils.logging_config import setup_logging

__all__ = [
    "load_image",
    "save_image",
    "list_images",
    "setup_logging",
]
