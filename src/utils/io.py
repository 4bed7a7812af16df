"""
I/O Utilities

Image and JSON file input/output operations.
"""

import json
from pathlib import Path
from typing import Any, Dict, List

import cv2
import numpy as np

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".bmp", ".tif", ".tiff", ".webp")


def load_image(file_path: Path, keep_alpha: bool = False) -> np.ndarray:
    """
    Decode an image file into a BGR (or BGRA) uint8 array.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If OpenCV cannot decode the file.
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Image not found: {file_path}")

    flags = cv2.IMREAD_UNCHANGED if keep_alpha else cv2.IMREAD_COLOR
    image = cv2.imread(str(file_path), flags)
    if image is None:
        raise ValueError(f"Could not decode image: {file_path}")
    return image


def save_image(image: np.ndarray, file_path: Path) -> None:
    """Encode an image to disk, creating parent directories."""
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    if not cv2.imwrite(str(file_path), image):
        raise ValueError(f"Could not write image: {file_path}")


def list_images(directory: Path) -> List[Path]:
    """List image files in a directory, sorted by name."""
    return sorted(
        p for p in Path(directory).iterdir()
        if p.is_file() and p.suffix.lower() in IMAGE_EXTENSIONS
    )


def load_json(file_path: Path) -> Dict[str, Any]:
    """Load JSON file."""
    with open(file_path, 'r') as f:
        return json.load(f)


def save_json(data: Dict[str, Any], file_path: Path, indent: int = 2):
    """Save data to JSON file."""
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, 'w') as f:
        json.dump(data, f, indent=indent)
