"""
Common type definitions for the document rectification pipeline.

This module provides Pydantic-based type definitions for core data structures
used throughout the pipeline: images, points, and document quadrilaterals.

These types provide:
- Type validation and conversion
- Consistent interfaces across modules
- Helper methods for common operations
- Integration with numpy arrays and OpenCV
"""

import math
from typing import Optional, Sequence, Tuple, Union

import numpy as np
from pydantic import BaseModel, Field, field_validator

CORNER_NAMES = ("top-left", "top-right", "bottom-right", "bottom-left")


class ImageBuffer(BaseModel):
    """
    Type-safe wrapper for image arrays (numpy.ndarray).

    Ensures images are uint8 numpy arrays shaped (H, W) for grayscale or
    (H, W, C) with 1, 3 or 4 channels.

    Attributes:
        data: The underlying numpy array containing image data.

    Example:
        >>> import cv2
        >>> image = cv2.imread("receipt.jpg")
        >>> img_buffer = ImageBuffer(data=image)
        >>> print(img_buffer.height, img_buffer.width)  # 480, 640
    """

    data: np.ndarray = Field(..., description="Image data as numpy array")

    model_config = {"arbitrary_types_allowed": True}

    @field_validator("data")
    @classmethod
    def _validate_image(cls, v: np.ndarray) -> np.ndarray:
        """
        Validate that the numpy array is a processable image.

        Raises:
            ValueError: If array is not a valid image format.
        """
        if not isinstance(v, np.ndarray):
            raise ValueError(f"Expected numpy.ndarray, got {type(v)}")

        if v.size == 0:
            raise ValueError("Image array is empty")

        if len(v.shape) not in (2, 3):
            raise ValueError(
                f"Expected 2D (grayscale) or 3D (color) image, got shape {v.shape}"
            )

        if len(v.shape) == 3 and v.shape[2] not in (1, 3, 4):
            raise ValueError(
                f"Expected 1, 3, or 4 channels for color image, got {v.shape[2]}"
            )

        if v.dtype != np.uint8:
            raise ValueError(
                f"Expected uint8 dtype for image, got {v.dtype}. "
                "Images should be in range [0, 255]"
            )

        return v

    @classmethod
    def try_from(cls, image: object) -> Optional["ImageBuffer"]:
        """
        Wrap an image, returning None instead of raising when it is not processable.

        Detection treats an undecodable frame as "nothing found", so callers
        use this rather than catching validation errors themselves.
        """
        if not isinstance(image, np.ndarray):
            return None
        try:
            return cls(data=image)
        except ValueError:
            return None

    @property
    def shape(self) -> Tuple[int, ...]:
        """Get image shape (H, W) or (H, W, C)."""
        return self.data.shape

    @property
    def height(self) -> int:
        """Get image height in pixels."""
        return int(self.data.shape[0])

    @property
    def width(self) -> int:
        """Get image width in pixels."""
        return int(self.data.shape[1])

    @property
    def channels(self) -> int:
        """Get number of channels (1 for grayscale, 3 for BGR/RGB, 4 with alpha)."""
        if len(self.data.shape) == 2:
            return 1
        return int(self.data.shape[2])

    @property
    def is_grayscale(self) -> bool:
        """Check if image has a single channel."""
        return self.channels == 1

    def to_numpy(self) -> np.ndarray:
        """Get underlying numpy array."""
        return self.data

    def __repr__(self) -> str:
        return f"ImageBuffer(shape={self.shape}, dtype={self.data.dtype})"


class Point(BaseModel):
    """
    Immutable 2D point (x, y) in the coordinate space of a specific image.

    Coordinates are kept as floats; points from differently sized images
    must be scaled explicitly before they are compared.

    Example:
        >>> point = Point(x=100.5, y=200)
        >>> arr = point.to_numpy()  # array([100.5, 200. ])
        >>> point2 = Point.from_numpy(np.array([150, 250]))
    """

    x: float = Field(..., description="X-coordinate (horizontal)")
    y: float = Field(..., description="Y-coordinate (vertical)")

    model_config = {"frozen": True}

    @field_validator("x", "y", mode="before")
    @classmethod
    def _convert_to_float(cls, v: Union[int, float, np.number]) -> float:
        if isinstance(v, (int, float, np.number)) and not isinstance(v, bool):
            value = float(v)
            if not math.isfinite(value):
                raise ValueError(f"Coordinate must be finite, got {value}")
            return value
        raise ValueError(f"Coordinate must be numeric, got {type(v)}")

    @classmethod
    def from_numpy(cls, arr: np.ndarray) -> "Point":
        """
        Create Point from a numpy array of shape (2,).

        Raises:
            ValueError: If array shape is not (2,).
        """
        arr = np.asarray(arr)
        if arr.shape != (2,):
            raise ValueError(f"Expected array of shape (2,), got {arr.shape}")
        return cls(x=float(arr[0]), y=float(arr[1]))

    def to_numpy(self, dtype: type = np.float64) -> np.ndarray:
        """Convert Point to numpy array of shape (2,)."""
        return np.array([self.x, self.y], dtype=dtype)

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def scaled(self, sx: float, sy: float) -> "Point":
        """Return a new point with coordinates multiplied by (sx, sy)."""
        return Point(x=self.x * sx, y=self.y * sy)

    def __repr__(self) -> str:
        return f"Point(x={self.x:.2f}, y={self.y:.2f})"


class Quadrilateral(BaseModel):
    """
    Four corner points of a detected document.

    A canonical quadrilateral is always ordered
    [top-left, top-right, bottom-right, bottom-left]. Anything else is
    "raw" and must go through ``order_corners`` before rectification.

    Attributes:
        points: Exactly four corner points.
        canonical: True once the corners are in canonical order.
    """

    points: Tuple[Point, Point, Point, Point]
    canonical: bool = False

    model_config = {"frozen": True}

    @classmethod
    def from_numpy(
        cls, arr: Union[np.ndarray, Sequence], canonical: bool = False
    ) -> "Quadrilateral":
        """
        Build a quadrilateral from an array-like of shape (4, 2).

        Accepts OpenCV contour layout (4, 1, 2) as well.

        Raises:
            ValueError: If input does not contain exactly 4 points.
        """
        arr = np.asarray(arr, dtype=np.float64)
        if arr.shape == (4, 1, 2):
            arr = arr.reshape(4, 2)
        if arr.shape != (4, 2):
            raise ValueError(
                f"Expected exactly 4 points with shape (4, 2), got shape {arr.shape}"
            )
        return cls(points=tuple(Point.from_numpy(p) for p in arr), canonical=canonical)

    @classmethod
    def full_image(cls, width: int, height: int) -> "Quadrilateral":
        """
        Default corners spanning the whole image.

        Used when detection finds nothing, so the user always has
        corners to adjust.
        """
        return cls(
            points=(
                Point(x=0, y=0),
                Point(x=width, y=0),
                Point(x=width, y=height),
                Point(x=0, y=height),
            ),
            canonical=True,
        )

    def to_numpy(self, dtype: type = np.float64) -> np.ndarray:
        """Convert to numpy array of shape (4, 2)."""
        return np.array([p.to_tuple() for p in self.points], dtype=dtype)

    def to_list(self) -> list:
        """Convert to nested list [[x, y], ...] (JSON friendly)."""
        return [[p.x, p.y] for p in self.points]

    def scaled(self, sx: float, sy: Optional[float] = None) -> "Quadrilateral":
        """
        Map corners into another image's coordinate space.

        Args:
            sx: Horizontal scale factor (target width / source width).
            sy: Vertical scale factor. Defaults to sx.
        """
        if sy is None:
            sy = sx
        return Quadrilateral(
            points=tuple(p.scaled(sx, sy) for p in self.points),
            canonical=self.canonical,
        )

    def __repr__(self) -> str:
        corners = ", ".join(f"({p.x:.1f}, {p.y:.1f})" for p in self.points)
        label = "canonical" if self.canonical else "raw"
        return f"Quadrilateral[{label}]({corners})"
