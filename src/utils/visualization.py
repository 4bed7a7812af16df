"""
Visualization Utilities

Functions for drawing and plotting detection results.
"""

from pathlib import Path
from typing import Tuple

import cv2
import matplotlib.pyplot as plt
import numpy as np

from src.common.types import CORNER_NAMES, Quadrilateral


def draw_quadrilateral(
    image: np.ndarray,
    quad: Quadrilateral,
    color: Tuple[int, int, int] = (255, 0, 0),
    thickness: int = 3,
) -> np.ndarray:
    """
    Draw the document outline and corner markers on a copy of the image.

    Args:
        image: Image (grayscale or colour) in the quad's coordinate space.
        quad: Corners to draw.
        color: Outline colour in the image's channel order.
        thickness: Line thickness in pixels.

    Returns:
        New 3-channel image with the overlay; the input is not modified.
    """
    if image.ndim == 2 or image.shape[2] == 1:
        canvas = cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    elif image.shape[2] == 4:
        canvas = cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)
    else:
        canvas = image.copy()

    pts = np.round(quad.to_numpy()).astype(np.int32)
    cv2.polylines(canvas, [pts.reshape(-1, 1, 2)], True, color, thickness)
    for x, y in pts:
        cv2.circle(canvas, (int(x), int(y)), thickness * 3, color, -1)

    return canvas


def plot_scan_result(
    original: np.ndarray,
    quad: Quadrilateral,
    rectified: np.ndarray = None,
    save_path: Path = None,
    show: bool = True,
):
    """
    Plot the original with detected corners next to the rectified page.

    Args:
        original: Original image (BGR)
        quad: Corners in the original's coordinates
        rectified: Rectified image (BGR), omitted panel if None
        save_path: Optional path to save figure
        show: Call plt.show() after drawing
    """
    panels = 2 if rectified is not None else 1
    fig, axes = plt.subplots(1, panels, figsize=(8 * panels, 8))
    axes = np.atleast_1d(axes)

    axes[0].imshow(_to_rgb(original))
    pts = quad.to_numpy()
    closed = np.vstack([pts, pts[:1]])
    axes[0].plot(closed[:, 0], closed[:, 1], 'g-', linewidth=2)
    for name, (x, y) in zip(CORNER_NAMES, pts):
        axes[0].plot(x, y, 'ro', markersize=8)
        axes[0].text(x + 5, y + 5, name, color='red', fontsize=10, weight='bold')
    axes[0].set_title('Detected corners')

    if rectified is not None:
        axes[1].imshow(_to_rgb(rectified), cmap='gray')
        axes[1].set_title(f'Rectified {rectified.shape[1]}x{rectified.shape[0]}')

    for ax in axes:
        ax.axis('off')

    if save_path:
        plt.savefig(save_path, bbox_inches='tight', dpi=150)
    if show:
        plt.show()
    plt.close(fig)


def _to_rgb(image: np.ndarray) -> np.ndarray:
    if image.ndim == 2 or image.shape[2] == 1:
        return image.reshape(image.shape[0], image.shape[1])
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2RGB)
    return cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
