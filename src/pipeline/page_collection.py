"""
Page Collection

Caller-owned ordered list of rectified pages for one scanning session. The
assembly stage (PDF export, upload) receives the collection explicitly;
nothing in the scanner keeps pages in module state.
"""

import logging
from typing import Iterator, List, Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)


class PageCollection:
    """
    Ordered pages of a document being scanned.

    Example:
        >>> pages = PageCollection()
        >>> pages.add_page(scanner.scan(image).deliverable)
        >>> pages.replace_page(0, recropped)
        >>> for page in pages:
        ...     export(page)
    """

    def __init__(self) -> None:
        self._pages: List[np.ndarray] = []

    def add_page(self, page: np.ndarray) -> int:
        """
        Append a page.

        Returns:
            Index of the new page.
        """
        self._pages.append(page)
        logger.debug(f"Added page {len(self._pages) - 1}")
        return len(self._pages) - 1

    def replace_page(self, index: int, page: np.ndarray) -> None:
        """
        Replace the page at ``index`` (after a manual re-crop).

        Raises:
            IndexError: If ``index`` is out of range.
        """
        if not 0 <= index < len(self._pages):
            raise IndexError(
                f"Page index {index} out of range for {len(self._pages)} pages"
            )
        self._pages[index] = page
        logger.debug(f"Replaced page {index}")

    def get_page(self, index: int) -> Optional[np.ndarray]:
        """Get the page at ``index``, or None if there is no such page."""
        if 0 <= index < len(self._pages):
            return self._pages[index]
        return None

    def pages(self) -> Tuple[np.ndarray, ...]:
        """Snapshot of all pages in order."""
        return tuple(self._pages)

    def clear(self) -> None:
        """Drop all pages to start a new session."""
        self._pages.clear()

    def __len__(self) -> int:
        return len(self._pages)

    def __iter__(self) -> Iterator[np.ndarray]:
        return iter(tuple(self._pages))
