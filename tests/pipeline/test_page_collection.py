"""
Unit tests for PageCollection.
"""

import numpy as np
import pytest

from src.pipeline.page_collection import PageCollection


def _page(value):
    return np.full((4, 4), value, dtype=np.uint8)


class TestPageCollection:
    """Tests for PageCollection."""

    def test_add_returns_index(self):
        """Test that add_page returns the index of the new page."""
        pages = PageCollection()

        assert pages.add_page(_page(1)) == 0
        assert pages.add_page(_page(2)) == 1
        assert len(pages) == 2

    def test_pages_keep_insertion_order(self):
        """Test that iteration and pages() keep insertion order."""
        pages = PageCollection()
        for value in (10, 20, 30):
            pages.add_page(_page(value))

        assert [int(p[0, 0]) for p in pages] == [10, 20, 30]
        assert [int(p[0, 0]) for p in pages.pages()] == [10, 20, 30]

    def test_replace_page(self):
        """Test that replace_page only swaps the page at the given index."""
        pages = PageCollection()
        pages.add_page(_page(1))
        pages.add_page(_page(2))

        pages.replace_page(1, _page(99))

        assert pages.get_page(1)[0, 0] == 99
        assert pages.get_page(0)[0, 0] == 1

    @pytest.mark.parametrize("index", [-1, 1, 5])
    def test_replace_out_of_range_raises(self, index):
        """Test that replacing an out-of-range index raises IndexError."""
        pages = PageCollection()
        pages.add_page(_page(1))

        with pytest.raises(IndexError, match="out of range"):
            pages.replace_page(index, _page(2))

    def test_get_missing_page_returns_none(self):
        """Test that get_page returns None for a missing index."""
        pages = PageCollection()
        assert pages.get_page(0) is None
        assert pages.get_page(-1) is None

    def test_snapshot_is_independent(self):
        """Test that pages() returns a snapshot unaffected by later additions."""
        pages = PageCollection()
        pages.add_page(_page(1))
        snapshot = pages.pages()

        pages.add_page(_page(2))

        assert len(snapshot) == 1

    def test_clear(self):
        """Test that clear removes every page."""
        pages = PageCollection()
        pages.add_page(_page(1))

        pages.clear()

        assert len(pages) == 0
        assert pages.pages() == ()

    def test_collections_are_independent(self):
        """Test that separate collections do not share pages."""
        first, second = PageCollection(), PageCollection()
        first.add_page(_page(1))

        assert len(second) == 0
