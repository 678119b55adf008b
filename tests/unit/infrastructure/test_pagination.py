"""
Unit tests for pagination helpers.
"""

import pytest

from app.infrastructure.pagination import (
    OffsetPagination, page_bounds, total_pages_for
)


class TestPaginationMath:
    """Test cases for page bounds and page counts."""

    @pytest.mark.parametrize("page, expected", [
        (1, (0, 3)),
        (2, (3, 6)),
        (3, (6, 7)),
        (4, (7, 7)),
        (10, (7, 7)),
    ])
    def test_page_bounds_seven_items_page_size_three(self, page, expected):
        assert page_bounds(7, page, 3) == expected

    def test_page_bounds_clamps_below_zero(self):
        assert page_bounds(7, 0, 3) == (0, 0)

    def test_total_pages(self):
        assert total_pages_for(7, 3) == 3
        assert total_pages_for(6, 3) == 2
        assert total_pages_for(0, 3) == 0

    def test_total_pages_without_page_size(self):
        assert total_pages_for(7, None) is None
        assert total_pages_for(7, 0) is None


class TestOffsetPagination:
    """Test cases for OffsetPagination."""

    def setup_method(self):
        self.paginator = OffsetPagination()
        self.items = list(range(7))

    def test_no_pagination_without_both_params(self):
        items, metadata = self.paginator.paginate(self.items, page=2)

        assert items == self.items
        assert metadata.total_items == 7
        assert metadata.total_pages is None

    def test_page_size_alone_still_reports_total_pages(self):
        items, metadata = self.paginator.paginate(self.items, page_size=3)

        assert items == self.items
        assert metadata.total_pages == 3

    def test_last_partial_page(self):
        items, metadata = self.paginator.paginate(self.items, page=3, page_size=3)

        assert items == [6]
        assert metadata.total_items == 7
        assert metadata.total_pages == 3

    def test_page_past_end_is_empty(self):
        items, metadata = self.paginator.paginate(self.items, page=4, page_size=3)

        assert items == []
        assert metadata.total_items == 7
