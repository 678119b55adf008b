"""
Offset-based pagination utilities for in-memory result sets.
"""

from typing import TypeVar, List, Optional, Sequence, Tuple
from dataclasses import dataclass
from math import ceil

T = TypeVar('T')


@dataclass
class PaginationMetadata:
    """Pagination metadata for responses."""
    page: Optional[int]
    page_size: Optional[int]
    total_items: int
    total_pages: Optional[int]


def total_pages_for(total_items: int, page_size: Optional[int]) -> Optional[int]:
    """
    Number of pages needed for ``total_items``.
    None when no page size was requested or it is zero.
    """
    if not page_size:
        return None
    return ceil(total_items / page_size)


def page_bounds(total_items: int, page: int, page_size: int) -> Tuple[int, int]:
    """
    Slice bounds for a 1-based page, both clamped to [0, total_items].
    Pages past the end give an empty range rather than an error.
    """
    start = (page - 1) * page_size
    end = start + page_size
    return _clamp(start, total_items), _clamp(end, total_items)


def _clamp(value: int, upper: int) -> int:
    return min(max(value, 0), upper)


class OffsetPagination:
    """
    Traditional offset-based pagination over an already filtered sequence.
    Pagination is applied only when both page and page_size are given.
    """

    def paginate(
        self,
        items: Sequence[T],
        page: Optional[int] = None,
        page_size: Optional[int] = None
    ) -> Tuple[List[T], PaginationMetadata]:
        """
        Paginate a sequence.

        Args:
            items: Items surviving all filters
            page: Page number (1-based)
            page_size: Number of items per page

        Returns:
            Tuple of (items on the page, pagination_metadata)
        """
        total_items = len(items)
        page_items = list(items)

        if page is not None and page_size is not None:
            start, end = page_bounds(total_items, page, page_size)
            page_items = page_items[start:end]

        metadata = PaginationMetadata(
            page=page,
            page_size=page_size,
            total_items=total_items,
            total_pages=total_pages_for(total_items, page_size)
        )

        return page_items, metadata


offset_paginator = OffsetPagination()
