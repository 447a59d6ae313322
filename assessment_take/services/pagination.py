"""
services/pagination.py

Page windowing for list endpoints.
"""

import math
from typing import Generic, List, Sequence, TypeVar, Union

from pydantic import BaseModel

T = TypeVar("T")

ELLIPSIS = "..."
_SHOW_ALL_UP_TO = 7


def page_numbers(current: int, page_count: int) -> List[Union[int, str]]:
    """
    Page buttons to show.

    Up to 7 pages are all shown. Beyond that: first page, current±1, last page,
    with "..." over the gaps.

    >>> page_numbers(5, 10)
    [1, '...', 4, 5, 6, '...', 10]
    """
    if page_count <= _SHOW_ALL_UP_TO:
        return list(range(1, page_count + 1))

    pages: List[Union[int, str]] = [1]
    if current > 3:
        pages.append(ELLIPSIS)

    start = max(2, current - 1)
    end = min(page_count - 1, current + 1)
    pages.extend(range(start, end + 1))

    if current < page_count - 2:
        pages.append(ELLIPSIS)
    pages.append(page_count)
    return pages


class Page(BaseModel, Generic[T]):
    items: List[T]
    page: int
    page_size: int
    page_count: int
    total: int
    pages: List[Union[int, str]]


def paginate(items: Sequence[T], page: int, page_size: int) -> Page[T]:
    """Slice one page out of ``items``; ``page`` (1-based) is clamped."""
    if page_size < 1:
        raise ValueError(f"page_size must be positive: {page_size}")
    total = len(items)
    page_count = max(1, math.ceil(total / page_size))
    page = max(1, min(page, page_count))
    start = (page - 1) * page_size
    return Page(
        items=list(items[start : start + page_size]),
        page=page,
        page_size=page_size,
        page_count=page_count,
        total=total,
        pages=page_numbers(page, page_count),
    )
