"""Pagination calculator.

Turns a requested window (`page`, `size`), the authoritative total number of
elements, and the items already fetched for that window into a `Page`
descriptor with boundary flags. Pure: no storage I/O.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    """One window of an ordered listing.

    Attributes:
        items: The items on this page, in listing order.
        page: The 0-indexed page number that was requested.
        size: The requested page size.
        total_elements: Number of elements across all pages.
        total_pages: ``ceil(total_elements / size)``.
        first: Whether this is the first page.
        last: Whether this is the last page (also true past the end).
    """

    items: tuple[T, ...]
    page: int
    size: int
    total_elements: int
    total_pages: int
    first: bool
    last: bool


def paginate(
    items: Sequence[T], page: int, size: int, total_elements: int
) -> Page[T]:
    """Build the page descriptor for an already-fetched window.

    `last` is true on the final page and on any page that came back empty, so
    overshooting (e.g. page 99 of a 2-page listing) still reports `last`.

    Args:
        items: Items fetched for this window.
        page: Requested page number (0-indexed).
        size: Requested page size; must be >= 1 (caller precondition).
        total_elements: Authoritative count for the listing.

    Returns:
        The page descriptor.
    """
    total_pages = math.ceil(total_elements / size)
    return Page(
        items=tuple(items),
        page=page,
        size=size,
        total_elements=total_elements,
        total_pages=total_pages,
        first=page == 0,
        last=page >= total_pages - 1 or not items,
    )
