"""
In-memory search and pagination over the full ticket list.

The store is small enough to fetch wholesale, so filtering and slicing
happen here rather than in the query.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")

SEARCH_FIELDS = ("establishment", "purchase_date")


@dataclass
class Page(Generic[T]):
    """One page of a list plus the numbers the pager needs."""
    items: List[T] = field(default_factory=list)
    page: int = 1
    page_size: int = 10
    total_items: int = 0

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total_items / self.page_size))

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def filter_tickets(tickets: List[Dict[str, Any]], query: Optional[str]) -> List[Dict[str, Any]]:
    """
    Keep tickets whose establishment or date contains the query.

    Matching is a case-insensitive substring test on the trimmed query. An
    empty or missing query keeps every ticket.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return list(tickets)

    return [
        ticket for ticket in tickets
        if any(needle in str(ticket.get(name) or "").lower() for name in SEARCH_FIELDS)
    ]


def paginate(items: List[T], page: int, page_size: int) -> Page[T]:
    """
    Slice one page out of a list.

    Pages are 1-based. A page below 1 or past the end is clamped to the
    first or last page, and an empty list still has one (empty) page.
    """
    if page_size < 1:
        raise ValueError("page_size must be at least 1")

    total_items = len(items)
    total_pages = max(1, math.ceil(total_items / page_size))
    current = min(max(page, 1), total_pages)

    start = (current - 1) * page_size
    return Page(
        items=items[start:start + page_size],
        page=current,
        page_size=page_size,
        total_items=total_items,
    )
