"""
Cursor pagination for GraphQL connections.

Pages are fetched strictly in sequence since each cursor comes from the
previous page. Results are all-or-nothing: when any page fails, the items
gathered so far are dropped and only the error is raised.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, List, Optional, Protocol, Tuple, TypeVar

from ..exceptions import PaginationLimitError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Safety valve against servers that keep handing out cursors
MAX_PAGES = 1000


class CursorPage(Protocol):
    """Pagination metadata able to yield the next cursor."""

    def next_cursor(self) -> Optional[str]:
        ...


PageFetcher = Callable[[Optional[str]], Awaitable[Tuple[List[T], CursorPage]]]


async def paginate(
    fetch: PageFetcher,
    start_cursor: Optional[str] = None,
    max_pages: int = MAX_PAGES,
) -> List[T]:
    """
    Retrieve all pages from a cursor-based connection.

    ``fetch`` is awaited with the current cursor (``start_cursor`` first)
    and returns the page items plus its page info. The loop stops when the
    page info yields no next cursor.

    Args:
        fetch: Coroutine function returning ``(items, page_info)``
        start_cursor: Cursor to resume from, ``None`` for the first page
        max_pages: Maximum number of pages to request

    Returns:
        Items of every page in order

    Raises:
        PaginationLimitError: If more than ``max_pages`` pages are needed
        MissingCursorError: If a page has more results but no end cursor
    """
    items: List[T] = []
    cursor = start_cursor
    pages_seen = 0

    while True:
        pages_seen += 1
        if pages_seen > max_pages:
            raise PaginationLimitError(max_pages)

        page_items, info = await fetch(cursor)
        items.extend(page_items)

        cursor = info.next_cursor()
        if cursor is None:
            break

    logger.debug("Pagination finished after %d page(s), %d item(s)", pages_seen, len(items))
    return items
