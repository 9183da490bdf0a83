from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable, Sequence
from typing import Any

from pydantic import BaseModel


class CursorPage(BaseModel):
    """One page of a token-paginated listing.

    Args:
        items: Items in this page
        next_cursor: Token for the next page (None or empty on the last page)
    """

    model_config = {"frozen": True}

    items: Sequence[Any]
    next_cursor: str | None = None


async def iterate_cursor_async(
    fetch_page: Callable[[str | None], Awaitable[CursorPage]],
) -> AsyncIterator[Any]:
    """Yield items from the first page on until the listing runs out of cursors."""
    cursor: str | None = None
    while True:
        page = await fetch_page(cursor)
        for item in page.items:
            yield item
        cursor = page.next_cursor
        if not cursor:
            return
