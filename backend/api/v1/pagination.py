"""Offset pagination for list endpoints."""

from collections.abc import Sequence
from typing import TypeVar

from fastapi import Response

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
NEXT_OFFSET_HEADER = "X-Next-Offset"

T = TypeVar("T")


def trim_page(
    rows: Sequence[T],
    response: Response,
    *,
    offset: int,
    limit: int,
) -> list[T]:
    """Cut a ``limit + 1`` fetch down to one page.

    The extra row only signals that another page exists; when present the
    offset of that page is advertised in ``X-Next-Offset``.
    """
    if len(rows) > limit:
        response.headers[NEXT_OFFSET_HEADER] = str(offset + limit)
    return list(rows[:limit])
