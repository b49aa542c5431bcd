"""Page fetching on top of a range source."""

import logging
from typing import Any, Generic, List, Optional, Protocol, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from ..errors.problem_details import InvalidLimit
from .cursor import decode_cursor, encode_cursor
from .query import SeekQuery, build_seek_query
from .sort_key import Direction, SortKey


logger = logging.getLogger(__name__)

T = TypeVar("T")


class RangeSource(Protocol):
    """Ordered range-query collaborator.

    Implementations return at most ``query.limit`` rows matching
    ``query.predicate`` in ``query.order_by`` order. Errors are raised as-is.
    """

    async def range_fetch(self, query: SeekQuery) -> Sequence[Any]:
        ...


class PaginationParams(BaseModel):
    """Query parameters for pagination."""

    limit: int = Field(default=50, description="Number of items per page")
    cursor: Optional[str] = Field(default=None, description="Cursor for pagination")
    direction: Direction = Field(default=Direction.NEXT, description="Direction relative to the cursor")


class Page(BaseModel, Generic[T]):
    """One page of rows in canonical (forward) order."""

    rows: List[T] = Field(description="Rows of this page")
    next_cursor: Optional[str] = Field(default=None, description="Cursor for the following page")
    prev_cursor: Optional[str] = Field(default=None, description="Cursor for the preceding page")
    has_next: bool = Field(default=False, description="Whether a following page exists")
    has_prev: bool = Field(default=False, description="Whether a preceding page exists")
    limit: int = Field(description="Requested page size")

    model_config = ConfigDict(arbitrary_types_allowed=True)


def validate_limit(limit: Any, max_limit: Optional[int] = None) -> int:
    """Check a requested page size.

    Raises:
        InvalidLimit: If the limit is not a positive integer or exceeds max_limit
    """
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise InvalidLimit(f"Page size must be an integer, got {limit!r}")
    if limit < 1:
        raise InvalidLimit(f"Page size must be at least 1, got {limit}")
    if max_limit is not None and limit > max_limit:
        raise InvalidLimit(
            f"Page size must not exceed {max_limit}, got {limit}",
            max_limit=max_limit
        )
    return limit


async def fetch_page(
    source: RangeSource,
    sort_key: SortKey,
    cursor: Optional[str] = None,
    direction: Direction = Direction.NEXT,
    limit: int = 50,
    max_limit: Optional[int] = None
) -> Page:
    """Fetch one page by seeking past the cursor's boundary row.

    One extra row is requested to learn whether the traversal can continue
    without a count query. Backward pages are fetched in reversed order and
    flipped back, so rows always come out in the sort key's order.

    Args:
        source: Range source to read from
        sort_key: Sort key defining the traversal order
        cursor: Token from a previous page, or None to start at an end
        direction: ``next`` to move forward from the cursor, ``prev`` to move back
        limit: Maximum number of rows in the page
        max_limit: Optional upper bound on ``limit``

    Returns:
        Page with rows and cursors for the neighbouring pages

    Raises:
        InvalidLimit: If limit is out of bounds
        InvalidCursor: If the cursor cannot be decoded for this sort key
    """
    limit = validate_limit(limit, max_limit)
    direction = Direction(direction)

    boundary = decode_cursor(cursor, sort_key) if cursor is not None else None
    query = build_seek_query(sort_key, boundary, direction, limit + 1)

    fetched = list(await source.range_fetch(query))
    has_more = len(fetched) > limit
    rows = fetched[:limit]

    if direction is Direction.PREV:
        rows.reverse()

    resumed = boundary is not None
    if direction is Direction.NEXT:
        more_after, more_before = has_more, resumed
    else:
        more_after, more_before = resumed, has_more

    next_cursor = None
    prev_cursor = None
    if rows and more_after:
        next_cursor = encode_cursor(sort_key.values_of(rows[-1]), sort_key)
    if rows and more_before:
        prev_cursor = encode_cursor(sort_key.values_of(rows[0]), sort_key)

    logger.debug(
        f"Fetched {len(rows)} rows ({direction.value}, limit {limit}) "
        f"ordered by {sort_key.signature}; has_next={next_cursor is not None}, "
        f"has_prev={prev_cursor is not None}"
    )

    return Page(
        rows=rows,
        next_cursor=next_cursor,
        prev_cursor=prev_cursor,
        has_next=next_cursor is not None,
        has_prev=prev_cursor is not None,
        limit=limit
    )
