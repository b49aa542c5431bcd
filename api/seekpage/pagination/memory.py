"""In-process range source over a list of rows."""

from typing import Any, Iterable, List

from .query import SeekQuery
from .sort_key import SortOrder, read_field


class InMemorySource:
    """Range source backed by a plain list of dicts or objects.

    ``rows`` is public; callers may append or remove rows between fetches.
    """

    def __init__(self, rows: Iterable[Any] = ()):
        self.rows: List[Any] = list(rows)

    async def range_fetch(self, query: SeekQuery) -> List[Any]:
        if query.predicate is None:
            matched = list(self.rows)
        else:
            matched = [row for row in self.rows if query.predicate.matches(row)]

        # Stable sorts from the least significant field up give mixed asc/desc ordering
        for name, order in reversed(query.order_by):
            matched.sort(
                key=lambda row, name=name: read_field(row, name),
                reverse=order is SortOrder.DESC
            )

        return matched[:query.limit]
