"""Seek query construction.

The boundary filter for an n-field sort key is the rowwise lexicographic
comparison against the boundary row::

    (f1 > v1)
    OR (f1 = v1 AND f2 > v2)
    ...
    OR (f1 = v1 AND ... AND fn-1 = vn-1 AND fn > vn)

with ``<`` in place of ``>`` for descending fields, and every strict
operator inverted when travelling backwards. Filtering each column
independently (``f1 > v1 AND f2 > v2``) skips rows and is never produced.
"""

import operator
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .sort_key import Direction, SortKey, SortOrder, read_field


OPERATORS = {
    ">": operator.gt,
    "<": operator.lt,
    "=": operator.eq,
}


class Comparison(BaseModel):
    """Single ``field <op> value`` test."""

    field: str
    op: str = Field(pattern=r"^(<|>|=)$")
    value: Any

    model_config = ConfigDict(frozen=True)

    def matches(self, row: Any) -> bool:
        return OPERATORS[self.op](read_field(row, self.field), self.value)


class AllOf(BaseModel):
    """Conjunction of comparisons."""

    terms: Tuple[Comparison, ...]

    model_config = ConfigDict(frozen=True)

    def matches(self, row: Any) -> bool:
        return all(term.matches(row) for term in self.terms)


class AnyOf(BaseModel):
    """Disjunction of conjunctions; the shape of every seek predicate."""

    branches: Tuple[AllOf, ...]

    model_config = ConfigDict(frozen=True)

    def matches(self, row: Any) -> bool:
        return any(branch.matches(row) for branch in self.branches)


OrderBy = Tuple[Tuple[str, SortOrder], ...]


class SeekQuery(BaseModel):
    """Arguments handed to a range source for one fetch."""

    predicate: Optional[AnyOf] = Field(default=None, description="Boundary filter, None for the first page")
    order_by: OrderBy = Field(description="Effective (field, order) pairs")
    limit: int = Field(ge=1, description="Maximum number of rows to fetch")

    model_config = ConfigDict(frozen=True)


def strict_operator(order: SortOrder, direction: Direction) -> str:
    """Operator selecting rows beyond the boundary for one field."""
    ascending = order is SortOrder.ASC
    if direction is Direction.PREV:
        ascending = not ascending
    return ">" if ascending else "<"


def build_seek_predicate(
    sort_key: SortKey,
    boundary: Optional[Tuple[Any, ...]],
    direction: Direction = Direction.NEXT
) -> Optional[AnyOf]:
    """Build the boundary filter for a traversal.

    Args:
        sort_key: Validated sort key
        boundary: Sort key values of the boundary row, or None for the first page
        direction: Direction of travel relative to the boundary

    Returns:
        Predicate matching rows strictly beyond the boundary, or None
    """
    if boundary is None:
        return None

    if len(boundary) != len(sort_key):
        raise ValueError(
            f"Boundary has {len(boundary)} values, sort key has {len(sort_key)} fields"
        )

    direction = Direction(direction)
    branches = []
    for i, field in enumerate(sort_key.fields):
        terms = [
            Comparison(field=prefix.name, op="=", value=boundary[j])
            for j, prefix in enumerate(sort_key.fields[:i])
        ]
        terms.append(
            Comparison(
                field=field.name,
                op=strict_operator(field.order, direction),
                value=boundary[i]
            )
        )
        branches.append(AllOf(terms=tuple(terms)))

    return AnyOf(branches=tuple(branches))


def build_order_by(sort_key: SortKey, direction: Direction = Direction.NEXT) -> OrderBy:
    """Effective ordering; every field is flipped when travelling backwards."""
    direction = Direction(direction)
    return tuple(
        (field.name, field.order.flipped() if direction is Direction.PREV else field.order)
        for field in sort_key.fields
    )


def build_seek_query(
    sort_key: SortKey,
    boundary: Optional[Tuple[Any, ...]],
    direction: Direction,
    limit: int
) -> SeekQuery:
    """Bundle predicate, ordering and fetch limit for a range source."""
    return SeekQuery(
        predicate=build_seek_predicate(sort_key, boundary, direction),
        order_by=build_order_by(sort_key, direction),
        limit=limit
    )


def quote_ident(name: str) -> str:
    """Quote a PostgreSQL identifier."""
    return '"' + name.replace('"', '""') + '"'


def render_sql(predicate: AnyOf, start_param: int = 1) -> Tuple[str, List[Any]]:
    """Render a predicate as a PostgreSQL fragment with ``$n`` placeholders.

    Each field's boundary value is bound once and reused by every branch
    that compares against it.

    Args:
        predicate: Seek predicate
        start_param: Number of the first placeholder to use

    Returns:
        Tuple of (sql_fragment, parameters)
    """
    params: List[Any] = []
    slots: Dict[str, int] = {}

    def placeholder(comparison: Comparison) -> str:
        slot = slots.get(comparison.field)
        if slot is None or params[slot] != comparison.value:
            params.append(comparison.value)
            slot = len(params) - 1
            slots[comparison.field] = slot
        return f"${start_param + slot}"

    branches = []
    for branch in predicate.branches:
        terms = [
            f"{quote_ident(term.field)} {term.op} {placeholder(term)}"
            for term in branch.terms
        ]
        branches.append("(" + " AND ".join(terms) + ")")

    return "(" + " OR ".join(branches) + ")", params


def render_order_by(order_by: OrderBy) -> str:
    """Render an ORDER BY clause."""
    return "ORDER BY " + ", ".join(
        f"{quote_ident(name)} {order.value.upper()}" for name, order in order_by
    )
