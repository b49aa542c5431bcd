"""Keyset (seek) pagination: sort keys, cursors, seek queries and page fetching."""

from .sort_key import (
    Direction,
    SortField,
    SortKey,
    SortOrder,
    read_field
)
from .cursor import encode_cursor, decode_cursor
from .query import (
    AllOf,
    AnyOf,
    Comparison,
    SeekQuery,
    build_order_by,
    build_seek_predicate,
    build_seek_query,
    quote_ident,
    render_order_by,
    render_sql
)
from .session import (
    Page,
    PaginationParams,
    RangeSource,
    fetch_page,
    validate_limit
)
from .memory import InMemorySource
from .links import create_link_header

__all__ = [
    "Direction",
    "SortField",
    "SortKey",
    "SortOrder",
    "read_field",
    "encode_cursor",
    "decode_cursor",
    "AllOf",
    "AnyOf",
    "Comparison",
    "SeekQuery",
    "build_order_by",
    "build_seek_predicate",
    "build_seek_query",
    "quote_ident",
    "render_order_by",
    "render_sql",
    "Page",
    "PaginationParams",
    "RangeSource",
    "fetch_page",
    "validate_limit",
    "InMemorySource",
    "create_link_header"
]
