"""Opaque cursor tokens for seek pagination.

A cursor holds the sort key values of one boundary row together with the
fingerprint of the sort key it was issued for. Tokens are URL-safe base64
of compact JSON, so they can travel in a query string unescaped.
"""

import base64
import json
import logging
import re
from typing import Any, Tuple

from pydantic import ValidationError

from ..errors.problem_details import InvalidCursor
from .sort_key import SortKey


logger = logging.getLogger(__name__)

# Unpadded base64url alphabet; "+", "/" and "=" never appear in issued tokens
TOKEN_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


def encode_cursor(values: Tuple[Any, ...], sort_key: SortKey) -> str:
    """Encode boundary values into a cursor token.

    Args:
        values: Sort key values of the boundary row, in key order
        sort_key: Sort key the values belong to

    Returns:
        URL-safe base64 cursor string without padding

    Raises:
        ValueError: If the values do not fit the sort key
    """
    if len(values) != len(sort_key):
        raise ValueError(
            f"Failed to encode cursor: expected {len(sort_key)} values, got {len(values)}"
        )

    try:
        payload = {"k": sort_key.fingerprint, "v": sort_key.dump_values(tuple(values))}
    except ValidationError as e:
        raise ValueError(f"Failed to encode cursor: {e}") from e

    cursor_json = json.dumps(payload, separators=(",", ":"))
    encoded = base64.urlsafe_b64encode(cursor_json.encode("utf-8")).decode("ascii")
    return encoded.rstrip("=")


def decode_cursor(cursor: str, sort_key: SortKey) -> Tuple[Any, ...]:
    """Decode a cursor token back into typed boundary values.

    Args:
        cursor: Token previously produced by ``encode_cursor``
        sort_key: Sort key the caller is paginating with

    Returns:
        Tuple of boundary values, one per sort key field

    Raises:
        InvalidCursor: If the token is malformed, was issued for another
            sort key, has the wrong number of values, or a value cannot be
            coerced to its field type
    """
    if not cursor:
        raise InvalidCursor("Empty cursor provided")

    if not TOKEN_PATTERN.fullmatch(cursor):
        logger.warning("Rejected cursor with characters outside the base64url alphabet")
        raise InvalidCursor("Invalid cursor format: unexpected characters")

    try:
        padded = cursor + "=" * (-len(cursor) % 4)
        cursor_bytes = base64.urlsafe_b64decode(padded)
        payload = json.loads(cursor_bytes.decode("utf-8"))
    except ValueError as e:
        logger.warning(f"Rejected undecodable cursor: {e}")
        raise InvalidCursor(f"Invalid cursor format: {e}")

    if not isinstance(payload, dict) or not isinstance(payload.get("v"), list):
        raise InvalidCursor("Invalid cursor format: unexpected payload")

    if payload.get("k") != sort_key.fingerprint:
        logger.warning(f"Rejected cursor issued for sort key {payload.get('k')!r}, expected {sort_key.fingerprint}")
        raise InvalidCursor("Cursor was issued for a different sort order")

    raw_values = payload["v"]
    if len(raw_values) != len(sort_key):
        raise InvalidCursor(
            f"Cursor holds {len(raw_values)} values, sort key has {len(sort_key)} fields"
        )

    try:
        return sort_key.load_values(raw_values)
    except ValidationError as e:
        raise InvalidCursor(f"Invalid cursor value: {e.errors()[0]['msg']}")
