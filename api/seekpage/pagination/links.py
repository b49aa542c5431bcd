"""RFC 8288 Link headers for paginated responses."""

from typing import Any, Dict, Optional
from urllib.parse import urlencode

from .sort_key import Direction


def create_link_header(
    base_url: str,
    params: Dict[str, Any],
    next_cursor: Optional[str] = None,
    prev_cursor: Optional[str] = None
) -> Optional[str]:
    """Create Link header for pagination as per RFC 8288.

    Args:
        base_url: Base URL for the resource
        params: Query parameters to carry over (limit, sort, filters)
        next_cursor: Cursor for next page
        prev_cursor: Cursor for previous page

    Returns:
        Link header value or None if no links
    """
    links = []
    carried = {k: v for k, v in params.items() if v is not None and k not in ("cursor", "direction")}

    if next_cursor:
        query = urlencode({**carried, "cursor": next_cursor, "direction": Direction.NEXT.value})
        links.append(f'<{base_url}?{query}>; rel="next"')

    if prev_cursor:
        query = urlencode({**carried, "cursor": prev_cursor, "direction": Direction.PREV.value})
        links.append(f'<{base_url}?{query}>; rel="prev"')

    return ", ".join(links) if links else None
