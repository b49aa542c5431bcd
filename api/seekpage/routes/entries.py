"""Entries API endpoints."""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Query, Request, Response

from ..config import get_settings
from ..models.entries import Entry, EntryCreate, EntryListResponse, EntrySort
from ..pagination import Direction, PaginationParams, create_link_header
from ..db.entries import create_entry, get_entry, delete_entry, list_entries
from ..errors.problem_details import NotFoundError


logger = logging.getLogger(__name__)

entries_router = APIRouter(
    prefix="/entries",
    tags=["Entries"],
    responses={
        404: {"description": "Not Found"}
    }
)


@entries_router.post(
    "",
    response_model=Entry,
    status_code=201,
    summary="Create an entry",
    responses={
        201: {"description": "Entry created successfully"},
        422: {"description": "Invalid entry data"}
    }
)
async def create_entry_route(entry_data: EntryCreate) -> Entry:
    """Create a new entry; ``id`` and ``created_at`` are assigned by the database."""
    logger.info(f"Creating entry in category '{entry_data.category}'")
    return await create_entry(entry_data)


@entries_router.get(
    "",
    response_model=EntryListResponse,
    summary="List entries",
    description="List entries with keyset (seek) pagination in one of several stable orders.",
    responses={
        200: {"description": "Entries retrieved successfully"},
        400: {"description": "Bad Request - Invalid cursor or page size"}
    }
)
async def list_entries_route(
    request: Request,
    response: Response,
    limit: Annotated[Optional[int], Query(description="Number of entries per page")] = None,
    cursor: Annotated[Optional[str], Query(description="Opaque cursor from a previous page")] = None,
    direction: Annotated[Direction, Query(description="Move forward (next) or backward (prev) from the cursor")] = Direction.NEXT,
    sort: Annotated[EntrySort, Query(description="Listing order")] = EntrySort.RECENT,
    category: Annotated[Optional[str], Query(description="Only list entries in this category")] = None
) -> EntryListResponse:
    """List entries one page at a time.

    Without a cursor, ``direction=next`` starts at the beginning of the order
    and ``direction=prev`` at its end. Cursors are only valid for the ``sort``
    they were issued with. Entries are always returned in the listing order,
    whichever direction was requested.

    The response carries ``next_cursor`` / ``prev_cursor`` and a Link header
    (RFC 8288) with ready-made URLs for the neighbouring pages.
    """
    settings = get_settings()
    pagination = PaginationParams(
        limit=limit if limit is not None else settings.default_page_size,
        cursor=cursor,
        direction=direction
    )

    logger.info(
        f"Listing entries sort={sort.value} direction={direction.value} "
        f"limit={pagination.limit} category={category}"
    )

    page = await list_entries(pagination, sort=sort, category=category)

    base_url = str(request.url).split('?')[0]
    link_header = create_link_header(
        base_url=base_url,
        params={"limit": pagination.limit, "sort": sort.value, "category": category},
        next_cursor=page.next_cursor,
        prev_cursor=page.prev_cursor
    )
    if link_header:
        response.headers["Link"] = link_header

    return EntryListResponse(
        entries=page.rows,
        next_cursor=page.next_cursor,
        prev_cursor=page.prev_cursor,
        has_next=page.has_next,
        has_prev=page.has_prev,
        limit=page.limit
    )


@entries_router.get(
    "/{entry_id}",
    response_model=Entry,
    summary="Get an entry",
    responses={
        200: {"description": "Entry retrieved successfully"},
        404: {"description": "Entry not found"}
    }
)
async def get_entry_route(entry_id: int) -> Entry:
    """Get a specific entry by ID."""
    return await get_entry(entry_id)


@entries_router.delete(
    "/{entry_id}",
    status_code=204,
    summary="Delete an entry",
    responses={
        204: {"description": "Entry deleted successfully"},
        404: {"description": "Entry not found"}
    }
)
async def delete_entry_route(entry_id: int) -> Response:
    """Delete an entry.

    Outstanding cursors that point at the deleted entry stay valid: paging
    resumes from the deleted entry's position.
    """
    logger.info(f"Deleting entry {entry_id}")

    deleted = await delete_entry(entry_id)
    if not deleted:
        raise NotFoundError(f"Entry '{entry_id}' not found")

    return Response(status_code=204)
