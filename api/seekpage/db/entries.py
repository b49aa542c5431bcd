"""Database operations for entries."""

import logging
from typing import Optional

import asyncpg

from ..config import get_settings
from ..models.entries import (
    Entry, EntryCreate, EntrySort, ENTRY_COLUMNS, ENTRY_SORT_KEYS
)
from ..pagination import Page, PaginationParams, fetch_page
from ..errors.problem_details import NotFoundError, InternalServerError
from .connection import get_db_pool
from .source import TableSource


logger = logging.getLogger(__name__)

SELECT_COLUMNS = ", ".join(ENTRY_COLUMNS)


async def create_entry(entry_data: EntryCreate) -> Entry:
    """Insert a new entry.

    Args:
        entry_data: Entry creation data

    Returns:
        Created entry with its ID and timestamp

    Raises:
        InternalServerError: If database operation fails
    """
    pool = await get_db_pool()

    try:
        async with pool.acquire() as conn:
            query = f"""
                INSERT INTO entries (category, title, score)
                VALUES ($1, $2, $3)
                RETURNING {SELECT_COLUMNS}
            """

            row = await conn.fetchrow(
                query,
                entry_data.category,
                entry_data.title,
                entry_data.score
            )

            if not row:
                raise InternalServerError("Failed to create entry")

            entry = Entry.model_validate(dict(row))
            logger.info(f"Created entry {entry.id} in category {entry.category}")
            return entry

    except asyncpg.PostgresError as e:
        logger.error(f"Database error creating entry: {e}")
        raise InternalServerError(f"Database error: {e}")


async def get_entry(entry_id: int) -> Entry:
    """Get a single entry by ID.

    Raises:
        NotFoundError: If the entry doesn't exist
        InternalServerError: If database operation fails
    """
    pool = await get_db_pool()

    try:
        async with pool.acquire() as conn:
            row = await conn.fetchrow(
                f"SELECT {SELECT_COLUMNS} FROM entries WHERE id = $1",
                entry_id
            )

            if not row:
                raise NotFoundError(f"Entry '{entry_id}' not found")

            logger.debug(f"Retrieved entry {entry_id}")
            return Entry.model_validate(dict(row))

    except asyncpg.PostgresError as e:
        logger.error(f"Database error retrieving entry: {e}")
        raise InternalServerError(f"Database error: {e}")


async def delete_entry(entry_id: int) -> bool:
    """Delete an entry.

    Returns:
        True if the entry was deleted, False if it did not exist

    Raises:
        InternalServerError: If database operation fails
    """
    pool = await get_db_pool()

    try:
        async with pool.acquire() as conn:
            result = await conn.execute("DELETE FROM entries WHERE id = $1", entry_id)

            # "DELETE 1" means one row deleted
            deleted = result.split()[-1] == "1"

            if deleted:
                logger.info(f"Deleted entry {entry_id}")
            else:
                logger.debug(f"Entry {entry_id} not found")

            return deleted

    except asyncpg.PostgresError as e:
        logger.error(f"Database error deleting entry: {e}")
        raise InternalServerError(f"Database error: {e}")


async def list_entries(
    pagination: PaginationParams,
    sort: EntrySort = EntrySort.RECENT,
    category: Optional[str] = None
) -> Page[Entry]:
    """List entries one keyset page at a time.

    Args:
        pagination: Page size, cursor and direction
        sort: Named listing order
        category: Optional category to restrict the listing to

    Returns:
        Page of entries with neighbouring page cursors

    Raises:
        InvalidLimit: If the page size is out of bounds
        InvalidCursor: If the cursor is malformed or belongs to another order
        InternalServerError: If database operation fails
    """
    pool = await get_db_pool()
    settings = get_settings()

    source = TableSource(
        pool,
        "entries",
        ENTRY_COLUMNS,
        scope={"category": category} if category else None
    )

    try:
        page = await fetch_page(
            source,
            ENTRY_SORT_KEYS[sort],
            cursor=pagination.cursor,
            direction=pagination.direction,
            limit=pagination.limit,
            max_limit=settings.max_page_size
        )
    except asyncpg.PostgresError as e:
        logger.error(f"Database error listing entries: {e}")
        raise InternalServerError(f"Database error: {e}")

    logger.debug(f"Listed {len(page.rows)} entries (sort={sort.value}, category={category})")

    return Page[Entry](
        rows=[Entry.model_validate(row) for row in page.rows],
        next_cursor=page.next_cursor,
        prev_cursor=page.prev_cursor,
        has_next=page.has_next,
        has_prev=page.has_prev,
        limit=page.limit
    )
