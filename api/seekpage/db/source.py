"""Range source reading from a PostgreSQL table through asyncpg."""

import logging
from typing import Any, Dict, List, Optional, Sequence

from asyncpg import Pool

from ..pagination.query import SeekQuery, quote_ident, render_order_by, render_sql


logger = logging.getLogger(__name__)


class TableSource:
    """Seek queries against one table.

    Args:
        pool: asyncpg connection pool
        table: Table name
        columns: Columns to select; must include every sort key field
        scope: Optional fixed equality filters, e.g. ``{"category": "news"}``
    """

    def __init__(
        self,
        pool: Pool,
        table: str,
        columns: Sequence[str],
        scope: Optional[Dict[str, Any]] = None
    ):
        self.pool = pool
        self.table = table
        self.columns = list(columns)
        self.scope = dict(scope or {})

    def build_sql(self, query: SeekQuery) -> tuple[str, List[Any]]:
        """Render the SELECT statement and its parameters for a seek query."""
        conditions = []
        params: List[Any] = []

        for column, value in self.scope.items():
            params.append(value)
            conditions.append(f"{quote_ident(column)} = ${len(params)}")

        if query.predicate is not None:
            fragment, seek_params = render_sql(query.predicate, start_param=len(params) + 1)
            conditions.append(fragment)
            params.extend(seek_params)

        select_list = ", ".join(quote_ident(column) for column in self.columns)
        sql = f"SELECT {select_list} FROM {quote_ident(self.table)}"
        if conditions:
            sql += " WHERE " + " AND ".join(conditions)
        sql += f" {render_order_by(query.order_by)} LIMIT ${len(params) + 1}"
        params.append(query.limit)

        return sql, params

    async def range_fetch(self, query: SeekQuery) -> List[Dict[str, Any]]:
        sql, params = self.build_sql(query)
        logger.debug(f"Seek query on {self.table}: {sql}")

        async with self.pool.acquire() as conn:
            rows = await conn.fetch(sql, *params)

        return [dict(row) for row in rows]
