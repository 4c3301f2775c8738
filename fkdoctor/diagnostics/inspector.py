"""Schema inspection queries for foreign key diagnosis."""

from __future__ import annotations

import logging
from typing import Any

from fkdoctor.connectors.base import BaseConnector
from fkdoctor.diagnostics import queries
from fkdoctor.diagnostics.escaping import escape_identifier, escape_literal
from fkdoctor.diagnostics.models import ConstraintDescriptor, Row

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_LIMIT = 5


class SchemaInspector:
    """Runs the fixed battery of read-only catalog queries against one schema.

    Each value reaching SQL text is neutralised exactly once: identifiers and
    literals through the escaping helpers, or as bound parameters in
    ``list_foreign_keys``.
    """

    def __init__(self, connector: BaseConnector, schema: str) -> None:
        self._connector = connector
        self.schema = schema

    async def find_constraint(self, constraint_name: str) -> list[ConstraintDescriptor]:
        """Return one descriptor per column pair of the named foreign key."""
        query = queries.FIND_CONSTRAINT.format(
            schema=escape_literal(self.schema),
            constraint_name=escape_literal(constraint_name),
        )
        rows = await self._rows(query)
        return [ConstraintDescriptor.model_validate(row) for row in rows]

    async def server_version(self) -> str:
        rows = await self._rows(queries.SERVER_VERSION)
        return str(rows[0]["version"]) if rows else ""

    async def describe_table(self, table: str) -> list[Row]:
        return await self._rows(queries.DESCRIBE_TABLE.format(table=escape_identifier(table)))

    async def count_rows(self, table: str) -> int:
        rows = await self._rows(queries.COUNT_ROWS.format(table=escape_identifier(table)))
        return int(rows[0]["count"]) if rows else 0

    async def list_indexes(self, table: str) -> list[Row]:
        return await self._rows(queries.LIST_INDEXES.format(table=escape_identifier(table)))

    async def list_foreign_keys(self, table_a: str, table_b: str) -> list[Row]:
        """Every foreign key owned by either table, not just the failing one."""
        return await self._rows(queries.LIST_FOREIGN_KEYS, [self.schema, table_a, table_b])

    async def list_constraints(self, table_a: str, table_b: str) -> list[Row]:
        """Primary, unique and foreign key constraints owned by either table."""
        query = queries.LIST_CONSTRAINTS.format(
            schema=escape_literal(self.schema),
            table_a=escape_literal(table_a),
            table_b=escape_literal(table_b),
        )
        return await self._rows(query)

    async def sample_rows(self, table: str, limit: int = DEFAULT_SAMPLE_LIMIT) -> list[Row]:
        """Up to ``limit`` rows from ``table``; errors yield an empty list."""
        query = queries.SAMPLE_ROWS.format(table=escape_identifier(table), limit=int(limit))
        try:
            return await self._rows(query)
        except Exception as exc:
            logger.warning(
                f"Error fetching sample data from {table}: {exc}",
                extra={"table": table},
            )
            return []

    async def _rows(self, query: str, params: list[Any] | None = None) -> list[Row]:
        result = await self._connector.execute(query, params)
        return result.rows
