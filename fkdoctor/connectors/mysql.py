"""
MySQL Connector

Async-compatible MySQL connector using mysql-connector-python.

The underlying driver is synchronous, so pool creation and queries are
executed in worker threads via asyncio.to_thread. Concurrent queries are
bounded by a semaphore sized to the pool, so a pool of one serialises them.
"""

from __future__ import annotations

import asyncio
import logging
import time
from itertools import count
from typing import Any

import mysql.connector
import mysql.connector.pooling
from mysql.connector import Error as MySQLError

from fkdoctor.connectors.base import (
    BaseConnector,
    ConnectionError,
    QueryError,
    QueryResult,
)

logger = logging.getLogger(__name__)

_pool_ids = count(1)


class MySQLConnector(BaseConnector):
    """MySQL database connector backed by a MySQLConnectionPool."""

    def __init__(
        self,
        host: str,
        port: int = 3306,
        database: str = "",
        user: str = "root",
        password: str = "",
        pool_size: int = 5,
        timeout: int = 30,
        **kwargs,
    ) -> None:
        super().__init__(
            host=host,
            port=port,
            database=database,
            user=user,
            password=password,
            pool_size=pool_size,
            timeout=timeout,
            **kwargs,
        )
        self._semaphore = asyncio.Semaphore(pool_size)

    async def connect(self) -> None:
        """Create the pool and validate it with SELECT VERSION()."""
        if self._connected:
            return
        try:
            self._pool = await asyncio.to_thread(self._create_pool_sync)
            self._connected = True
        except MySQLError as exc:
            logger.debug(f"MySQL connection failed: {exc}")
            raise ConnectionError(f"Failed to connect to MySQL: {exc}") from exc
        except Exception as exc:
            logger.debug(f"MySQL connection failed: {exc}")
            raise ConnectionError(f"Connection error: {exc}") from exc

    async def execute(
        self,
        query: str,
        params: list[Any] | None = None,
    ) -> QueryResult:
        """Execute SQL query and return rows."""
        if not self._connected:
            raise ConnectionError("Not connected to database. Call connect() first.")

        async with self._semaphore:
            start_time = time.perf_counter()
            try:
                rows, columns = await asyncio.to_thread(self._execute_sync, query, params)
            except MySQLError as exc:
                logger.debug(f"MySQL query failed: {exc}\nQuery: {query[:200]}...")
                raise QueryError(f"Query execution failed: {exc}") from exc
            except Exception as exc:
                logger.debug(f"MySQL query failed: {exc}\nQuery: {query[:200]}...")
                raise QueryError(f"Query error: {exc}") from exc

        execution_time_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(
            "MySQL query executed",
            extra={"row_count": len(rows), "execution_time_ms": execution_time_ms},
        )
        return QueryResult(
            rows=rows,
            row_count=len(rows),
            columns=columns,
            execution_time_ms=execution_time_ms,
        )

    async def close(self) -> None:
        """Close every pooled connection. Safe to call more than once."""
        pool, self._pool = self._pool, None
        self._connected = False
        if pool is None:
            return
        # mysql-connector has no public call that closes every pooled connection
        await asyncio.to_thread(pool._remove_connections)
        logger.debug("MySQL connection pool closed")

    def _connection_kwargs(self) -> dict[str, Any]:
        kwargs = {
            "host": self.host,
            "port": self.port,
            "database": self.database or None,
            "user": self.user,
            "password": self.password,
            "autocommit": True,
            "connection_timeout": self.timeout,
        }
        kwargs.update(self.kwargs)
        return kwargs

    def _create_pool_sync(self):
        pool = mysql.connector.pooling.MySQLConnectionPool(
            pool_name=f"fkdoctor-{next(_pool_ids)}",
            pool_size=self.pool_size,
            **self._connection_kwargs(),
        )
        try:
            conn = pool.get_connection()
            cursor = conn.cursor()
            try:
                cursor.execute("SELECT VERSION()")
                cursor.fetchone()
            finally:
                cursor.close()
                conn.close()
        except Exception:
            # private, see close()
            pool._remove_connections()
            raise
        return pool

    def _execute_sync(
        self,
        query: str,
        params: list[Any] | None,
    ) -> tuple[list[dict[str, Any]], list[str]]:
        conn = self._pool.get_connection()
        cursor = conn.cursor(dictionary=True)
        try:
            if params is None:
                cursor.execute(query)
            else:
                cursor.execute(query, tuple(params))
            if cursor.with_rows:
                rows = cursor.fetchall()
                columns = list(rows[0].keys()) if rows else [col[0] for col in cursor.description]
                return rows, columns
            return [], []
        finally:
            cursor.close()
            conn.close()
