"""
Base Database Connector

Abstract base class for the query-execution handle used by the schema
inspector. Provides a consistent async interface with an explicit lifecycle:

- connect(): Create and validate the connection pool (once, before first use)
- execute(): Run a read query, inline or with bound parameters
- close(): Release the pool (idempotent)
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


# ============================================================================
# Data Models
# ============================================================================


class QueryResult(BaseModel):
    """Rows returned by a read query (SELECT, SHOW, DESCRIBE)."""

    rows: list[dict[str, Any]] = Field(..., description="Query result rows")
    row_count: int = Field(..., description="Number of rows returned")
    columns: list[str] = Field(..., description="Column names")
    execution_time_ms: float = Field(..., description="Query execution time in ms")


class ConnectorError(Exception):
    """Base exception for connector errors."""

    pass


class ConnectionError(ConnectorError):
    """Error establishing or managing database connection."""

    pass


class QueryError(ConnectorError):
    """Error executing database query."""

    pass


# ============================================================================
# Base Connector
# ============================================================================


class BaseConnector(ABC):
    """
    Abstract base class for database connectors.

    Usage:
        connector = MySQLConnector(host="127.0.0.1", port=3306, ...)
        await connector.connect()
        try:
            result = await connector.execute(
                "SELECT * FROM information_schema.tables WHERE table_schema = %s",
                ["app"],
            )
        finally:
            await connector.close()
    """

    def __init__(
        self,
        host: str,
        port: int,
        database: str,
        user: str,
        password: str,
        pool_size: int = 5,
        timeout: int = 30,
        **kwargs,
    ):
        """
        Initialize connector. No connection is made until connect().

        Args:
            host: Database host
            port: Database port
            database: Database/schema name
            user: Database user
            password: Database password
            pool_size: Connection pool size, also the concurrent query limit
            timeout: Connection timeout in seconds
            **kwargs: Additional driver-specific parameters
        """
        self.host = host
        self.port = port
        self.database = database
        self.user = user
        self.password = password
        self.pool_size = pool_size
        self.timeout = timeout
        self.kwargs = kwargs

        self._pool = None
        self._connected = False

        logger.debug(f"Initialized {self.__class__.__name__} for {user}@{host}:{port}/{database}")

    @abstractmethod
    async def connect(self) -> None:
        """
        Create the connection pool and validate it with a round trip.

        Raises:
            ConnectionError: If connection fails
        """
        pass

    @abstractmethod
    async def execute(
        self,
        query: str,
        params: list[Any] | None = None,
    ) -> QueryResult:
        """
        Execute a read query.

        Args:
            query: SQL query string (use %s placeholders with params)
            params: Bound parameters; None runs the text as-is

        Returns:
            QueryResult with rows and metadata

        Raises:
            QueryError: If query execution fails
            ConnectionError: If not connected
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """
        Release the connection pool.

        Should be idempotent - safe to call multiple times.
        """
        pass

    @property
    def is_connected(self) -> bool:
        """Check if connector is connected."""
        return self._connected

    async def __aenter__(self):
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
        return False

    def __repr__(self) -> str:
        """String representation."""
        status = "connected" if self._connected else "disconnected"
        return f"<{self.__class__.__name__} {self.user}@{self.host}:{self.port}/{self.database} ({status})>"
