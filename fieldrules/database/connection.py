"""
fieldrules Database Connection
==============================

Async connection used by the database presence verifier.

Features:
- Connection config from URL
- SQLite support through aiosqlite
- Query logging
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qs, urlparse

import aiosqlite


logger = logging.getLogger(__name__)


class DatabaseDriver(Enum):
    """Supported database drivers."""

    SQLITE = "sqlite"


@dataclass
class DatabaseConfig:
    """
    Database configuration.

    Example:
        config = DatabaseConfig.from_url("sqlite:///./app.db")
        config = DatabaseConfig.from_url("sqlite:///:memory:")
    """

    driver: DatabaseDriver = DatabaseDriver.SQLITE
    database: str = ":memory:"
    connect_timeout: int = 30
    options: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_url(cls, url: str) -> DatabaseConfig:
        """
        Create config from database URL.

        Formats:
        - sqlite:///path/to/db.sqlite
        - sqlite:///:memory:
        """
        parsed = urlparse(url)

        if parsed.scheme not in ("sqlite", "sqlite3"):
            raise ValueError(f"Unsupported database driver: {parsed.scheme}")

        # SQLite path is in netloc + path
        path = parsed.netloc + parsed.path
        if path.startswith("/") and not parsed.netloc:
            path = path[1:]

        config = cls(database=path or ":memory:")

        if parsed.query:
            for key, values in parse_qs(parsed.query).items():
                config.options[key] = values[0] if len(values) == 1 else values
            if "timeout" in config.options:
                config.connect_timeout = int(config.options["timeout"])

        return config

    def get_dsn(self) -> str:
        """Get DSN string for database connection."""
        return f"sqlite:///{self.database}"


class Connection(ABC):
    """
    Abstract database connection.

    Implement for specific database drivers.
    """

    @property
    def connected(self) -> bool:
        """Whether `connect` has been called and not closed since."""
        return True

    @abstractmethod
    async def connect(self) -> None:
        """Establish connection."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close connection."""
        ...

    @abstractmethod
    async def execute(self, query: str, params: Optional[List[Any]] = None) -> int:
        """Execute a statement, returning the affected row count."""
        ...

    @abstractmethod
    async def fetch_one(
        self,
        query: str,
        params: Optional[List[Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        """Fetch single row."""
        ...

    async def __aenter__(self) -> Connection:
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()


class SQLiteConnection(Connection):
    """
    SQLite database connection.

    Uses aiosqlite for async support.
    """

    def __init__(self, config: DatabaseConfig) -> None:
        self.config = config
        self._conn: Optional[aiosqlite.Connection] = None

    @property
    def connected(self) -> bool:
        return self._conn is not None

    async def connect(self) -> None:
        """Connect to SQLite database."""
        self._conn = await aiosqlite.connect(
            self.config.database,
            timeout=self.config.connect_timeout,
        )
        self._conn.row_factory = aiosqlite.Row

    async def close(self) -> None:
        """Close connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    async def execute(self, query: str, params: Optional[List[Any]] = None) -> int:
        params = params or []
        logger.debug(f"SQL: {query} | Params: {params}")

        cursor = await self._conn.execute(query, params)
        await self._conn.commit()
        return cursor.rowcount

    async def fetch_one(
        self,
        query: str,
        params: Optional[List[Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        params = params or []
        logger.debug(f"SQL: {query} | Params: {params}")

        cursor = await self._conn.execute(query, params)
        row = await cursor.fetchone()

        if row:
            return dict(row)
        return None


def create_connection(config: DatabaseConfig) -> Connection:
    """Create an (unconnected) connection for the configured driver."""
    drivers = {
        DatabaseDriver.SQLITE: SQLiteConnection,
    }
    return drivers[config.driver](config)
