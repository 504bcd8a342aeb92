"""
fieldrules Presence Verifiers
=============================

Row-count collaborators for the unique_with rule.

    get_count(table, column, value, ignore_id, ignore_column, extra) -> int

`CallablePresenceVerifier` wraps any synchronous function with that
signature. `DatabasePresenceVerifier` runs a COUNT(*) query over an async
connection and is awaited by `Validator.validate_async`.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, ClassVar, Dict, List, Optional, Tuple, Union

from fieldrules.core.config import Config
from fieldrules.database.connection import (
    Connection,
    DatabaseConfig,
    create_connection,
)
from fieldrules.utils.logger import get_logger

logger = get_logger("fieldrules.database")

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_.]*$")


class PresenceVerifier(ABC):
    """
    Count rows matching a value and a set of extra constraints.

    `is_async` tells the unique_with rule whether `get_count` returns an
    awaitable.
    """

    is_async: ClassVar[bool] = False

    @abstractmethod
    def get_count(
        self,
        table: str,
        column: str,
        value: Any,
        ignore_id: Optional[str] = None,
        ignore_column: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> Union[int, Awaitable[int]]:
        """
        Count rows of `table` where `column` equals `value`.

        Args:
            table: Table name
            column: Column compared against value
            value: Value being validated
            ignore_id: Id of a row to leave out of the count
            ignore_column: Column holding ignore_id ("id" when None)
            extra: Additional column -> value equality constraints
        """
        ...


class CallablePresenceVerifier(PresenceVerifier):
    """
    Presence verifier backed by a plain function.

    Example:
        def count(table, column, value, ignore_id, ignore_column, extra):
            return repository.count(table, {column: value, **extra})

        validator.with_presence_verifier(CallablePresenceVerifier(count))
    """

    def __init__(self, func: Callable[..., int]) -> None:
        self.func = func

    def get_count(
        self,
        table: str,
        column: str,
        value: Any,
        ignore_id: Optional[str] = None,
        ignore_column: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> int:
        return int(self.func(table, column, value, ignore_id, ignore_column, extra or {}))


def _identifier(name: str) -> str:
    if not _IDENTIFIER.match(name):
        raise ValueError(f"Invalid SQL identifier: {name!r}")
    return name


def build_count_query(
    table: str,
    column: str,
    value: Any,
    ignore_id: Optional[str] = None,
    ignore_column: Optional[str] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> Tuple[str, List[Any]]:
    """
    Build the COUNT(*) statement and its bindings.

    Example:
        >>> build_count_query("users", "email", "a@b.c", "3", None, {"active": 1})
        ('SELECT COUNT(*) AS count FROM users WHERE email = ? AND id <> ? AND active = ?', ['a@b.c', '3', 1])

    Raises:
        ValueError: If a table or column name is not a plain identifier
    """
    query = f"SELECT COUNT(*) AS count FROM {_identifier(table)} WHERE {_identifier(column)} = ?"
    params: List[Any] = [value]

    if ignore_id is not None:
        query += f" AND {_identifier(ignore_column or 'id')} <> ?"
        params.append(ignore_id)

    for extra_column, extra_value in (extra or {}).items():
        if extra_value is None:
            query += f" AND {_identifier(extra_column)} IS NULL"
        else:
            query += f" AND {_identifier(extra_column)} = ?"
            params.append(extra_value)

    return query, params


class DatabasePresenceVerifier(PresenceVerifier):
    """
    Presence verifier running COUNT(*) queries on a database connection.

    The connection is opened on first use when it is not connected yet.

    Example:
        verifier = DatabasePresenceVerifier.from_url("sqlite:///app.db")
        result = await validator.with_presence_verifier(verifier).validate_async(data)
    """

    is_async: ClassVar[bool] = True

    def __init__(self, connection: Connection) -> None:
        self.connection = connection

    @classmethod
    def from_url(cls, url: str) -> DatabasePresenceVerifier:
        return cls(create_connection(DatabaseConfig.from_url(url)))

    @classmethod
    def from_config(cls, config: Config) -> Optional[DatabasePresenceVerifier]:
        """Verifier for `database.url`, or None when it is not set."""
        url = config.get("database.url")
        if not url:
            return None
        return cls.from_url(url)

    async def get_count(
        self,
        table: str,
        column: str,
        value: Any,
        ignore_id: Optional[str] = None,
        ignore_column: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> int:
        query, params = build_count_query(
            table, column, value, ignore_id, ignore_column, extra
        )

        if not self.connection.connected:
            await self.connection.connect()

        row = await self.connection.fetch_one(query, params)
        count = int(row["count"]) if row else 0

        logger.debug("Presence count", table=table, column=column, count=count)
        return count

    async def close(self) -> None:
        await self.connection.close()
