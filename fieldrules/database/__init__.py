"""
fieldrules Database
===================

Row-count collaborators for the unique_with rule.
"""

from fieldrules.database.connection import (
    Connection,
    DatabaseConfig,
    DatabaseDriver,
    SQLiteConnection,
    create_connection,
)
from fieldrules.database.presence import (
    CallablePresenceVerifier,
    DatabasePresenceVerifier,
    PresenceVerifier,
    build_count_query,
)

__all__ = [
    "Connection",
    "DatabaseConfig",
    "DatabaseDriver",
    "SQLiteConnection",
    "create_connection",
    "PresenceVerifier",
    "CallablePresenceVerifier",
    "DatabasePresenceVerifier",
    "build_count_query",
]
