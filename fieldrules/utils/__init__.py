"""
fieldrules Utils Package
========================

Logging and value helpers.
"""

from __future__ import annotations

from fieldrules.utils.logger import Logger, LogLevel, get_logger, configure_logging
from fieldrules.utils.helpers import (
    # Value helpers
    is_digits,
    is_numeric,
    is_empty,
    is_falsy,
    loosely_equal,
    to_number,
    # Collection helpers
    data_get,
    has_key,
    flatten,
    # Time helpers
    to_strptime_format,
    matches_date_format,
    parse_timestamp,
)

__all__ = [
    "Logger",
    "LogLevel",
    "get_logger",
    "configure_logging",
    "is_digits",
    "is_numeric",
    "is_empty",
    "is_falsy",
    "loosely_equal",
    "to_number",
    "data_get",
    "has_key",
    "flatten",
    "to_strptime_format",
    "matches_date_format",
    "parse_timestamp",
]
