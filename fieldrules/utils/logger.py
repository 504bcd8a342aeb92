"""
fieldrules Logger
=================

Structured logging for rule evaluation and presence lookups.
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Any, Dict, List, Optional, Union


class LogLevel(IntEnum):
    """Log levels."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @classmethod
    def parse(cls, value: Union[str, int, "LogLevel"]) -> "LogLevel":
        """Resolve a level from its name ("debug") or numeric value."""
        if isinstance(value, LogLevel):
            return value
        if isinstance(value, int):
            return cls(value)
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown log level: {value!r}")


@dataclass
class LogRecord:
    """
    Structured log record.

    Attributes:
        level: Log level
        message: Log message
        timestamp: Record timestamp
        context: Additional context (field, rule, table...)
        exception: Exception info
    """

    level: LogLevel
    message: str
    timestamp: datetime = field(default_factory=datetime.now)
    context: Dict[str, Any] = field(default_factory=dict)
    exception: Optional[BaseException] = None
    logger_name: str = "fieldrules"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data = {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.name,
            "message": self.message,
            "logger": self.logger_name,
        }

        if self.context:
            data["context"] = self.context

        if self.exception:
            data["exception"] = {
                "type": type(self.exception).__name__,
                "message": str(self.exception),
            }

        return data

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), default=str)


class LogFormatter:
    """Base log formatter."""

    def format(self, record: LogRecord) -> str:
        """Format log record."""
        raise NotImplementedError


class TextFormatter(LogFormatter):
    """
    Plain text formatter.

    Example output:
        2024-01-15 10:30:45 [DEBUG] fieldrules.validation Rule failed field=email rule=unique_with
    """

    def __init__(
        self,
        format_string: Optional[str] = None,
        date_format: str = "%Y-%m-%d %H:%M:%S",
    ):
        self.format_string = format_string or "{timestamp} [{level}] {logger} {message}"
        self.date_format = date_format

    def format(self, record: LogRecord) -> str:
        message = record.message

        if record.context:
            pairs = " ".join(f"{k}={v}" for k, v in record.context.items())
            message = f"{message} {pairs}"

        output = self.format_string.format(
            timestamp=record.timestamp.strftime(self.date_format),
            level=record.level.name,
            message=message,
            logger=record.logger_name,
        )

        if record.exception:
            output += "\n" + "".join(
                traceback.format_exception(
                    type(record.exception),
                    record.exception,
                    record.exception.__traceback__,
                )
            )

        return output


class JsonFormatter(LogFormatter):
    """JSON formatter, one object per line."""

    def format(self, record: LogRecord) -> str:
        return record.to_json()


class StreamHandler:
    """Writes formatted records to a stream (stderr by default)."""

    def __init__(
        self,
        stream: Any = None,
        formatter: Optional[LogFormatter] = None,
        level: LogLevel = LogLevel.DEBUG,
    ):
        self.stream = stream or sys.stderr
        self.formatter = formatter or TextFormatter()
        self.level = level

    def handle(self, record: LogRecord) -> None:
        """Emit the record if it clears the handler level."""
        if record.level >= self.level:
            self.stream.write(self.formatter.format(record) + "\n")
            self.stream.flush()


class Logger:
    """
    Structured logger.

    Example:
        logger = get_logger("fieldrules.validation")
        logger.debug("Rule failed", field="email", rule="unique_with")

        scoped = logger.with_context(table="users")
        scoped.info("Counting rows")
    """

    def __init__(
        self,
        name: str = "fieldrules",
        level: LogLevel = LogLevel.WARNING,
        handlers: Optional[List[StreamHandler]] = None,
    ):
        self.name = name
        self.level = level
        self._handlers = handlers if handlers is not None else []
        self._context: Dict[str, Any] = {}

    def add_handler(self, handler: StreamHandler) -> "Logger":
        """Add log handler."""
        self._handlers.append(handler)
        return self

    def set_handlers(self, handlers: List[StreamHandler]) -> "Logger":
        """Replace all handlers."""
        self._handlers[:] = handlers
        return self

    def with_context(self, **context: Any) -> "Logger":
        """Create a logger sharing handlers with extra context."""
        scoped = Logger(name=self.name, level=self.level, handlers=self._handlers)
        scoped._context = {**self._context, **context}
        return scoped

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self.level

    def _log(
        self,
        level: LogLevel,
        message: str,
        exception: Optional[BaseException] = None,
        **context: Any,
    ) -> None:
        if level < self.level:
            return

        record = LogRecord(
            level=level,
            message=message,
            context={**self._context, **context},
            exception=exception,
            logger_name=self.name,
        )

        for handler in self._handlers:
            handler.handle(record)

    def debug(self, message: str, **context: Any) -> None:
        self._log(LogLevel.DEBUG, message, **context)

    def info(self, message: str, **context: Any) -> None:
        self._log(LogLevel.INFO, message, **context)

    def warning(self, message: str, **context: Any) -> None:
        self._log(LogLevel.WARNING, message, **context)

    def error(
        self,
        message: str,
        exception: Optional[BaseException] = None,
        **context: Any,
    ) -> None:
        self._log(LogLevel.ERROR, message, exception, **context)


# Logger registry, keyed by name
_loggers: Dict[str, Logger] = {}


def get_logger(
    name: str = "fieldrules",
    level: Optional[LogLevel] = None,
) -> Logger:
    """
    Get or create logger.

    New loggers get a stderr handler and the WARNING level unless
    `configure_logging` has been called.
    """
    if name not in _loggers:
        _loggers[name] = Logger(
            name=name,
            level=level or LogLevel.WARNING,
            handlers=[StreamHandler()],
        )
    elif level is not None:
        _loggers[name].level = level

    return _loggers[name]


def configure_logging(
    level: Union[str, int, LogLevel] = LogLevel.WARNING,
    format: str = "text",
    stream: Any = None,
) -> Logger:
    """
    Configure every fieldrules logger.

    Args:
        level: Minimum level ("debug", "info", ... or LogLevel)
        format: Output format ("text" or "json")
        stream: Output stream (stderr by default)

    Returns:
        The root "fieldrules" logger
    """
    resolved = LogLevel.parse(level)
    formatter = JsonFormatter() if format == "json" else TextFormatter()

    root = get_logger("fieldrules")
    for logger in [root, *_loggers.values()]:
        logger.level = resolved
        logger.set_handlers([
            StreamHandler(stream=stream, formatter=formatter, level=resolved)
        ])

    return root
