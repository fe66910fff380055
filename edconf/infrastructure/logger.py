#!/usr/bin/env python3
"""Structured logging system for edconf.

The logger is the diagnostic sink of the bootstrap and the auto-mode
dispatcher. It provides:
- Multiple log levels (DEBUG, INFO, WARNING, ERROR)
- Structured context (key-value pairs)
- Console and rotating file handlers
- Thread-local context management

Example:
    >>> logger = Logger(level=LogLevel.INFO)
    >>> logger.info("Resolved locations", root="~/.emacs.d/", host="alpha")
    >>> with logger.add_context(path="/a/foo.txt"):
    ...     logger.debug("Dispatching file event")
"""

import logging
import logging.handlers
import threading
from contextlib import contextmanager
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


class LogLevel(IntEnum):
    """Log levels matching Python's logging module."""

    DEBUG = logging.DEBUG  # 10
    INFO = logging.INFO  # 20
    WARNING = logging.WARNING  # 30
    ERROR = logging.ERROR  # 40
    CRITICAL = logging.CRITICAL  # 50


class Logger:
    """Structured logger with context support.

    Context given as keyword arguments, or pushed with ``add_context``,
    is appended to the message as ``key=value`` pairs and attached to the
    underlying record as ``record.context``.
    """

    # Thread-local storage for context
    _context_stack = threading.local()

    def __init__(
        self,
        name: str = "edconf",
        level: Union[LogLevel, str] = LogLevel.INFO,
        handlers: Optional[List[logging.Handler]] = None,
    ):
        """Initialize logger.

        Args:
            name: Logger name for identification
            level: Minimum log level to output
            handlers: Optional list of logging handlers
        """
        self.name = name
        self.logger = logging.getLogger(name)
        self.set_level(level)

        if handlers is None:
            handlers = [self._create_console_handler()]

        self.logger.handlers.clear()
        for handler in handlers:
            self.logger.addHandler(handler)

        self.logger.propagate = False

    def _create_console_handler(self) -> logging.StreamHandler:
        """Create default console handler with formatting."""
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT))
        return handler

    def create_file_handler(
        self,
        filename: Union[str, Path],
        max_bytes: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5,
    ) -> logging.handlers.RotatingFileHandler:
        """Create rotating file handler.

        Args:
            filename: Path to log file
            max_bytes: Maximum size before rotation
            backup_count: Number of backup files to keep

        Returns:
            Configured rotating file handler
        """
        handler = logging.handlers.RotatingFileHandler(
            filename, maxBytes=max_bytes, backupCount=backup_count
        )
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT))
        return handler

    def add_handler(self, handler: logging.Handler) -> None:
        """Add a new output handler."""
        self.logger.addHandler(handler)

    def remove_handler(self, handler: logging.Handler) -> None:
        """Remove an output handler."""
        self.logger.removeHandler(handler)

    def set_level(self, level: Union[LogLevel, str]) -> None:
        """Set the minimum log level.

        Args:
            level: New log level (LogLevel or string)
        """
        if isinstance(level, str):
            level = LogLevel[level.upper()]
        self.logger.setLevel(level)

    def get_level(self) -> LogLevel:
        """Get current log level."""
        return LogLevel(self.logger.level)

    def _get_context(self) -> Dict[str, Any]:
        """Merge all thread-local context levels into one dictionary."""
        if not hasattr(self._context_stack, "stack"):
            self._context_stack.stack = [{}]

        context = {}
        for ctx in self._context_stack.stack:
            context.update(ctx)
        return context

    def _format_message(self, msg: str, context: Dict[str, Any]) -> str:
        """Format message with context.

        Args:
            msg: Log message
            context: Context dictionary

        Returns:
            Formatted message with context
        """
        if context:
            ctx_str = " ".join(f"{k}={v}" for k, v in context.items())
            return f"{msg} | {ctx_str}"
        return msg

    @contextmanager
    def add_context(self, **kwargs):
        """Context manager to add temporary context.

        Args:
            **kwargs: Key-value pairs to add to context

        Example:
            >>> with logger.add_context(path="/a/foo.txt"):
            ...     logger.info("Activating modes")
        """
        if not hasattr(self._context_stack, "stack"):
            self._context_stack.stack = [{}]

        self._context_stack.stack.append(kwargs)
        try:
            yield
        finally:
            self._context_stack.stack.pop()

    def _log(self, level: LogLevel, msg: str, context: Dict[str, Any], **kwargs) -> None:
        if not self.logger.isEnabledFor(level):
            return
        combined_context = self._get_context()
        combined_context.update(context)
        formatted_msg = self._format_message(msg, combined_context)
        self.logger.log(level, formatted_msg, extra={"context": combined_context}, **kwargs)

    def debug(self, msg: str, **context) -> None:
        """Log debug message."""
        self._log(LogLevel.DEBUG, msg, context)

    def info(self, msg: str, **context) -> None:
        """Log info message."""
        self._log(LogLevel.INFO, msg, context)

    def warning(self, msg: str, **context) -> None:
        """Log warning message."""
        self._log(LogLevel.WARNING, msg, context)

    def error(self, msg: str, **context) -> None:
        """Log error message."""
        self._log(LogLevel.ERROR, msg, context)

    def exception(self, msg: str, exc: BaseException, **context) -> None:
        """Log exception with traceback.

        Args:
            msg: Log message
            exc: Exception to log
            **context: Additional context key-value pairs
        """
        context["exception_type"] = type(exc).__name__
        context["exception_message"] = str(exc)
        self._log(LogLevel.ERROR, msg, context, exc_info=exc)

    def is_enabled_for(self, level: Union[LogLevel, str]) -> bool:
        """Check if logger is enabled for given level."""
        if isinstance(level, str):
            level = LogLevel[level.upper()]
        return self.logger.isEnabledFor(level)


# Global logger instance
_global_logger: Optional[Logger] = None


def get_logger(name: str = "edconf") -> Logger:
    """Get or create a logger instance.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    global _global_logger
    if _global_logger is None or _global_logger.name != name:
        _global_logger = Logger(name=name)
    return _global_logger


def set_global_logger(logger: Logger) -> None:
    """Set the global logger instance."""
    global _global_logger
    _global_logger = logger
