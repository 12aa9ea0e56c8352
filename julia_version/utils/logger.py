"""
Logging utilities for julia-version.

This module centralizes logger configuration, formatting, and retrieval
for the julia-version package. It is designed to be safe for libraries and
CLI usage, avoiding duplicate handlers and supporting optional colorized
output. When running inside GitHub Actions, records are rendered as
workflow commands (``::warning::...``) so they surface as annotations.
"""

from __future__ import annotations

import os
import sys
import logging
import threading
from typing import IO, Optional

from julia_version.constants import (
    LOG_DATE_FORMAT,
    LOG_DEFAULT_FORMAT,
    LOG_VERBOSE_FORMAT,
)

_ROOT = "julia_version"

_logging_configured: bool = False
_lock = threading.Lock()


class ColoredFormatter(logging.Formatter):
    """Logging formatter with optional ANSI color support."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(
        self,
        fmt: str,
        *,
        datefmt: Optional[str] = None,
        use_color: bool = True,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        if self.use_color and self._should_use_color():
            color = self.COLORS.get(record.levelname)
            if color:
                record = logging.makeLogRecord(record.__dict__)
                record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)

    @staticmethod
    def _should_use_color() -> bool:
        """Determine whether ANSI colors should be emitted."""
        if os.environ.get("NO_COLOR"):
            return False
        if os.environ.get("CI"):
            return False
        try:
            return sys.stderr.isatty()
        except (AttributeError, OSError):
            return False


class ActionsFormatter(logging.Formatter):
    """Render records as GitHub Actions workflow commands.

    ``DEBUG`` maps to ``::debug::`` (only shown when step debugging is
    enabled), ``WARNING`` to ``::warning::`` and ``ERROR``/``CRITICAL`` to
    ``::error::``. ``INFO`` records are printed as plain lines.
    """

    COMMANDS = {
        "DEBUG": "debug",
        "WARNING": "warning",
        "ERROR": "error",
        "CRITICAL": "error",
    }

    def __init__(self) -> None:
        super().__init__(fmt="%(message)s")

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = self.COMMANDS.get(record.levelname)
        if command is None:
            return message
        return f"::{command}::{_escape_command_data(message)}"


def _escape_command_data(data: str) -> str:
    """Escape a workflow command payload so newlines survive."""
    return data.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def running_in_github_actions() -> bool:
    """Return True when executing inside a GitHub Actions runner."""
    return os.environ.get("GITHUB_ACTIONS", "").lower() == "true"


def setup_logging(
    *,
    level: int = logging.INFO,
    verbose: bool = False,
    stream: Optional[IO[str]] = None,
) -> None:
    """Configure logging for julia-version.

    This function is safe to call multiple times; configuration is
    protected by a process-wide lock.

    Args:
        level: Logging level (e.g., ``logging.INFO``, ``logging.DEBUG``).
        verbose: Enable verbose formatting with timestamps.
        stream: Output stream; defaults to ``sys.stderr``.
    """
    global _logging_configured

    with _lock:
        root_logger = logging.getLogger(_ROOT)
        root_logger.handlers.clear()
        root_logger.setLevel(level)

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setLevel(level)

        formatter: logging.Formatter
        if running_in_github_actions():
            formatter = ActionsFormatter()
        else:
            fmt = LOG_VERBOSE_FORMAT if verbose else LOG_DEFAULT_FORMAT
            formatter = ColoredFormatter(
                fmt,
                datefmt=LOG_DATE_FORMAT,
                use_color=not os.environ.get("NO_COLOR"),
            )
        handler.setFormatter(formatter)

        root_logger.addHandler(handler)
        root_logger.propagate = False
        _logging_configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger within the julia_version namespace.

    Args:
        name: Logger name. Use ``__name__`` for module-relative naming.

    Returns:
        A logger instance under the ``julia_version`` hierarchy.
    """
    if not name or name == _ROOT:
        logger = logging.getLogger(_ROOT)
    elif name.startswith(f"{_ROOT}."):
        logger = logging.getLogger(name)
    else:
        logger = logging.getLogger(f"{_ROOT}.{name}")

    # Ensure library-safe behavior if logging is not configured
    if not logger.handlers and (not logger.parent or not logger.parent.handlers):
        logger.addHandler(logging.NullHandler())

    return logger


def disable_logging() -> None:
    """Disable all julia-version logging output."""
    global _logging_configured

    with _lock:
        root_logger = logging.getLogger(_ROOT)
        root_logger.handlers.clear()
        root_logger.addHandler(logging.NullHandler())
        root_logger.setLevel(logging.NOTSET)
        root_logger.propagate = True
        _logging_configured = False
