"""
Console output utilities for julia-version using Rich.

This module provides user-facing output helpers for CLI commands.
For diagnostic or debug output, use :mod:`julia_version.utils.logger`.

Guidelines:
- print_error / print_warning: status messages, on stderr
- print_plain / print_table: results, on stdout
- Logging should never go through this module
"""

from __future__ import annotations

import os
import sys
import threading
from typing import IO, Any, Callable, Dict, List, Optional

from rich.table import Table
from rich.theme import Theme
from rich.console import Console

# ---------------------------------------------------------------------------
# Theme configuration
# ---------------------------------------------------------------------------

JULIA_VERSION_THEME = Theme(
    {
        "success": "bold green",
        "error": "bold red",
        "warning": "bold yellow",
        "info": "bold cyan",
        "dim": "dim",
        "highlight": "bold magenta",
    }
)

# ---------------------------------------------------------------------------
# Console lifecycle management
# ---------------------------------------------------------------------------

# One console per stream; keyed by ``stderr``.
_consoles: Dict[bool, Console] = {}
_console_lock = threading.Lock()


def _should_use_color(stream: Optional[IO[str]] = None) -> bool:
    """Return True if colored output should be enabled for *stream*."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("CI"):
        return False
    try:
        return (stream or sys.stdout).isatty()
    except (AttributeError, OSError):
        return False


def _get_console(stderr: bool = False) -> Console:
    """Return the shared Rich Console for stdout, or for stderr.

    Results go to stdout so that they can be piped; status messages go
    to stderr.
    """
    console = _consoles.get(stderr)
    if console is None:
        with _console_lock:
            console = _consoles.get(stderr)
            if console is None:
                use_color = _should_use_color(sys.stderr if stderr else sys.stdout)
                console = Console(
                    theme=JULIA_VERSION_THEME,
                    no_color=not use_color,
                    highlight=use_color,
                    stderr=stderr,
                )
                _consoles[stderr] = console
    return console


def reconfigure_console() -> None:
    """Drop the shared consoles.

    Useful if environment variables (e.g. NO_COLOR) change at runtime.
    """
    with _console_lock:
        _consoles.clear()


# ---------------------------------------------------------------------------
# Status message helpers
# ---------------------------------------------------------------------------


def print_error(message: str, *, prefix: str = "[ERROR]") -> None:
    """Print an error message to stderr."""
    _get_console(stderr=True).print(f"{prefix} {message}", style="error", markup=False)


def print_warning(message: str, *, prefix: str = "[WARNING]") -> None:
    """Print a warning message to stderr."""
    _get_console(stderr=True).print(f"{prefix} {message}", style="warning", markup=False)


def print_plain(message: str) -> None:
    """Print a line without markup or highlighting."""
    _get_console().print(message, markup=False, highlight=False)


# ---------------------------------------------------------------------------
# Structured output
# ---------------------------------------------------------------------------


def print_table(
    data: List[Dict[str, Any]],
    *,
    headers: Optional[List[str]] = None,
    title: Optional[str] = None,
    caption: Optional[str] = None,
    column_styles: Optional[Dict[str, Dict[str, Any]]] = None,
    row_styler: Optional[Callable[[Dict[str, Any]], Optional[str]]] = None,
) -> None:
    """Render structured data as a Rich table.

    Args:
        data: List of row dictionaries.
        headers: Column order. Defaults to keys of the first row.
        title: Optional table title.
        caption: Optional table caption.
        column_styles: Per-column style configuration.
        row_styler: Optional callback returning a row style.
    """
    if not data:
        return

    if headers is None:
        headers = list(data[0].keys())

    table = Table(
        title=title,
        caption=caption,
        show_header=True,
        header_style="bold",
    )

    column_styles = column_styles or {}
    for header in headers:
        config = column_styles.get(header, {})
        table.add_column(
            header,
            style=config.get("style"),
            justify=config.get("justify", "default"),
            no_wrap=config.get("no_wrap", False),
        )

    for row in data:
        values = [str(row.get(h, "")) for h in headers]
        style = row_styler(row) if row_styler else None
        table.add_row(*values, style=style)

    _get_console().print(table)


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_resolved(version: Optional[str]) -> str:
    """Return a Rich-markup label for a resolved version.

    Args:
        version: Resolved version, or ``None`` for a miss.

    Returns:
        Rich markup string.
    """
    if version is None:
        return "[warning]missing[/warning]"
    return f"[success]{version}[/success]"
