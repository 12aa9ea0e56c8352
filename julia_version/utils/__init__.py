"""
Utility helpers for julia-version.

This package provides reusable utilities used across julia-version, including:

- Console output helpers (Rich-based)
- Logging configuration and retrieval
- Filesystem and TOML helpers
- Async HTTP client utilities
- Version sorting and de-duplication helpers

Only symbols listed in ``__all__`` are considered part of the public API.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Filesystem utilities
# ---------------------------------------------------------------------------

from julia_version.utils.filesystem import (
    append_outputs,
    find_first_file,
    read_toml_file,
    safe_read_file,
)

# ---------------------------------------------------------------------------
# Logging utilities
# ---------------------------------------------------------------------------

from julia_version.utils.logger import (
    disable_logging,
    get_logger,
    running_in_github_actions,
    setup_logging,
)

# ---------------------------------------------------------------------------
# Console utilities
# ---------------------------------------------------------------------------

from julia_version.utils.console import (
    format_resolved,
    print_error,
    print_plain,
    print_table,
    print_warning,
    reconfigure_console,
)

# ---------------------------------------------------------------------------
# HTTP utilities
# ---------------------------------------------------------------------------

from julia_version.utils.http import HTTPClient

# ---------------------------------------------------------------------------
# Version utilities
# ---------------------------------------------------------------------------

from julia_version.utils.version_utils import (
    parse_range,
    parse_version,
    strip_version_prefix,
    unique,
    version_sort,
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    # Console
    "print_error",
    "print_plain",
    "print_table",
    "print_warning",
    "format_resolved",
    "reconfigure_console",
    # Logging
    "get_logger",
    "setup_logging",
    "disable_logging",
    "running_in_github_actions",
    # Filesystem
    "safe_read_file",
    "read_toml_file",
    "find_first_file",
    "append_outputs",
    # HTTP
    "HTTPClient",
    # Version utilities
    "parse_range",
    "parse_version",
    "strip_version_prefix",
    "unique",
    "version_sort",
]
