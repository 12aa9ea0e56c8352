"""
Custom exception hierarchy for julia-version.

This module defines structured exception types used across julia-version.
All exceptions inherit from :class:`JuliaVersionError` and support optional
structured metadata via the ``details`` attribute to improve diagnostics
and logging.

Per-specifier "no match" results are *not* exceptions: the resolver returns
``None`` and the batch orchestrator decides, based on the ``if-missing``
policy, whether that becomes a :class:`NoMatchingVersionError`.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional


class JuliaVersionError(Exception):
    """Base exception for all julia-version errors.

    Args:
        message: Human-readable error message.
        details: Optional structured metadata describing the error.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.message: str = message
        # Internally normalize to a mutable dict
        self.details: MutableMapping[str, Any] = dict(details) if details else {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        formatted = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({formatted})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, details={dict(self.details)!r})"
        )


def _add_if(details: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Add a key to ``details`` only if ``value`` is not ``None``."""
    if value is not None:
        details[key] = value


def _truncate(text: str, max_length: int = 200) -> str:
    """Truncate long text for safe logging or error reporting."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


# ---------------------------------------------------------------------------
# Input errors
# ---------------------------------------------------------------------------


class InputError(JuliaVersionError):
    """Raised when user-supplied input cannot be interpreted."""


class UnparsableInputError(InputError):
    """Raised when the ``version`` input is not a string or list of strings.

    Args:
        raw: The raw input text.
    """

    __slots__ = ("raw",)

    def __init__(self, raw: str) -> None:
        super().__init__(f'Unable to parse "version" input:\n{raw}')
        self.raw = raw


class InvalidSpecifierError(InputError):
    """Raised when a version specifier does not match the specifier grammar.

    Args:
        specifier: The offending specifier.
    """

    __slots__ = ("specifier",)

    def __init__(self, specifier: str) -> None:
        super().__init__(f'Invalid version specifier provided: "{specifier}"')
        self.specifier = specifier


class InvalidIfMissingError(InputError):
    """Raised when the ``if-missing`` policy is neither ``warn`` nor ``error``.

    Args:
        value: The offending value.
    """

    __slots__ = ("value",)

    def __init__(self, value: str) -> None:
        super().__init__(
            f'Invalid "if-missing" input: "{value}". Expected "warn" or "error"'
        )
        self.value = value


class SpecifierCountError(InputError):
    """Raised when a command needs exactly one specifier but got several.

    Args:
        command: Name of the command.
        count: Number of specifiers supplied.
    """

    __slots__ = ("count",)

    def __init__(self, command: str, count: int) -> None:
        super().__init__(
            f'"{command}" takes exactly one version specifier, got {count}',
            {"command": command},
        )
        self.count = count


# ---------------------------------------------------------------------------
# Project errors
# ---------------------------------------------------------------------------


class ProjectError(JuliaVersionError):
    """Raised when Julia project metadata is missing or unusable."""


class InvalidCompatRangeError(ProjectError):
    """Raised when the Julia compat entry cannot be translated to a range.

    Args:
        compat: The raw compat entry.
    """

    __slots__ = ("compat",)

    def __init__(self, compat: Any) -> None:
        super().__init__(f"Invalid version range found in Julia compat: {compat}")
        self.compat = compat


class ProjectFileNotFoundError(ProjectError):
    """Raised when no Julia project file exists for a project path.

    Args:
        project: The project path that was searched.
    """

    __slots__ = ("project",)

    def __init__(self, project: str) -> None:
        super().__init__(f"Unable to locate Julia project file with project: {project}")
        self.project = project


class ManifestFileNotFoundError(ProjectError):
    """Raised when no Julia manifest file exists for a project path.

    Args:
        project: The project path that was searched.
    """

    __slots__ = ("project",)

    def __init__(self, project: str) -> None:
        super().__init__(
            f"Unable to locate Julia manifest file with project: {project}"
        )
        self.project = project


class MissingCompatRangeError(ProjectError):
    """Raised when ``min`` is requested without a Julia compat range."""

    def __init__(self) -> None:
        super().__init__(
            'Unable to use version "min" when the Julia project file does not '
            "specify a compat for Julia"
        )


# ---------------------------------------------------------------------------
# Resolution errors
# ---------------------------------------------------------------------------


class NoMatchingVersionError(JuliaVersionError):
    """Raised when a specifier resolves to no Julia release.

    Args:
        specifier: The specifier that could not be resolved.
    """

    __slots__ = ("specifier",)

    def __init__(self, specifier: str) -> None:
        super().__init__(f'No Julia version exists matching specifier: "{specifier}"')
        self.specifier = specifier


# ---------------------------------------------------------------------------
# Network errors
# ---------------------------------------------------------------------------


class NetworkError(JuliaVersionError):
    """Raised when HTTP or network operations fail.

    Args:
        message: Error description.
        url: URL being accessed.
        status_code: HTTP status code, if available.
        response_body: Raw response body, truncated for safety.
    """

    __slots__ = ("url", "status_code", "response_body")

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "url", url)
        _add_if(details, "status_code", status_code)

        if response_body is not None:
            details["response"] = _truncate(response_body)

        super().__init__(message, details)

        self.url = url
        self.status_code = status_code
        self.response_body = response_body


class ResourceNotFoundError(NetworkError):
    """Raised when a requested URL does not exist (HTTP 404)."""


class CatalogueUnavailableError(NetworkError):
    """Raised when ``versions.json`` cannot be downloaded or decoded."""


# ---------------------------------------------------------------------------
# File and configuration errors
# ---------------------------------------------------------------------------


class FileOperationError(JuliaVersionError):
    """Raised when file system operations fail.

    Args:
        message: Error description.
        file_path: Path to the file involved.
        operation: Operation being performed (read/parse/write).
        original_error: Original exception that triggered this error.
    """

    __slots__ = ("file_path", "operation", "original_error")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", file_path)
        _add_if(details, "operation", operation)
        _add_if(
            details,
            "original_error",
            str(original_error) if original_error else None,
        )

        super().__init__(message, details)

        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error


class ConfigError(JuliaVersionError):
    """Raised when the julia-version configuration file is invalid.

    Args:
        message: Error description.
        config_path: Path to the configuration file.
        option: Name of the offending option, if any.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", config_path)
        _add_if(details, "option", option)

        super().__init__(message, details)

        self.config_path = config_path
        self.option = option
