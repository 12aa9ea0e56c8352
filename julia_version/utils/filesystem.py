"""
Filesystem utilities for julia-version.

This module provides safe helpers for reading text and TOML files, locating
the first existing file among prioritized candidates, and appending
step outputs to a GitHub Actions output file. All filesystem errors are
normalized to ``FileOperationError``.
"""

from __future__ import annotations

import uuid
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence, Union

import tomli as tomllib

from julia_version.constants import MAX_FILE_SIZE
from julia_version.exceptions import FileOperationError
from julia_version.utils.logger import get_logger

logger = get_logger("filesystem")

PathLike = Union[str, Path]


def _validated_file(path: Path, *, must_exist: bool = True) -> Path:
    """Validate and resolve a file path."""
    if must_exist:
        if not path.exists():
            raise FileOperationError(
                f"File not found: {path}",
                file_path=str(path),
                operation="read",
            )
        if not path.is_file():
            raise FileOperationError(
                f"Not a file: {path}",
                file_path=str(path),
                operation="read",
            )
    return path.resolve()


def safe_read_file(
    file_path: PathLike,
    *,
    max_size: Optional[int] = MAX_FILE_SIZE,
    encoding: str = "utf-8",
) -> str:
    """Safely read a text file with optional size limits.

    Args:
        file_path: Path to the file.
        max_size: Maximum allowed file size in bytes (None disables limit).
        encoding: Text encoding.

    Returns:
        File contents as a string.
    """
    path = _validated_file(Path(file_path))
    size = path.stat().st_size

    if max_size is not None and size > max_size:
        raise FileOperationError(
            f"File too large: {size} bytes (max {max_size})",
            file_path=str(path),
            operation="read",
        )

    try:
        return path.read_text(encoding=encoding)
    except Exception as exc:
        raise FileOperationError(
            f"Failed to read file: {exc}",
            file_path=str(path),
            operation="read",
            original_error=exc,
        ) from exc


def read_toml_file(file_path: PathLike) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Args:
        file_path: Path to the TOML file.

    Returns:
        Parsed TOML as a nested dictionary.

    Raises:
        FileOperationError: File cannot be read or is not valid TOML.
    """
    content = safe_read_file(file_path)

    try:
        return tomllib.loads(content)
    except tomllib.TOMLDecodeError as exc:
        raise FileOperationError(
            f"Invalid TOML in {Path(file_path).name}: {exc}",
            file_path=str(file_path),
            operation="parse",
            original_error=exc,
        ) from exc


def find_first_file(directory: PathLike, filenames: Sequence[str]) -> Optional[Path]:
    """Return the first of *filenames* that exists as a regular file.

    Candidates are joined onto *directory* without resolving, so a relative
    directory yields a relative path.

    Args:
        directory: Directory to search.
        filenames: Candidate names in priority order.

    Returns:
        Path to the first existing file, or ``None``.
    """
    base = Path(directory)
    for filename in filenames:
        candidate = base / filename
        if candidate.is_file():
            logger.debug("Found %s", candidate)
            return candidate
    return None


def append_outputs(file_path: PathLike, outputs: Mapping[str, str]) -> None:
    """Append named outputs to a GitHub Actions output file.

    Multi-line values use the heredoc form with a random delimiter.

    Args:
        file_path: Output file (usually ``$GITHUB_OUTPUT``).
        outputs: Output names mapped to values.
    """
    path = Path(file_path)
    lines = []
    for name, value in outputs.items():
        if "\n" in value:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            lines.append(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
        else:
            lines.append(f"{name}={value}\n")

    try:
        with open(path, "a", encoding="utf-8") as fh:
            fh.writelines(lines)
    except OSError as exc:
        raise FileOperationError(
            f"Failed to write outputs: {exc}",
            file_path=str(path),
            operation="write",
            original_error=exc,
        ) from exc

    logger.debug("Wrote outputs %s to %s", ", ".join(outputs), path)

