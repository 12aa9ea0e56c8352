"""
Version helpers for julia-version.

This module provides the small, pure helpers shared by the resolver and the
CLI: parsing of catalogue entries and npm ranges, numeric-aware sorting and
order-preserving de-duplication.
"""

from __future__ import annotations

import re
from typing import Hashable, Iterable, List, Optional, Tuple, TypeVar

import semantic_version

T = TypeVar("T", bound=Hashable)

_NATURAL_TOKEN = re.compile(r"\d+|\D+")


def strip_version_prefix(value: str) -> str:
    """Remove a single leading ``v`` from a version string.

    Examples:
        >>> strip_version_prefix("v1.0.5")
        '1.0.5'
        >>> strip_version_prefix("1.0.5")
        '1.0.5'
    """
    return value[1:] if value.startswith("v") else value


def parse_version(value: str) -> Optional[semantic_version.Version]:
    """Parse a catalogue entry into a semantic version.

    Returns:
        The parsed version, or ``None`` if *value* is not a complete
        semantic version.
    """
    try:
        return semantic_version.Version(strip_version_prefix(value))
    except ValueError:
        return None


def parse_range(expression: str) -> Optional[semantic_version.NpmSpec]:
    """Parse an npm range expression such as ``"^1.6 || 1.8 - 1.10"``.

    Returns:
        The parsed range, or ``None`` if *expression* is not a valid range.
    """
    try:
        return semantic_version.NpmSpec(expression)
    # Some malformed hyphen ranges fail with AttributeError
    except (ValueError, AttributeError):
        return None


def _natural_key(value: str) -> Tuple[Tuple[int, int, str], ...]:
    """Split *value* into digit and non-digit runs for numeric comparison."""
    return tuple(
        (0, int(token), "") if token.isdigit() else (1, 0, token.lower())
        for token in _NATURAL_TOKEN.findall(value)
    )


def version_sort(versions: Iterable[str]) -> List[str]:
    """Sort version strings comparing numeric components as numbers.

    Unlike a lexicographic sort, ``"4.5.0"`` sorts before ``"4.21.0"``.
    Non-semantic strings such as ``"1.12-nightly"`` are accepted.

    Examples:
        >>> version_sort(["4.21.0", "4.5.0"])
        ['4.5.0', '4.21.0']
    """
    return sorted(versions, key=_natural_key)


def unique(values: Iterable[T]) -> List[T]:
    """Return the distinct values of *values* in first-seen order.

    Examples:
        >>> unique(["1.10.8", "1.11.4", "1.10.8"])
        ['1.10.8', '1.11.4']
    """
    seen = set()
    result: List[T] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        result.append(value)
    return result
