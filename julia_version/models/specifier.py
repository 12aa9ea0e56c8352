"""
Version specifier data model for julia-version.

A specifier is classified exactly once, when it is parsed, so resolution
code can switch on :class:`SpecifierKind` instead of re-matching regular
expressions at every call site.
"""

from __future__ import annotations

import re
from enum import Enum
from dataclasses import dataclass
from typing import Optional

import semantic_version

#: Named version aliases. ``pre`` is a legacy alias not accepted as input.
ALIASES = frozenset({"lts", "min", "manifest", "pre"})

_NIGHTLY_RE = re.compile(r"^(?:(\d+\.\d+)-)?nightly$")


class SpecifierKind(str, Enum):
    """Grammar production a specifier belongs to."""

    EXACT = "exact"
    RANGE = "range"
    ALIAS = "alias"
    NIGHTLY = "nightly"


@dataclass(frozen=True)
class VersionSpecifier:
    """
    A classified version specifier.

    Attributes:
        raw: The specifier exactly as written by the user.
        kind: The grammar production the specifier matched.
        qualifier: Alias name for ``ALIAS``; the ``MAJOR.MINOR`` series for a
            qualified ``NIGHTLY`` (``None`` for bare ``nightly``).
    """

    raw: str
    kind: SpecifierKind
    qualifier: Optional[str] = None

    def __str__(self) -> str:
        return self.raw

    def is_alias_of(self, name: str) -> bool:
        """Return True if this specifier is the alias *name*."""
        return self.kind is SpecifierKind.ALIAS and self.qualifier == name


def is_exact_version(value: str) -> bool:
    """Return True if *value* is a complete semantic version.

    A single leading ``v`` is accepted (``v1.2.3``). Partial versions such
    as ``1.2`` are ranges, not exact versions.
    """
    candidate = value[1:] if value.startswith("v") else value
    return semantic_version.validate(candidate)


def classify_specifier(raw: str) -> VersionSpecifier:
    """Classify *raw* into a :class:`VersionSpecifier`.

    No validation is done here: anything that is not a nightly, an alias or
    an exact version is treated as a range, and an invalid range simply
    fails to match during resolution.
    """
    nightly = _NIGHTLY_RE.fullmatch(raw)
    if nightly:
        return VersionSpecifier(raw, SpecifierKind.NIGHTLY, nightly.group(1))

    if raw in ALIASES:
        return VersionSpecifier(raw, SpecifierKind.ALIAS, raw)

    if is_exact_version(raw):
        return VersionSpecifier(raw, SpecifierKind.EXACT)

    return VersionSpecifier(raw, SpecifierKind.RANGE)
