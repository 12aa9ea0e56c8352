"""Resolution of a single version specifier against available releases.

Range matching follows npm semantics through
:class:`semantic_version.NpmSpec`. In particular a pre-release only matches
a range whose comparators carry a pre-release on the same
``MAJOR.MINOR.PATCH``; there is no separate "include pre-releases" switch.

Note that a bare partial version used as a *specifier* keeps npm's meaning:
``"1.7"`` selects from ``>=1.7.0 <1.8.0``. Only compat entries are rewritten
to Julia's caret default (see :mod:`julia_version.core.compat`).
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple, Union

import semantic_version

from julia_version.constants import LTS_VERSION
from julia_version.exceptions import MissingCompatRangeError
from julia_version.models.specifier import (
    SpecifierKind,
    VersionSpecifier,
    classify_specifier,
)
from julia_version.utils.logger import get_logger
from julia_version.utils.version_utils import (
    parse_range,
    parse_version,
    strip_version_prefix,
)

logger = get_logger("resolver")

Candidates = List[Tuple[str, semantic_version.Version]]


def _parse_candidates(available_versions: Iterable[str]) -> Candidates:
    """Pair each parseable catalogue entry with its parsed version."""
    candidates: Candidates = []
    for entry in available_versions:
        parsed = parse_version(entry)
        if parsed is None:
            logger.debug("Ignoring non-semver catalogue entry: %s", entry)
            continue
        candidates.append((entry, parsed))
    return candidates


def _satisfying(available_versions: Iterable[str], version_range: str) -> Candidates:
    spec = parse_range(version_range)
    if spec is None:
        logger.debug("Not a valid version range: %s", version_range)
        return []
    return [(entry, v) for entry, v in _parse_candidates(available_versions) if spec.match(v)]


def max_satisfying(available_versions: Iterable[str], version_range: str) -> Optional[str]:
    """Return the highest entry satisfying *version_range*, or ``None``."""
    matches = _satisfying(available_versions, version_range)
    if not matches:
        return None
    return max(matches, key=lambda match: match[1])[0]


def min_satisfying(available_versions: Iterable[str], version_range: str) -> Optional[str]:
    """Return the lowest entry satisfying *version_range*, or ``None``."""
    matches = _satisfying(available_versions, version_range)
    if not matches:
        return None
    return min(matches, key=lambda match: match[1])[0]


def _find_exact(version: str, available_versions: Iterable[str]) -> Optional[str]:
    wanted = strip_version_prefix(version)
    for entry in available_versions:
        if strip_version_prefix(entry) == wanted:
            return entry
    return None


def resolve_version(
    specifier: Union[str, VersionSpecifier],
    available_versions: Sequence[str],
    compat_range: Optional[str] = None,
    manifest_version: Optional[str] = None,
) -> Optional[str]:
    """Determine the Julia release matching a single specifier.

    Resolution order (first match wins):

    1. an exact version present in *available_versions*, returned as
       listed there (``1.0.5`` matches ``v1.0.5`` and vice versa);
    2. ``min``: the lowest version satisfying *compat_range*;
    3. ``lts``: the highest version of the long-term support line;
    4. ``manifest``: *manifest_version*, unverified;
    5. ``pre`` (legacy): the highest version, pre-releases included;
    6. anything else: the highest version satisfying it as a range.

    Args:
        specifier: The specifier to resolve.
        available_versions: Published versions (``versions.json`` keys).
        compat_range: npm range derived from the project's Julia compat.
        manifest_version: Julia version recorded in the project's manifest.

    Returns:
        The resolved version, or ``None`` if nothing matches.

    Raises:
        MissingCompatRangeError: ``min`` was requested without a compat range.
    """
    if not isinstance(specifier, VersionSpecifier):
        specifier = classify_specifier(specifier)

    if specifier.kind is SpecifierKind.EXACT:
        exact = _find_exact(specifier.raw, available_versions)
        if exact is not None:
            return exact

    if specifier.is_alias_of("min"):
        if not compat_range:
            raise MissingCompatRangeError()
        return min_satisfying(available_versions, compat_range)

    if specifier.is_alias_of("lts"):
        return max_satisfying(available_versions, LTS_VERSION)

    if specifier.is_alias_of("manifest"):
        return manifest_version

    if specifier.is_alias_of("pre"):
        candidates = _parse_candidates(available_versions)
        if not candidates:
            return None
        return max(candidates, key=lambda candidate: candidate[1])[0]

    return max_satisfying(available_versions, specifier.raw)
