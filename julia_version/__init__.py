"""
julia-version: resolve Julia version specifiers to concrete releases

julia-version turns human-authored specifiers such as ``"1"``, ``"^1.6"``,
``"lts"``, ``"min"``, ``"manifest"`` or ``"1.12-nightly"`` into the concrete
Julia versions a CI job should install, using the published release
catalogue and, when asked, the project's ``[compat]`` entry or manifest.

Typical usage::

    from julia_version import parse_version_specifiers, resolve_versions

    specifiers = parse_version_specifiers('["1", "lts", "min"]')
    versions = await resolve_versions(specifiers, project=".")
"""

from __future__ import annotations

from julia_version.__version__ import __version__
from julia_version.core import (
    BatchResolver,
    compat_range_from_project,
    parse_if_missing,
    parse_version_specifiers,
    resolve_version,
    resolve_versions,
    translate_compat_range,
)
from julia_version.utils.version_utils import unique, version_sort

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "julia-version Contributors"
__license__ = "MIT"
__description__ = "Resolve Julia version specifiers against published releases."

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "__version__",
    "BatchResolver",
    "compat_range_from_project",
    "parse_if_missing",
    "parse_version_specifiers",
    "resolve_version",
    "resolve_versions",
    "translate_compat_range",
    "unique",
    "version_sort",
]
