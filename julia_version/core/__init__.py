"""
Core functionality exports for julia-version.

This module provides convenient access to the core subsystems of
julia-version. Importing from here keeps user-facing imports clean and
stable:

    from julia_version.core import BatchResolver, parse_version_specifiers
"""

from __future__ import annotations

from julia_version.core.batch import BatchResolver, resolve_versions
from julia_version.core.catalogue import VersionCatalogue
from julia_version.core.compat import (
    compat_range_from_project,
    is_valid_range,
    translate_compat_range,
)
from julia_version.core.input import (
    parse_if_missing,
    parse_specifiers,
    parse_version_specifiers,
)
from julia_version.core.nightly import NightlyProber, get_nightly_url
from julia_version.core.project import (
    find_manifest_file,
    find_project_file,
    load_compat_range,
    load_manifest_version,
)
from julia_version.core.resolver import max_satisfying, min_satisfying, resolve_version

__all__ = [
    "BatchResolver",
    "NightlyProber",
    "VersionCatalogue",
    "compat_range_from_project",
    "find_manifest_file",
    "find_project_file",
    "get_nightly_url",
    "is_valid_range",
    "load_compat_range",
    "load_manifest_version",
    "max_satisfying",
    "min_satisfying",
    "parse_if_missing",
    "parse_specifiers",
    "parse_version_specifiers",
    "resolve_version",
    "resolve_versions",
    "translate_compat_range",
]
