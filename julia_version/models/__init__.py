"""
Unified data model exports for julia-version.

This module re-exports all core data models to provide a stable and
convenient public API. Users can import models directly from
``julia_version.models`` instead of individual submodules.

Example:
    >>> from julia_version.models import Download, VersionSpecifier
"""

from __future__ import annotations

from julia_version.models.nightly_platform import NightlyPlatform
from julia_version.models.download import Download
from julia_version.models.specifier import (
    SpecifierKind,
    VersionSpecifier,
    classify_specifier,
    is_exact_version,
)

__all__ = [
    "Download",
    "NightlyPlatform",
    "SpecifierKind",
    "VersionSpecifier",
    "classify_specifier",
    "is_exact_version",
]
