"""
Centralized constants for julia-version.

This module defines immutable configuration values used across
julia-version, including release endpoints, nightly build platforms,
project file names, network settings, and logging formats. All values
are intended to be treated as read-only.
"""

from typing import Final, Sequence

from julia_version.models.nightly_platform import NightlyPlatform

# ---------------------------------------------------------------------------
# Project metadata
# ---------------------------------------------------------------------------

#: HTTP User-Agent template used for outbound requests.
USER_AGENT_TEMPLATE: Final[str] = (
    "julia-version/{version} (https://github.com/julia-actions/julia-version)"
)

# ---------------------------------------------------------------------------
# Julia release endpoints
# ---------------------------------------------------------------------------

#: Catalogue of every published Julia release, keyed by version.
VERSIONS_JSON_URL: Final[str] = "https://julialang-s3.julialang.org/bin/versions.json"

#: Base URL under which nightly builds are published.
NIGHTLY_BASE_URL: Final[str] = "https://julialangnightlies-s3.julialang.org/bin"

#: Long-term support release line.
# TODO: read the LTS line from versions.json once it carries an LTS marker.
LTS_VERSION: Final[str] = "1.10"

# ---------------------------------------------------------------------------
# Nightly platforms
# ---------------------------------------------------------------------------

#: Every platform for which nightly artifacts are published.
NIGHTLY_PLATFORMS: Final[Sequence[NightlyPlatform]] = (
    NightlyPlatform("winnt", "x64", "tar.gz", suffix="win64"),
    NightlyPlatform("winnt", "x64", "exe", suffix="win64"),
    NightlyPlatform("winnt", "x86", "tar.gz", suffix="win32"),
    NightlyPlatform("winnt", "x86", "exe", suffix="win32"),
    NightlyPlatform("macos", "aarch64", "tar.gz"),
    NightlyPlatform("macos", "aarch64", "dmg"),
    NightlyPlatform("macos", "x86_64", "tar.gz"),
    NightlyPlatform("macos", "x86_64", "dmg"),
    NightlyPlatform("linux", "x86_64", "tar.gz"),
    NightlyPlatform("linux", "aarch64", "tar.gz"),
    NightlyPlatform("linux", "i686", "tar.gz"),
    NightlyPlatform("freebsd", "x86_64", "tar.gz"),
)

#: Platform probed when checking whether a nightly series exists.
DEFAULT_NIGHTLY_PLATFORM: Final[NightlyPlatform] = NightlyPlatform(
    "linux", "x86_64", "tar.gz"
)

# ---------------------------------------------------------------------------
# Julia project files
# ---------------------------------------------------------------------------

#: Project file names, in lookup priority order.
PROJECT_FILENAMES: Final[Sequence[str]] = ("JuliaProject.toml", "Project.toml")

#: Manifest file names, in lookup priority order.
MANIFEST_FILENAMES: Final[Sequence[str]] = ("JuliaManifest.toml", "Manifest.toml")

#: Key of the ``[compat]`` entry constraining the Julia version.
COMPAT_ENTRY: Final[str] = "julia"

#: Top-level manifest key recording the Julia version that wrote it.
MANIFEST_VERSION_KEY: Final[str] = "julia_version"

# ---------------------------------------------------------------------------
# Resolution policy
# ---------------------------------------------------------------------------

#: Accepted values for the missing-specifier policy.
IF_MISSING_CHOICES: Final[Sequence[str]] = ("warn", "error")

#: Default missing-specifier policy.
DEFAULT_IF_MISSING: Final[str] = "error"

# ---------------------------------------------------------------------------
# HTTP configuration
# ---------------------------------------------------------------------------

#: Default network timeout in seconds.
DEFAULT_TIMEOUT: Final[int] = 30

#: Retries after the first attempt for failed HTTP requests.
DEFAULT_MAX_RETRIES: Final[int] = 5

# ---------------------------------------------------------------------------
# Security constraints
# ---------------------------------------------------------------------------

#: Maximum allowed file size (in bytes) when reading project files.
MAX_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10 MB

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
