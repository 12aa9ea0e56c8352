"""Julia project and manifest file lookup.

A "project" is either a path to a project file or a directory holding one.
Only two fields are ever read: ``compat.julia`` from the project file and
the top-level ``julia_version`` from the manifest.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from julia_version.constants import (
    MANIFEST_FILENAMES,
    MANIFEST_VERSION_KEY,
    PROJECT_FILENAMES,
)
from julia_version.core.compat import compat_range_from_project
from julia_version.exceptions import (
    ManifestFileNotFoundError,
    ProjectFileNotFoundError,
)
from julia_version.utils.filesystem import find_first_file, read_toml_file
from julia_version.utils.logger import get_logger

logger = get_logger("project")

PathLike = Union[str, Path]


def find_project_file(project: PathLike) -> Path:
    """Determine the path to a Julia project file.

    Args:
        project: A project file, or a directory containing
            ``JuliaProject.toml`` or ``Project.toml`` (checked in that order).

    Returns:
        Path to the project file.

    Raises:
        ProjectFileNotFoundError: No project file could be located.
    """
    path = Path(project)
    if path.is_file():
        return path

    found = find_first_file(path, PROJECT_FILENAMES)
    if found is None:
        raise ProjectFileNotFoundError(str(project))
    return found


def find_manifest_file(project: PathLike) -> Path:
    """Determine the path to a Julia manifest file.

    The manifest is searched for next to the project: in the parent
    directory when *project* is a file, in *project* itself otherwise.

    Raises:
        ManifestFileNotFoundError: No manifest file could be located.
    """
    path = Path(project)
    project_dir = path.parent if path.is_file() else path

    found = find_first_file(project_dir, MANIFEST_FILENAMES)
    if found is None:
        raise ManifestFileNotFoundError(str(project))
    return found


def load_compat_range(project: PathLike) -> str:
    """Read the project file and return its Julia compat as an npm range."""
    project_file = find_project_file(project)
    compat_range = compat_range_from_project(read_toml_file(project_file))
    logger.debug("Julia project compatibility range: %s", compat_range)
    return compat_range


def load_manifest_version(project: PathLike) -> Optional[str]:
    """Read the manifest file and return the Julia version that wrote it.

    Manifests in the original format (v1) do not record the Julia version;
    ``None`` is returned for those.
    """
    manifest_file = find_manifest_file(project)
    manifest = read_toml_file(manifest_file)

    version = manifest.get(MANIFEST_VERSION_KEY)
    if version is not None:
        version = str(version)
    logger.debug("Julia manifest version: %s", version)
    return version
