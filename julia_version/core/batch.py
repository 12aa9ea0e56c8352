"""Resolution of a batch of specifiers.

Project metadata and the catalogue are loaded once, up front, and shared by
every specifier of the batch. Specifiers are then resolved sequentially and
results are returned in input order.

Typical usage::

    async with HTTPClient() as client:
        resolver = BatchResolver(VersionCatalogue(client), NightlyProber(client))
        versions = await resolver.resolve(["1", "lts", "min"], project=".")
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Union

from julia_version.core.catalogue import VersionCatalogue
from julia_version.core.input import parse_if_missing
from julia_version.core.nightly import NightlyProber
from julia_version.core.project import load_compat_range, load_manifest_version
from julia_version.core.resolver import resolve_version
from julia_version.exceptions import NoMatchingVersionError
from julia_version.models.specifier import (
    SpecifierKind,
    VersionSpecifier,
    classify_specifier,
)
from julia_version.utils.http import HTTPClient
from julia_version.utils.logger import get_logger

logger = get_logger("batch")

SpecifierLike = Union[str, VersionSpecifier]


class BatchResolver:
    """Resolve several specifiers against one catalogue.

    Args:
        catalogue: Source of published versions.
        prober: Checks for nightly artifacts.
    """

    def __init__(self, catalogue: VersionCatalogue, prober: NightlyProber) -> None:
        self.catalogue = catalogue
        self.prober = prober

    async def resolve(
        self,
        specifiers: Sequence[SpecifierLike],
        project: Union[str, Path] = ".",
        *,
        if_missing: Optional[str] = None,
    ) -> List[Optional[str]]:
        """Resolve every specifier of the batch.

        Args:
            specifiers: Validated specifiers, in the order they were given.
            project: Julia project file or directory. Only read when the
                batch contains ``min`` or ``manifest``.
            if_missing: ``"warn"`` stores ``None`` for an unresolvable
                specifier and logs a warning; ``"error"`` (or ``None``)
                raises instead.

        Returns:
            One entry per specifier, in input order.

        Raises:
            NoMatchingVersionError: A specifier matched nothing and
                *if_missing* is not ``"warn"``.
            ProjectError: The project or manifest could not be read.
            CatalogueUnavailableError: The catalogue could not be fetched.
        """
        if if_missing is not None:
            if_missing = parse_if_missing(if_missing)

        parsed = [
            s if isinstance(s, VersionSpecifier) else classify_specifier(s)
            for s in specifiers
        ]

        compat_range: Optional[str] = None
        if any(s.is_alias_of("min") for s in parsed):
            compat_range = load_compat_range(project)

        manifest_version: Optional[str] = None
        if any(s.is_alias_of("manifest") for s in parsed):
            manifest_version = load_manifest_version(project)

        available_versions = await self.catalogue.available_versions()

        results: List[Optional[str]] = []
        for specifier in parsed:
            if specifier.kind is SpecifierKind.NIGHTLY:
                resolved = await self._resolve_nightly(specifier)
            else:
                resolved = resolve_version(
                    specifier,
                    available_versions,
                    compat_range=compat_range,
                    manifest_version=manifest_version,
                )

            if resolved is None:
                if if_missing == "warn":
                    logger.warning(
                        'No Julia version exists matching specifier: "%s"', specifier
                    )
                else:
                    raise NoMatchingVersionError(specifier.raw)
            else:
                logger.debug("Resolved %s to %s", specifier, resolved)

            results.append(resolved)

        return results

    async def _resolve_nightly(self, specifier: VersionSpecifier) -> Optional[str]:
        # The unqualified nightly is always published
        if specifier.qualifier is None:
            return specifier.raw

        if await self.prober.exists(specifier.qualifier):
            return specifier.raw
        return None


async def resolve_versions(
    specifiers: Sequence[SpecifierLike],
    project: Union[str, Path] = ".",
    *,
    if_missing: Optional[str] = None,
    client: Optional[HTTPClient] = None,
) -> List[Optional[str]]:
    """Resolve a batch of specifiers against the published Julia releases.

    A temporary :class:`HTTPClient` is created when *client* is omitted.
    See :meth:`BatchResolver.resolve` for the parameters.
    """
    if client is not None:
        resolver = BatchResolver(VersionCatalogue(client), NightlyProber(client))
        return await resolver.resolve(specifiers, project, if_missing=if_missing)

    async with HTTPClient() as own_client:
        resolver = BatchResolver(VersionCatalogue(own_client), NightlyProber(own_client))
        return await resolver.resolve(specifiers, project, if_missing=if_missing)
