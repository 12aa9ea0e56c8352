"""Julia release catalogue.

Typical usage::

    from julia_version.utils.http import HTTPClient
    from julia_version.core.catalogue import VersionCatalogue

    async with HTTPClient() as client:
        catalogue = VersionCatalogue(client)
        versions = await catalogue.available_versions()
        files = await catalogue.downloads("1.10.8")
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from julia_version.constants import VERSIONS_JSON_URL
from julia_version.exceptions import (
    CatalogueUnavailableError,
    NetworkError,
    ResourceNotFoundError,
)
from julia_version.models.download import Download
from julia_version.utils.http import HTTPClient
from julia_version.utils.logger import get_logger

logger = get_logger("catalogue")

# Public API
__all__ = ["VersionCatalogue"]


class VersionCatalogue:
    """Lazily downloaded ``versions.json`` catalogue.

    The catalogue is fetched at most once per instance; every accessor
    shares the cached document.

    Args:
        http_client: Client used for the download (owns retries/backoff).
        url: Location of ``versions.json``.
    """

    def __init__(self, http_client: HTTPClient, url: str = VERSIONS_JSON_URL) -> None:
        self.http_client = http_client
        self.url = url
        self._data: Optional[Dict[str, Any]] = None

    async def fetch(self) -> Dict[str, Any]:
        """Download (or return the cached) catalogue document.

        Raises:
            CatalogueUnavailableError: The catalogue does not exist (404),
                every attempt failed, or the response was not a JSON object.
        """
        if self._data is not None:
            return self._data

        logger.debug("Downloading Julia release catalogue from %s", self.url)
        try:
            data = await self.http_client.get_json(self.url)
        except ResourceNotFoundError as exc:
            raise CatalogueUnavailableError(
                "versions.json not found", url=self.url, status_code=404
            ) from exc
        except NetworkError as exc:
            raise CatalogueUnavailableError(
                f"Unable to download versions.json after "
                f"{self.http_client.attempts} attempts",
                url=self.url,
                status_code=exc.status_code,
            ) from exc

        logger.debug("Catalogue lists %d releases", len(data))
        self._data = data
        return data

    async def available_versions(self) -> List[str]:
        """Return every version listed in the catalogue, in document order."""
        return list(await self.fetch())

    async def downloads(self, version: str) -> List[Download]:
        """Return the published files of *version*.

        An unknown version yields an empty list.
        """
        data = await self.fetch()
        release = data.get(version)
        if not isinstance(release, dict):
            logger.debug("No catalogue entry for %s", version)
            return []

        return [Download.from_dict(entry) for entry in release.get("files", [])]
