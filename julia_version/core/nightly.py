"""Nightly build discovery.

Nightly builds are not part of ``versions.json``. Whether a nightly series
exists is determined by probing the artifact URL of a reference platform
with a ``HEAD`` request.
"""

from __future__ import annotations

import asyncio
from typing import List, Optional

from julia_version.constants import (
    DEFAULT_NIGHTLY_PLATFORM,
    NIGHTLY_BASE_URL,
    NIGHTLY_PLATFORMS,
)
from julia_version.exceptions import NetworkError, ResourceNotFoundError
from julia_version.models.download import Download
from julia_version.models.nightly_platform import NightlyPlatform
from julia_version.utils.http import HTTPClient
from julia_version.utils.logger import get_logger

logger = get_logger("nightly")


def get_nightly_url(
    platform: NightlyPlatform,
    major_minor: Optional[str] = None,
    base_url: str = NIGHTLY_BASE_URL,
) -> str:
    """Build the URL of the latest nightly artifact for *platform*.

    Examples:
        >>> get_nightly_url(DEFAULT_NIGHTLY_PLATFORM)
        'https://julialangnightlies-s3.julialang.org/bin/linux/x86_64/julia-latest-linux-x86_64.tar.gz'
        >>> get_nightly_url(DEFAULT_NIGHTLY_PLATFORM, "1.12")
        'https://julialangnightlies-s3.julialang.org/bin/linux/x86_64/1.12/julia-latest-linux-x86_64.tar.gz'
    """
    series = f"{major_minor}/" if major_minor else ""
    return (
        f"{base_url.rstrip('/')}/{platform.platform}/{platform.arch}/"
        f"{series}julia-latest-{platform.file_suffix}.{platform.ext}"
    )


class NightlyProber:
    """Checks for published nightly artifacts.

    Args:
        http_client: Client used for the ``HEAD`` requests.
        base_url: Base URL of the nightly bucket.
    """

    def __init__(self, http_client: HTTPClient, base_url: str = NIGHTLY_BASE_URL) -> None:
        self.http_client = http_client
        self.base_url = base_url

    async def url_exists(self, url: str) -> bool:
        """Return True if *url* answers a ``HEAD`` request successfully.

        A 404 means the artifact does not exist. Any other failure is
        logged and also reported as ``False``.
        """
        try:
            await self.http_client.head(url)
        except ResourceNotFoundError:
            return False
        except NetworkError as exc:
            logger.error("Unable to probe %s: %s", url, exc.message)
            return False
        return True

    async def exists(
        self,
        major_minor: Optional[str] = None,
        platform: NightlyPlatform = DEFAULT_NIGHTLY_PLATFORM,
    ) -> bool:
        """Return True if a nightly series is published.

        Args:
            major_minor: Release series such as ``"1.12"``; ``None`` for
                the main development nightly.
            platform: Platform whose artifact is probed.
        """
        url = get_nightly_url(platform, major_minor, self.base_url)
        found = await self.url_exists(url)
        logger.debug("Nightly %s: %s", "found" if found else "missing", url)
        return found

    async def _probe(
        self, platform: NightlyPlatform, major_minor: Optional[str]
    ) -> Optional[Download]:
        url = get_nightly_url(platform, major_minor, self.base_url)
        try:
            response = await self.http_client.head(url)
        except ResourceNotFoundError:
            return None
        except NetworkError as exc:
            logger.error("Unable to probe %s: %s", url, exc.message)
            return None

        return Download(
            url=url,
            kind=platform.kind,
            arch=platform.arch,
            size=int(response.headers.get("content-length", 0)),
            version=major_minor or "nightly",
            os=platform.platform,
            extension=platform.ext,
        )

    async def downloads(self, major_minor: Optional[str] = None) -> List[Download]:
        """Return the nightly artifacts currently published for a series.

        Every known platform is probed concurrently; missing artifacts are
        left out.
        """
        results = await asyncio.gather(
            *(self._probe(platform, major_minor) for platform in NIGHTLY_PLATFORMS)
        )
        return [download for download in results if download is not None]
