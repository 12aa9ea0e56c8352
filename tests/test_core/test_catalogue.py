from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict
from unittest.mock import AsyncMock, MagicMock

import pytest

from julia_version.constants import VERSIONS_JSON_URL
from julia_version.core.catalogue import VersionCatalogue
from julia_version.exceptions import (
    CatalogueUnavailableError,
    NetworkError,
    ResourceNotFoundError,
)
from julia_version.utils.http import HTTPClient

FIXTURES = Path(__file__).parent.parent / "fixtures"


@pytest.fixture
def versions_json() -> Dict[str, Any]:
    with open(FIXTURES / "versions.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def mock_http_client(versions_json: Dict[str, Any]) -> MagicMock:
    """Create a mock HTTPClient serving the fixture catalogue."""
    client = MagicMock(spec=HTTPClient)
    client.get_json = AsyncMock(return_value=versions_json)
    client.attempts = 6
    return client


@pytest.mark.unit
class TestVersionCatalogue:
    """Tests for VersionCatalogue download and lookups."""

    def test_default_url(self, mock_http_client: MagicMock) -> None:
        assert VersionCatalogue(mock_http_client).url == VERSIONS_JSON_URL

    @pytest.mark.asyncio
    async def test_available_versions(self, mock_http_client: MagicMock) -> None:
        catalogue = VersionCatalogue(mock_http_client)

        versions = await catalogue.available_versions()

        assert versions[0] == "0.7.0"
        assert "1.10.8" in versions
        assert "1.12.0-beta1" in versions
        mock_http_client.get_json.assert_awaited_once_with(VERSIONS_JSON_URL)

    @pytest.mark.asyncio
    async def test_fetched_once(self, mock_http_client: MagicMock) -> None:
        catalogue = VersionCatalogue(mock_http_client, "https://mirror.example.org/versions.json")

        await catalogue.available_versions()
        await catalogue.downloads("1.10.8")
        await catalogue.fetch()

        mock_http_client.get_json.assert_awaited_once_with(
            "https://mirror.example.org/versions.json"
        )

    @pytest.mark.asyncio
    async def test_downloads(self, mock_http_client: MagicMock) -> None:
        catalogue = VersionCatalogue(mock_http_client)

        files = await catalogue.downloads("1.10.8")

        assert [f.os for f in files] == ["linux", "winnt"]
        assert files[0].sha256 is not None
        assert files[0].asc is not None
        assert files[1].kind == "installer"
        assert files[1].asc is None

    @pytest.mark.asyncio
    async def test_downloads_preserve_entries(
        self, mock_http_client: MagicMock, versions_json: Dict[str, Any]
    ) -> None:
        catalogue = VersionCatalogue(mock_http_client)

        files = await catalogue.downloads("1.10.8")

        assert [f.to_dict() for f in files] == versions_json["1.10.8"]["files"]

    @pytest.mark.asyncio
    async def test_downloads_of_unknown_version(self, mock_http_client: MagicMock) -> None:
        catalogue = VersionCatalogue(mock_http_client)

        assert await catalogue.downloads("9.9.9") == []

    @pytest.mark.asyncio
    async def test_download_failure(self, mock_http_client: MagicMock) -> None:
        mock_http_client.get_json.side_effect = NetworkError(
            "Request failed", url=VERSIONS_JSON_URL, status_code=503
        )
        catalogue = VersionCatalogue(mock_http_client)

        with pytest.raises(CatalogueUnavailableError) as exc_info:
            await catalogue.available_versions()

        assert exc_info.value.message == "Unable to download versions.json after 6 attempts"
        assert exc_info.value.url == VERSIONS_JSON_URL
        assert exc_info.value.status_code == 503
        assert isinstance(exc_info.value.__cause__, NetworkError)

    @pytest.mark.asyncio
    async def test_missing_catalogue_is_not_retried(self, mock_http_client: MagicMock) -> None:
        """Test a 404 is reported without claiming every attempt was made."""
        mock_http_client.get_json.side_effect = ResourceNotFoundError(
            "Resource not found", url=VERSIONS_JSON_URL, status_code=404
        )
        catalogue = VersionCatalogue(mock_http_client)

        with pytest.raises(CatalogueUnavailableError) as exc_info:
            await catalogue.fetch()

        assert exc_info.value.message == "versions.json not found"
        assert exc_info.value.status_code == 404
        mock_http_client.get_json.assert_awaited_once_with(VERSIONS_JSON_URL)

    @pytest.mark.asyncio
    async def test_failure_is_not_cached(
        self, mock_http_client: MagicMock, versions_json: Dict[str, Any]
    ) -> None:
        mock_http_client.get_json.side_effect = [NetworkError("boom"), versions_json]
        catalogue = VersionCatalogue(mock_http_client)

        with pytest.raises(CatalogueUnavailableError):
            await catalogue.fetch()

        assert await catalogue.fetch() == versions_json
