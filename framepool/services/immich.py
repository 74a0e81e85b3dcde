"""Immich service for fetching asset metadata over the REST API."""

import logging
from typing import Any

import httpx
from aiolimiter import AsyncLimiter

from framepool.config import settings
from framepool.constants import IMMICH_API_KEY_HEADER
from framepool.models import AlbumResponse, Asset, AssetType, SearchAssetsResponse
from framepool.services.logger_service import log_api_call
from framepool.utils.retry import ImmichApiError, api_retry

logger = logging.getLogger(__name__)


class ImmichApi:
    """Async client for the subset of the Immich API used by asset pools."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        client: httpx.AsyncClient | None = None,
        page_size: int | None = None,
        rate_limit_per_second: float | None = None,
    ):
        """
        Initialize Immich client.

        Args:
            base_url: Immich server URL (defaults to settings.immich_server_url)
            api_key: API key (defaults to settings.api_key)
            client: Preconfigured HTTP client (a new one is created if None)
            page_size: Assets requested per search (defaults to settings.search_page_size)
            rate_limit_per_second: Request throttle (defaults to settings.api_rate_limit_per_second)
        """
        self.base_url = (base_url or settings.immich_server_url).rstrip("/")
        self.page_size = page_size or settings.search_page_size
        self._headers = {
            IMMICH_API_KEY_HEADER: api_key if api_key is not None else settings.api_key,
            "Accept": "application/json",
        }
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=settings.http_timeout)
        self.limiter = AsyncLimiter(rate_limit_per_second or settings.api_rate_limit_per_second, 1)

        logger.debug(f"Initialized Immich client: {self.base_url}")

    async def __aenter__(self) -> "ImmichApi":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self.client.aclose()

    @api_retry
    async def _request(self, method: str, path: str, json: dict | None = None) -> Any:
        url = f"{self.base_url}{path}"

        async with self.limiter:
            try:
                response = await self.client.request(method, url, json=json, headers=self._headers)
            except httpx.TransportError as e:
                log_api_call("Immich", f"{method} {path}", "retry", str(e), logger)
                raise

        if response.is_error:
            status = "retry" if response.status_code >= 500 else "error"
            log_api_call("Immich", f"{method} {path}", status, f"HTTP {response.status_code}", logger)
            raise ImmichApiError(response.status_code, response.text)

        log_api_call("Immich", f"{method} {path}", "success", logger=logger)
        return response.json()

    async def search_assets(self, **filters: Any) -> list[Asset]:
        """
        Search image metadata.

        Only the first page is fetched; its size is `page_size`.

        Args:
            **filters: Extra search fields (e.g. isFavorite=True, personIds=[...])

        Returns:
            Matching assets with EXIF data
        """
        body = {
            "type": AssetType.IMAGE.value,
            "withExif": True,
            "page": 1,
            "size": self.page_size,
            **filters,
        }
        data = await self._request("POST", "/api/search/metadata", json=body)
        page = SearchAssetsResponse.model_validate(data).assets

        logger.info(f"Search returned {len(page.items)} assets")
        return page.items

    async def get_album(self, album_id: str) -> AlbumResponse:
        """
        Get an album with its assets.

        Args:
            album_id: Immich album ID

        Returns:
            AlbumResponse object
        """
        data = await self._request("GET", f"/api/albums/{album_id}")
        album = AlbumResponse.model_validate(data)

        logger.info(f"Album '{album.album_name}' has {len(album.assets)} assets")
        return album
