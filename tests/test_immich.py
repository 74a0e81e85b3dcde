"""Tests for the Immich API client using httpx.MockTransport."""

import json
from datetime import datetime, timezone

import httpx
import pytest
from tenacity import wait_none

from framepool.models import AssetType
from framepool.services.immich import ImmichApi
from framepool.utils.retry import ImmichApiError

ASSET_JSON = {
    "id": "a1",
    "type": "IMAGE",
    "isArchived": False,
    "isFavorite": True,
    "fileCreatedAt": "2024-02-01T10:00:00.000Z",
    "originalFileName": "beach.jpg",
    "exifInfo": {"dateTimeOriginal": "2023-08-12T15:30:00+02:00", "rating": 4, "city": "Nice"},
}


@pytest.fixture(autouse=True)
def no_retry_wait(monkeypatch):
    monkeypatch.setattr(ImmichApi._request.retry, "wait", wait_none())


def make_api(handler) -> ImmichApi:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ImmichApi(
        base_url="http://immich.test/",
        api_key="secret",
        client=client,
        page_size=250,
        rate_limit_per_second=1000,
    )


async def test_search_assets_sends_filters_and_parses_items():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"assets": {"items": [ASSET_JSON], "total": 1}})

    api = make_api(handler)
    assets = await api.search_assets(isFavorite=True)

    request = requests[0]
    assert request.method == "POST"
    assert request.url == "http://immich.test/api/search/metadata"
    assert request.headers["x-api-key"] == "secret"
    body = json.loads(request.content)
    assert body == {"type": "IMAGE", "withExif": True, "page": 1, "size": 250, "isFavorite": True}

    asset = assets[0]
    assert asset.id == "a1"
    assert asset.type == AssetType.IMAGE
    assert asset.is_favorite is True
    assert asset.rating == 4
    assert asset.effective_date == datetime(2023, 8, 12, 13, 30, tzinfo=timezone.utc)


async def test_get_album_parses_assets():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/albums/album-9"
        return httpx.Response(200, json={"id": "album-9", "albumName": "Holidays", "assets": [ASSET_JSON]})

    album = await make_api(handler).get_album("album-9")

    assert album.album_name == "Holidays"
    assert [a.id for a in album.assets] == ["a1"]


async def test_malformed_exif_falls_back_to_file_date():
    bad = {**ASSET_JSON, "type": "LIVE_PHOTO", "exifInfo": {"dateTimeOriginal": "not a date", "rating": "x"}}

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"assets": {"items": [bad]}})

    asset = (await make_api(handler).search_assets())[0]

    assert asset.type == AssetType.OTHER
    assert asset.rating is None
    assert asset.effective_date == datetime(2024, 2, 1, 10, tzinfo=timezone.utc)


async def test_client_error_is_not_retried():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(404, text="Album not found")

    with pytest.raises(ImmichApiError) as excinfo:
        await make_api(handler).get_album("missing")

    assert excinfo.value.status_code == 404
    assert len(calls) == 1


async def test_server_error_is_retried():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) < 3:
            return httpx.Response(503, text="unavailable")
        return httpx.Response(200, json={"assets": {"items": []}})

    assert await make_api(handler).search_assets() == []
    assert len(calls) == 3


async def test_transport_error_reraised_after_attempts():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(httpx.ConnectError):
        await make_api(handler).search_assets()
    assert len(calls) == 3


async def test_context_manager_keeps_injected_client_open():
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200, json={"assets": {"items": []}})))

    async with ImmichApi(base_url="http://immich.test", api_key="k", client=client) as api:
        await api.search_assets()

    assert not client.is_closed
    await client.aclose()
