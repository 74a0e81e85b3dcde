"""Shared fixtures for the framepool test suite."""

import itertools
from datetime import datetime, timezone

import pytest

from framepool.config import AccountSettings
from framepool.models import Asset, AssetType, ExifInfo
from framepool.pool.base import CachingApiAssetsPool
from framepool.services.cache import ApiCache

_ids = itertools.count(1)


def make_asset(
    *,
    type: AssetType = AssetType.IMAGE,
    archived: bool = False,
    created: datetime | None = None,
    taken: datetime | None = None,
    rating: int | None = None,
    with_exif: bool = True,
) -> Asset:
    """Build an asset with sensible defaults."""
    exif = ExifInfo(date_time_original=taken, rating=rating) if with_exif else None
    return Asset(
        id=f"asset-{next(_ids)}",
        type=type,
        is_archived=archived,
        file_created_at=created or datetime(2024, 1, 1, tzinfo=timezone.utc),
        exif_info=exif,
    )


def make_settings(**overrides) -> AccountSettings:
    """Account settings isolated from the environment and .env files."""
    return AccountSettings(_env_file=None, **overrides)


class CountingPool(CachingApiAssetsPool):
    """Pool whose loader returns a fixed list and counts its calls."""

    def __init__(self, assets, cache, account_settings, rng=None, error=None):
        super().__init__(cache, None, account_settings, rng)
        self.raw_assets = assets
        self.error = error
        self.load_calls = 0

    async def load_assets(self):
        self.load_calls += 1
        if self.error is not None:
            raise self.error
        return list(self.raw_assets)


@pytest.fixture
def cache() -> ApiCache:
    return ApiCache(duration_seconds=0)


@pytest.fixture
def account_settings() -> AccountSettings:
    return make_settings()
