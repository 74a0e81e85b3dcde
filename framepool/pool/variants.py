"""Concrete asset pools: which raw assets to fetch for an account."""

import asyncio
import logging
import random

from framepool.config import AccountSettings
from framepool.models import Asset
from framepool.pool.base import AssetPool, CachingApiAssetsPool
from framepool.services.cache import ApiCache
from framepool.services.immich import ImmichApi
from framepool.services.logger_service import log_performance

logger = logging.getLogger(__name__)


async def excluded_asset_ids(immich_api: ImmichApi, album_ids: list[str]) -> set[str]:
    """IDs of every asset in the excluded albums."""
    excluded: set[str] = set()
    for album_id in album_ids:
        album = await immich_api.get_album(album_id)
        excluded.update(asset.id for asset in album.assets)
    return excluded


def _distinct(assets: list[Asset], excluded: set[str]) -> list[Asset]:
    """Drop excluded and repeated assets, keeping first-seen order."""
    seen = set(excluded)
    result = []
    for asset in assets:
        if asset.id not in seen:
            seen.add(asset.id)
            result.append(asset)
    return result


class AllAssetsPool(CachingApiAssetsPool):
    """Every image on the server."""

    async def load_assets(self) -> list[Asset]:
        with log_performance("Load all assets", logger):
            assets = await self.immich_api.search_assets()
            excluded = await excluded_asset_ids(self.immich_api, self.account_settings.excluded_albums)
        return _distinct(assets, excluded)


class FavoriteAssetsPool(CachingApiAssetsPool):
    """Images marked as favorite."""

    async def load_assets(self) -> list[Asset]:
        with log_performance("Load favorite assets", logger):
            assets = await self.immich_api.search_assets(isFavorite=True)
            excluded = await excluded_asset_ids(self.immich_api, self.account_settings.excluded_albums)
        return _distinct(assets, excluded)


class AlbumAssetsPool(CachingApiAssetsPool):
    """Images from the configured albums, minus the excluded albums."""

    async def load_assets(self) -> list[Asset]:
        assets: list[Asset] = []
        with log_performance("Load album assets", logger):
            for album_id in self.account_settings.albums:
                album = await self.immich_api.get_album(album_id)
                assets.extend(album.assets)
            excluded = await excluded_asset_ids(self.immich_api, self.account_settings.excluded_albums)
        return _distinct(assets, excluded)


class PersonAssetsPool(CachingApiAssetsPool):
    """Images showing any of the configured people."""

    async def load_assets(self) -> list[Asset]:
        assets: list[Asset] = []
        with log_performance("Load person assets", logger):
            for person_id in self.account_settings.people:
                assets.extend(await self.immich_api.search_assets(personIds=[person_id]))
            excluded = await excluded_asset_ids(self.immich_api, self.account_settings.excluded_albums)
        return _distinct(assets, excluded)


class MultiAssetPool:
    """
    Combines several pools.

    Each requested slot goes to a pool with probability proportional to the
    number of assets it still has available, so large sources are not drowned
    out by small ones. Assets present in several pools may repeat.
    """

    def __init__(self, pools: list[AssetPool], rng: random.Random | None = None):
        self.pools = pools
        self._random = rng or random.Random()

    async def get_asset_count(self) -> int:
        counts = await asyncio.gather(*(pool.get_asset_count() for pool in self.pools))
        return sum(counts)

    async def get_assets(self, requested: int) -> list[Asset]:
        if requested <= 0 or not self.pools:
            return []

        remaining = list(await asyncio.gather(*(pool.get_asset_count() for pool in self.pools)))
        shares = [0] * len(self.pools)
        for _ in range(requested):
            if sum(remaining) == 0:
                break
            index = self._random.choices(range(len(self.pools)), weights=remaining)[0]
            shares[index] += 1
            remaining[index] -= 1

        batches = await asyncio.gather(
            *(pool.get_assets(share) for pool, share in zip(self.pools, shares) if share > 0)
        )
        assets = [asset for batch in batches for asset in batch]
        self._random.shuffle(assets)
        return assets


def build_asset_pool(
    account_settings: AccountSettings,
    immich_api: ImmichApi,
    api_cache: ApiCache,
    rng: random.Random | None = None,
) -> AssetPool:
    """
    Create the pool matching the account's configured sources.

    Args:
        account_settings: Account settings
        immich_api: Immich client
        api_cache: Cache shared by the created pools
        rng: Random source shared by the created pools

    Returns:
        AllAssetsPool when no source is configured, the single configured
        pool, or a MultiAssetPool over all of them
    """
    args = (api_cache, immich_api, account_settings, rng)

    pools: list[AssetPool] = []
    if account_settings.show_favorites:
        pools.append(FavoriteAssetsPool(*args))
    if account_settings.albums:
        pools.append(AlbumAssetsPool(*args))
    if account_settings.people:
        pools.append(PersonAssetsPool(*args))

    if not pools:
        logger.debug("No asset sources configured, using all assets")
        return AllAssetsPool(*args)
    if len(pools) == 1:
        return pools[0]
    return MultiAssetPool(pools, rng)
