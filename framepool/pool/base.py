"""Caching asset pools backed by the Immich API."""

import logging
import random
from abc import ABC, abstractmethod
from typing import Protocol

from framepool.config import AccountSettings
from framepool.models import Asset
from framepool.pool.filters import apply_account_filters
from framepool.pool.sampler import select_assets
from framepool.services.cache import ApiCache
from framepool.services.immich import ImmichApi

logger = logging.getLogger(__name__)


class AssetPool(Protocol):
    """A source of assets a frame can display."""

    async def get_asset_count(self) -> int:
        """Return the number of displayable assets."""
        ...

    async def get_assets(self, requested: int) -> list[Asset]:
        """Return up to `requested` assets to show now."""
        ...


class CachingApiAssetsPool(ABC):
    """
    Base class for pools whose filtered asset set is memoized in an ApiCache.

    Subclasses only decide which raw assets to fetch by implementing
    `load_assets`. Filtering runs once per cache population; sampling runs on
    every request against the cached set.
    """

    def __init__(
        self,
        api_cache: ApiCache,
        immich_api: ImmichApi,
        account_settings: AccountSettings,
        rng: random.Random | None = None,
    ):
        """
        Initialize pool.

        Args:
            api_cache: Cache store shared by the account's pools
            immich_api: Client used by `load_assets`
            account_settings: Filter and sampling settings
            rng: Random source for sampling (unseeded if None)
        """
        self.api_cache = api_cache
        self.immich_api = immich_api
        self.account_settings = account_settings
        self._random = rng or random.Random()

    @property
    def cache_key(self) -> str:
        """Key of this pool's filtered set in the cache."""
        cls = type(self)
        return f"{cls.__module__}.{cls.__qualname__}"

    async def get_asset_count(self) -> int:
        return len(await self.all_assets())

    async def get_assets(self, requested: int) -> list[Asset]:
        assets = await self.all_assets()
        return select_assets(
            assets,
            requested,
            recency_bias=self.account_settings.recency_bias,
            rng=self._random,
        )

    async def all_assets(self) -> list[Asset]:
        """Return the filtered asset set, loading it on first use."""
        return await self.api_cache.get_or_add(self.cache_key, self._load_filtered)

    async def _load_filtered(self) -> list[Asset]:
        raw = await self.load_assets()
        assets = apply_account_filters(raw, self.account_settings)
        logger.info(f"{type(self).__name__}: {len(assets)} of {len(raw)} assets pass filters")
        return assets

    @abstractmethod
    async def load_assets(self) -> list[Asset]:
        """Fetch the raw, unfiltered assets of this pool."""
