"""Asset pools: cached, filtered and sampled views of an Immich library."""

from framepool.pool.base import AssetPool, CachingApiAssetsPool
from framepool.pool.filters import apply_account_filters, resolve_date_bounds
from framepool.pool.sampler import select_assets
from framepool.pool.variants import (
    AlbumAssetsPool,
    AllAssetsPool,
    FavoriteAssetsPool,
    MultiAssetPool,
    PersonAssetsPool,
    build_asset_pool,
)

__all__ = [
    "AssetPool",
    "CachingApiAssetsPool",
    "AllAssetsPool",
    "AlbumAssetsPool",
    "FavoriteAssetsPool",
    "PersonAssetsPool",
    "MultiAssetPool",
    "build_asset_pool",
    "apply_account_filters",
    "resolve_date_bounds",
    "select_assets",
]
