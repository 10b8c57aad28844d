"""Storage of product assets on the local filesystem."""

from .asset_storage import AssetStorage, LocalAssetStorage, get_asset_storage

__all__ = ["AssetStorage", "LocalAssetStorage", "get_asset_storage"]
