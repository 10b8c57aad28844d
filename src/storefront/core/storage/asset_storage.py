"""Asset storage interface and local filesystem implementation.

Products own two kinds of assets:

- private files, downloadable only through the admin download route, stored
  under ``storage.private_dir`` and referenced by their filesystem path;
- public images, served directly, stored under ``storage.public_dir`` and
  referenced by their URL path under ``storage.public_url_prefix``.

New artifacts are named ``{uuid4}-{original filename}``.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from pathlib import Path

from loguru import logger

from src.storefront.core.models.product_form import UploadedAsset
from src.storefront.runtime.config.config_data import StorageConfig
from src.storefront.runtime.context import get_config


def unique_name(asset: UploadedAsset) -> str:
    return f"{uuid.uuid4()}-{asset.safe_filename}"


class AssetStorage(ABC):
    """Abstract interface for product asset backends."""

    @abstractmethod
    def save_private(self, asset: UploadedAsset) -> str:
        """Store a downloadable file.

        Returns:
            The stored file path to record on the product
        """
        pass

    @abstractmethod
    def save_public(self, asset: UploadedAsset) -> str:
        """Store a public image.

        Returns:
            The public URL path to record on the product
        """
        pass

    @abstractmethod
    def delete_private(self, file_path: str) -> None:
        """Remove a downloadable file. Fails if it does not exist."""
        pass

    @abstractmethod
    def delete_public(self, image_path: str) -> None:
        """Remove a public image. Fails if it does not exist."""
        pass

    @abstractmethod
    def private_location(self, file_path: str) -> Path:
        """Filesystem location of a stored downloadable file."""
        pass

    @abstractmethod
    def public_location(self, image_path: str) -> Path:
        """Filesystem location of a stored public image."""
        pass


class LocalAssetStorage(AssetStorage):
    """Assets kept in two directories on the local filesystem."""

    def __init__(self, config: StorageConfig) -> None:
        self._private_root = config.private_root
        self._public_root = config.public_root
        self._public_prefix = "/" + config.public_url_prefix.strip("/")

    @property
    def private_root(self) -> Path:
        return self._private_root

    @property
    def public_root(self) -> Path:
        return self._public_root

    def save_private(self, asset: UploadedAsset) -> str:
        self._private_root.mkdir(parents=True, exist_ok=True)
        path = self._private_root / unique_name(asset)
        path.write_bytes(asset.content)
        logger.info("Stored private asset {} ({} bytes)", path, asset.size)
        return path.as_posix()

    def save_public(self, asset: UploadedAsset) -> str:
        self._public_root.mkdir(parents=True, exist_ok=True)
        name = unique_name(asset)
        (self._public_root / name).write_bytes(asset.content)
        image_path = f"{self._public_prefix}/{name}"
        logger.info("Stored public asset {} ({} bytes)", image_path, asset.size)
        return image_path

    def delete_private(self, file_path: str) -> None:
        self.private_location(file_path).unlink()
        logger.info("Removed private asset {}", file_path)

    def delete_public(self, image_path: str) -> None:
        self.public_location(image_path).unlink()
        logger.info("Removed public asset {}", image_path)

    def private_location(self, file_path: str) -> Path:
        return Path(file_path)

    def public_location(self, image_path: str) -> Path:
        prefix = self._public_prefix + "/"
        if not image_path.startswith(prefix):
            raise ValueError(f"Image path {image_path} is outside {self._public_prefix}")
        return self._public_root / image_path[len(prefix):]


def get_asset_storage() -> AssetStorage:
    """Build the asset storage described by the current configuration."""
    return LocalAssetStorage(get_config().storage)
