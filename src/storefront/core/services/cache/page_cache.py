from abc import ABC, abstractmethod
from typing import Any

from cachetools import TTLCache
from loguru import logger

from src.storefront.runtime.config.config_data import CacheConfig

HOME_PATH = "/"
PRODUCTS_PATH = "/products"
STOREFRONT_PATHS = (HOME_PATH, PRODUCTS_PATH)


class PageCache(ABC):
    @abstractmethod
    def get(self, path: str) -> Any | None:
        """
        Get the cached payload rendered for a page path.
        Args:
            path: Logical page path, e.g. "/products"

        Returns:
            The cached payload or None when missing or stale
        """
        raise NotImplementedError

    @abstractmethod
    def set(self, path: str, payload: Any) -> None:
        """
        Cache the payload rendered for a page path.

        Args:
            path: Logical page path
            payload: Rendered page payload
        """
        raise NotImplementedError

    @abstractmethod
    def revalidate(self, path: str) -> None:
        """Mark a page stale so the next fetch renders it again."""
        raise NotImplementedError

    @abstractmethod
    def clear(self) -> None:
        """Drop every cached page."""
        raise NotImplementedError


class PageCacheInMemory(PageCache):
    def __init__(self, max_entries: int = 64, ttl_seconds: int = 300, enabled: bool = True) -> None:
        self._enabled = enabled
        self._pages: TTLCache[str, Any] = TTLCache(maxsize=max(max_entries, 1), ttl=ttl_seconds)

    @classmethod
    def from_config(cls, config: CacheConfig) -> "PageCacheInMemory":
        return cls(
            max_entries=config.max_entries,
            ttl_seconds=config.ttl_seconds,
            enabled=config.enabled,
        )

    def get(self, path: str) -> Any | None:
        if not self._enabled:
            return None
        return self._pages.get(path)

    def set(self, path: str, payload: Any) -> None:
        if self._enabled:
            self._pages[path] = payload

    def revalidate(self, path: str) -> None:
        self._pages.pop(path, None)
        logger.debug("Marked page {} stale", path)

    def clear(self) -> None:
        self._pages.clear()
