"""Unit tests for the storefront page cache."""

from src.storefront.core.services import PageCacheInMemory
from src.storefront.core.services.cache import HOME_PATH, PRODUCTS_PATH, STOREFRONT_PATHS
from src.storefront.runtime.config.config_data import CacheConfig


class TestPageCacheInMemory:
    def test_get_returns_cached_payload(self, page_cache):
        page_cache.set(PRODUCTS_PATH, {"products": []})
        assert page_cache.get(PRODUCTS_PATH) == {"products": []}

    def test_missing_page_is_none(self, page_cache):
        assert page_cache.get("/nowhere") is None

    def test_revalidate_marks_only_that_page_stale(self, page_cache):
        page_cache.set(HOME_PATH, {"newest": []})
        page_cache.set(PRODUCTS_PATH, {"products": []})

        page_cache.revalidate(HOME_PATH)

        assert page_cache.get(HOME_PATH) is None
        assert page_cache.get(PRODUCTS_PATH) == {"products": []}

    def test_revalidate_unknown_page_is_a_no_op(self, page_cache):
        page_cache.revalidate("/never-cached")
        assert page_cache.get("/never-cached") is None

    def test_clear_drops_everything(self, page_cache):
        for path in STOREFRONT_PATHS:
            page_cache.set(path, {"path": path})

        page_cache.clear()

        assert all(page_cache.get(path) is None for path in STOREFRONT_PATHS)

    def test_disabled_cache_never_serves(self):
        cache = PageCacheInMemory(enabled=False)
        cache.set(HOME_PATH, {"newest": []})
        assert cache.get(HOME_PATH) is None

    def test_from_config(self):
        cache = PageCacheInMemory.from_config(CacheConfig(enabled=False))
        cache.set(HOME_PATH, {})
        assert cache.get(HOME_PATH) is None
