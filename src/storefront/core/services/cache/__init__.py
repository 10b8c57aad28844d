from .page_cache import (
    HOME_PATH,
    PRODUCTS_PATH,
    STOREFRONT_PATHS,
    PageCache,
    PageCacheInMemory,
)

__all__ = [
    "HOME_PATH",
    "PRODUCTS_PATH",
    "STOREFRONT_PATHS",
    "PageCache",
    "PageCacheInMemory",
]
