"""Core services exports."""

# Page cache
from .cache import PageCache, PageCacheInMemory

# Database Service
from .database.db_manage import DbManageService
from .database.db_session import DbSessionService

# Product workflow
from .product_service import ProductService
from .storefront_service import StorefrontService

__all__ = [
    # Page cache
    "PageCache",
    "PageCacheInMemory",
    # Database Service
    "DbManageService",
    "DbSessionService",
    # Product workflow
    "ProductService",
    "StorefrontService",
]
