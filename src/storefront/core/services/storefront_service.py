"""Public storefront pages, served from the page cache."""

from typing import Any

from pydantic import BaseModel
from sqlmodel import Session

from src.storefront.core.services.cache import HOME_PATH, PRODUCTS_PATH, PageCache
from src.storefront.entities.product import Product, ProductRepository
from src.storefront.utils.formatters import format_currency

HOME_SECTION_SIZE = 6


class ProductCard(BaseModel):
    """What the storefront shows of an available product."""

    id: str
    name: str
    description: str
    price_in_cents: int
    price: str
    image_path: str

    @classmethod
    def from_product(cls, product: Product) -> "ProductCard":
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price_in_cents=product.price_in_cents,
            price=format_currency(product.price_in_cents),
            image_path=product.image_path,
        )


class StorefrontService:
    def __init__(self, session: Session, page_cache: PageCache) -> None:
        self._products = ProductRepository(session)
        self._page_cache = page_cache

    def home_page(self) -> dict[str, Any]:
        cached = self._page_cache.get(HOME_PATH)
        if cached is not None:
            return cached

        page = {
            "most_popular": self._cards(self._products.most_popular(HOME_SECTION_SIZE)),
            "newest": self._cards(self._products.newest(HOME_SECTION_SIZE)),
        }
        self._page_cache.set(HOME_PATH, page)
        return page

    def products_page(self) -> dict[str, Any]:
        cached = self._page_cache.get(PRODUCTS_PATH)
        if cached is not None:
            return cached

        page = {"products": self._cards(self._products.list_available())}
        self._page_cache.set(PRODUCTS_PATH, page)
        return page

    @staticmethod
    def _cards(products: list[Product]) -> list[dict[str, Any]]:
        return [ProductCard.from_product(product).model_dump() for product in products]
