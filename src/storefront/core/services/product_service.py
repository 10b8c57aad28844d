"""Admin product workflow: validate, store assets, write rows, invalidate pages.

Each mutating operation runs against one database session and commits it
itself, because the asset writes around the commit have to be undone or
finalised depending on whether the commit succeeded:

- create writes both assets, then inserts the row; a failed insert removes
  the assets it just wrote;
- update writes the replacement assets, commits the row, and only then removes
  the assets that were replaced;
- delete first checks that both assets are still on disk; a missing one fails
  the deletion before any row or file is touched. It then flushes the row
  deletion, removes both assets and commits, rolling the row back if a
  removal fails.

Removing assets that a committed update replaced is best effort: the pages are
revalidated first and a failed removal is only logged.
"""

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from loguru import logger
from sqlmodel import Session

from src.storefront.core.exceptions import ProductNotFoundError
from src.storefront.core.models.product_form import (
    ProductCreateForm,
    ProductUpdateForm,
    validate_form,
)
from src.storefront.core.services.cache import STOREFRONT_PATHS, PageCache
from src.storefront.core.storage import AssetStorage
from src.storefront.entities.order import OrderRepository
from src.storefront.entities.product import Product, ProductRepository, ProductSummary


class ProductService:
    def __init__(self, session: Session, storage: AssetStorage, page_cache: PageCache) -> None:
        self._session = session
        self._storage = storage
        self._page_cache = page_cache
        self._products = ProductRepository(session)

    def list_products(self) -> list[ProductSummary]:
        return self._products.list_summaries()

    def get_product(self, product_id: str) -> Product:
        product = self._products.get(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    def download_location(self, product_id: str) -> tuple[Product, Path]:
        """Return a product together with where its private file lives."""
        product = self.get_product(product_id)
        return product, self._storage.private_location(product.file_path)

    def create_product(self, fields: Mapping[str, Any]) -> Product:
        """Create a product from a submitted form.

        The product always starts unavailable for purchase.

        Raises:
            ProductValidationError: If any field is invalid; nothing is written.
        """
        form = validate_form(ProductCreateForm, fields)
        file_path = self._storage.save_private(form.file)
        try:
            image_path = self._storage.save_public(form.image)
        except Exception:
            self._discard_assets(private=[file_path])
            raise

        try:
            product = self._products.create(
                Product(
                    name=form.name,
                    description=form.description,
                    price_in_cents=form.price_in_cents,
                    file_path=file_path,
                    image_path=image_path,
                    is_available_for_purchase=False,
                )
            )
            self._session.commit()
        except Exception:
            self._session.rollback()
            self._discard_assets(private=[file_path], public=[image_path])
            raise

        logger.info("Product created", product_id=product.id, name=product.name)
        self._revalidate_storefront()
        return product

    def update_product(self, product_id: str, fields: Mapping[str, Any]) -> Product:
        """Overwrite a product's details and replace whichever assets were supplied.

        Raises:
            ProductValidationError: If any field is invalid; nothing is written.
            ProductNotFoundError: If the product does not exist; nothing is written.
        """
        form = validate_form(ProductUpdateForm, fields)
        current = self.get_product(product_id)

        new_file_path = self._storage.save_private(form.file) if form.file else None
        try:
            new_image_path = self._storage.save_public(form.image) if form.image else None
        except Exception:
            self._discard_assets(private=[new_file_path] if new_file_path else [])
            raise

        try:
            product = self._products.update(
                current.model_copy(
                    update={
                        "name": form.name,
                        "description": form.description,
                        "price_in_cents": form.price_in_cents,
                        "file_path": new_file_path or current.file_path,
                        "image_path": new_image_path or current.image_path,
                    }
                )
            )
            self._session.commit()
        except Exception:
            self._session.rollback()
            self._discard_assets(
                private=[new_file_path] if new_file_path else [],
                public=[new_image_path] if new_image_path else [],
            )
            raise

        logger.info("Product updated", product_id=product.id)
        self._revalidate_storefront()

        self._discard_assets(
            private=[current.file_path] if new_file_path else [],
            public=[current.image_path] if new_image_path else [],
        )
        return product

    def set_availability(self, product_id: str, is_available_for_purchase: bool) -> Product:
        """Raises ProductNotFoundError if the product does not exist."""
        product = self._products.set_availability(product_id, is_available_for_purchase)
        if product is None:
            raise ProductNotFoundError(product_id)
        self._session.commit()

        logger.info(
            "Product availability changed",
            product_id=product_id,
            is_available_for_purchase=is_available_for_purchase,
        )
        self._revalidate_storefront()
        return product

    def delete_product(self, product_id: str) -> Product:
        """Delete a product row and both of its assets.

        Orders of the product are kept with their product reference cleared.

        Raises:
            ProductNotFoundError: If the product does not exist; no asset is touched.
            FileNotFoundError: If either asset is missing; the row and the
                remaining asset are kept.
        """
        product = self.get_product(product_id)
        missing = [
            str(location)
            for location in (
                self._storage.private_location(product.file_path),
                self._storage.public_location(product.image_path),
            )
            if not location.exists()
        ]
        if missing:
            logger.error("Product deletion refused", product_id=product_id, missing=missing)
            raise FileNotFoundError(
                f"Assets of product {product_id} are missing: {', '.join(missing)}"
            )

        order_count = OrderRepository(self._session).count_for_product(product_id)
        self._products.delete(product_id)
        try:
            self._storage.delete_private(product.file_path)
            self._storage.delete_public(product.image_path)
            self._session.commit()
        except Exception:
            self._session.rollback()
            logger.error("Product deletion rolled back", product_id=product_id)
            raise

        logger.info("Product deleted", product_id=product_id, order_count=order_count)
        self._revalidate_storefront()
        return product

    def _revalidate_storefront(self) -> None:
        for path in STOREFRONT_PATHS:
            self._page_cache.revalidate(path)

    def _discard_assets(self, private: Iterable[str] = (), public: Iterable[str] = ()) -> None:
        """Remove assets no row references any more; failures are only logged."""
        for file_path in private:
            try:
                self._storage.delete_private(file_path)
            except FileNotFoundError:
                logger.warning("Private asset {} was already missing", file_path)
            except OSError as e:
                logger.warning("Could not remove private asset {}: {}", file_path, e)
        for image_path in public:
            try:
                self._storage.delete_public(image_path)
            except FileNotFoundError:
                logger.warning("Public asset {} was already missing", image_path)
            except OSError as e:
                logger.warning("Could not remove public asset {}: {}", image_path, e)
