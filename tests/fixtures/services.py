"""Service fixtures for testing."""

from collections.abc import Callable
from typing import Any

import pytest
from sqlmodel import Session

from src.storefront.core.models import UploadedAsset
from src.storefront.core.services import PageCache, ProductService, StorefrontService
from src.storefront.core.storage import AssetStorage


@pytest.fixture
def product_service(
    session: Session, asset_storage: AssetStorage, page_cache: PageCache
) -> ProductService:
    return ProductService(session, asset_storage, page_cache)


@pytest.fixture
def storefront_service(session: Session, page_cache: PageCache) -> StorefrontService:
    return StorefrontService(session, page_cache)


@pytest.fixture
def product_fields(make_asset: Callable[..., UploadedAsset]) -> Callable[..., dict[str, Any]]:
    """Build a valid create-form field bag, with keyword overrides."""

    def _product_fields(**overrides: Any) -> dict[str, Any]:
        fields: dict[str, Any] = {
            "name": "Widget",
            "description": "A useful widget",
            "priceInCents": "500",
            "file": make_asset("widget.zip", b"widget archive bytes"),
            "image": make_asset("widget.png", b"\x89PNG widget image", "image/png"),
        }
        fields.update(overrides)
        return fields

    return _product_fields
