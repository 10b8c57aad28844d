"""Public storefront pages whose cached copies admin mutations invalidate."""

from typing import Any

from fastapi import APIRouter, Depends

from src.storefront.api.http.deps import get_storefront_service
from src.storefront.core.services import StorefrontService

router = APIRouter(tags=["storefront"])


@router.get("/")
def home(service: StorefrontService = Depends(get_storefront_service)) -> dict[str, Any]:
    """Most popular and newest products that can be bought."""
    return service.home_page()


@router.get("/products")
def products(service: StorefrontService = Depends(get_storefront_service)) -> dict[str, Any]:
    return service.products_page()
