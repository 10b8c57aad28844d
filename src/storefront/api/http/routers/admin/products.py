"""Admin product management routes.

Every route here sits behind the admin Basic credentials. Form submissions are
multipart; a rejected form answers 422 with the field error mapping, a
successful create or update redirects to the product list.
"""

from pathlib import PurePosixPath
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import FileResponse, JSONResponse, RedirectResponse
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from src.storefront.api.http.deps import (
    get_product_form_fields,
    get_product_service,
    require_admin,
)
from src.storefront.core.exceptions import ProductNotFoundError, ProductValidationError
from src.storefront.core.services import ProductService
from src.storefront.entities.product import Product, ProductSummary
from src.storefront.utils.formatters import format_currency, format_number

PRODUCTS_PAGE = "/admin/products"

router = APIRouter(
    prefix=PRODUCTS_PAGE, tags=["admin"], dependencies=[Depends(require_admin)]
)


class AvailabilityUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_available_for_purchase: bool = Field(alias="isAvailableForPurchase")


class ProductRow(BaseModel):
    """One line of the admin product table."""

    id: str
    name: str
    price_in_cents: int
    price: str
    is_available_for_purchase: bool
    order_count: int
    orders: str
    download_url: str
    edit_url: str
    can_delete: bool

    @classmethod
    def from_summary(cls, summary: ProductSummary) -> "ProductRow":
        return cls(
            id=summary.id,
            name=summary.name,
            price_in_cents=summary.price_in_cents,
            price=format_currency(summary.price_in_cents),
            is_available_for_purchase=summary.is_available_for_purchase,
            order_count=summary.order_count,
            orders=format_number(summary.order_count),
            download_url=f"{PRODUCTS_PAGE}/{summary.id}/download",
            edit_url=f"{PRODUCTS_PAGE}/{summary.id}/edit",
            can_delete=summary.order_count == 0,
        )


def _not_found(exc: ProductNotFoundError) -> HTTPException:
    logger.info("Product {} not found", exc.product_id)
    return HTTPException(status_code=404, detail="Product not found")


def _invalid(exc: ProductValidationError) -> JSONResponse:
    logger.info("Product form rejected", fields=sorted(exc.field_errors))
    return JSONResponse(status_code=422, content={"errors": exc.field_errors})


@router.get("")
def list_products(service: ProductService = Depends(get_product_service)) -> dict[str, Any]:
    rows = [ProductRow.from_summary(summary).model_dump() for summary in service.list_products()]
    if not rows:
        return {"products": [], "message": "No products found"}
    return {"products": rows}


@router.post("", response_model=None)
def create_product(
    fields: dict[str, Any] = Depends(get_product_form_fields),
    service: ProductService = Depends(get_product_service),
) -> Response:
    try:
        service.create_product(fields)
    except ProductValidationError as exc:
        return _invalid(exc)
    return RedirectResponse(PRODUCTS_PAGE, status_code=303)


@router.get("/{product_id}/edit")
def get_product(
    product_id: str, service: ProductService = Depends(get_product_service)
) -> Product:
    """Current values of a product, used to prefill the edit form."""
    try:
        return service.get_product(product_id)
    except ProductNotFoundError as exc:
        raise _not_found(exc) from exc


@router.post("/{product_id}/edit", response_model=None)
def update_product(
    product_id: str,
    fields: dict[str, Any] = Depends(get_product_form_fields),
    service: ProductService = Depends(get_product_service),
) -> Response:
    try:
        service.update_product(product_id, fields)
    except ProductValidationError as exc:
        return _invalid(exc)
    except ProductNotFoundError as exc:
        raise _not_found(exc) from exc
    return RedirectResponse(PRODUCTS_PAGE, status_code=303)


@router.patch("/{product_id}/availability", status_code=204)
def set_availability(
    product_id: str,
    body: AvailabilityUpdate,
    service: ProductService = Depends(get_product_service),
) -> Response:
    try:
        service.set_availability(product_id, body.is_available_for_purchase)
    except ProductNotFoundError as exc:
        raise _not_found(exc) from exc
    return Response(status_code=204)


@router.delete("/{product_id}", status_code=204)
def delete_product(
    product_id: str, service: ProductService = Depends(get_product_service)
) -> Response:
    try:
        service.delete_product(product_id)
    except ProductNotFoundError as exc:
        raise _not_found(exc) from exc
    return Response(status_code=204)


@router.get("/{product_id}/download", response_model=None)
def download_product(
    product_id: str, service: ProductService = Depends(get_product_service)
) -> FileResponse:
    """Send the private file as an attachment named after the product."""
    try:
        product, location = service.download_location(product_id)
    except ProductNotFoundError as exc:
        raise _not_found(exc) from exc

    if not location.is_file():
        logger.error("Private asset missing for product {}", product_id)
        raise HTTPException(status_code=404, detail="Product file not found")

    extension = PurePosixPath(product.file_path).suffix
    return FileResponse(
        location,
        filename=f"{product.name}{extension}",
        media_type="application/octet-stream",
    )
