"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from loguru import logger
from sqlmodel import Session
from starlette.datastructures import UploadFile

from src.storefront.api.http.app_data import ApplicationDependencies
from src.storefront.core.models.product_form import UploadedAsset
from src.storefront.core.security import is_admin
from src.storefront.core.services import PageCache, ProductService, StorefrontService
from src.storefront.core.storage import AssetStorage

TEXT_FIELDS = ("name", "description", "priceInCents")
ASSET_FIELDS = ("file", "image")

basic_auth = HTTPBasic(auto_error=False, realm="Admin")


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    """Get the application-wide dependencies created at startup."""
    return request.app.state.app_dependencies


def get_db_session(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> Iterator[Session]:
    """Yield a database session that is closed once the request is done."""
    session = app_deps.database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_asset_storage(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> AssetStorage:
    """Get the product asset storage instance."""
    return app_deps.asset_storage


def get_page_cache(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> PageCache:
    """Get the storefront page cache instance."""
    return app_deps.page_cache


def get_product_service(
    session: Session = Depends(get_db_session),
    storage: AssetStorage = Depends(get_asset_storage),
    page_cache: PageCache = Depends(get_page_cache),
) -> ProductService:
    """Get the admin product workflow bound to this request's session."""
    return ProductService(session, storage, page_cache)


def get_storefront_service(
    session: Session = Depends(get_db_session),
    page_cache: PageCache = Depends(get_page_cache),
) -> StorefrontService:
    """Get the public storefront pages service."""
    return StorefrontService(session, page_cache)


def require_admin(
    credentials: HTTPBasicCredentials | None = Depends(basic_auth),
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> str:
    """Reject the request unless it carries the admin's Basic credentials."""
    if credentials is None or not is_admin(
        credentials.username, credentials.password, app_deps.config.admin
    ):
        logger.warning("Rejected admin request")
        raise HTTPException(
            status_code=401,
            detail="Unauthorized",
            headers={"WWW-Authenticate": 'Basic realm="Admin"'},
        )
    return credentials.username


async def get_product_form_fields(request: Request) -> dict[str, Any]:
    """Read a multipart product form into an untyped field bag.

    Fields missing from the submission are left out of the bag. A file input
    left untouched by the browser (no filename, no bytes) counts as missing.
    """
    form = await request.form()
    fields: dict[str, Any] = {}

    for name in TEXT_FIELDS:
        value = form.get(name)
        if value is not None:
            fields[name] = value if isinstance(value, str) else value.filename

    for name in ASSET_FIELDS:
        value = form.get(name)
        if isinstance(value, UploadFile):
            content = await value.read()
            if value.filename or content:
                fields[name] = UploadedAsset(
                    filename=value.filename or "",
                    content=content,
                    content_type=value.content_type,
                )
        elif value is not None:
            fields[name] = value

    return fields
