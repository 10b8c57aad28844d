"""Form models for the admin product workflow."""

from .product_form import (
    ProductCreateForm,
    ProductUpdateForm,
    UploadedAsset,
    collect_field_errors,
    validate_form,
)

__all__ = [
    "ProductCreateForm",
    "ProductUpdateForm",
    "UploadedAsset",
    "collect_field_errors",
    "validate_form",
]
