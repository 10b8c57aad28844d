"""Declarative schemas for product form submissions.

A submission arrives as an untyped field bag keyed by the wire names
``name``, ``description``, ``priceInCents``, ``file`` and ``image``. Validation
either yields a typed form model or raises ``ProductValidationError`` carrying
the messages of every failing field at once.
"""

from collections.abc import Mapping
from pathlib import PurePosixPath
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError
from werkzeug.utils import secure_filename

from src.storefront.core.exceptions import ProductValidationError

REQUIRED_MESSAGE = "Required"


class UploadedAsset(BaseModel):
    """A binary payload submitted through a multipart form."""

    filename: str = Field(description="Client supplied file name")
    content: bytes = Field(repr=False, description="Raw payload")
    content_type: str | None = Field(default=None, description="Client supplied media type")

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def safe_filename(self) -> str:
        """Base name of the client filename, reduced to characters safe on disk.

        Directory parts are dropped first so that only the last segment survives.
        """
        name = PurePosixPath(self.filename.replace("\\", "/")).name
        return secure_filename(name) or "file"


def _blank_to_none(value: Any) -> Any:
    # Text inputs submitted in place of a file part
    if isinstance(value, str) and not value.strip():
        return None
    return value


class ProductUpdateForm(BaseModel):
    """Fields accepted when editing a product; new assets are optional."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    price_in_cents: int = Field(ge=1, alias="priceInCents")
    file: UploadedAsset | None = None
    image: UploadedAsset | None = None

    @field_validator("file", "image", mode="before")
    @classmethod
    def _normalize_asset(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("file", "image")
    @classmethod
    def _reject_empty_payload(cls, value: UploadedAsset | None) -> UploadedAsset | None:
        if value is not None and not value.content:
            raise PydanticCustomError("required", REQUIRED_MESSAGE)
        return value


class ProductCreateForm(ProductUpdateForm):
    """Fields accepted when creating a product; both assets are required."""

    file: UploadedAsset | None = Field(default=None, validate_default=True)
    image: UploadedAsset | None = Field(default=None, validate_default=True)

    @field_validator("file", "image")
    @classmethod
    def _require_payload(cls, value: UploadedAsset | None) -> UploadedAsset:
        if value is None:
            raise PydanticCustomError("required", REQUIRED_MESSAGE)
        return value


FormT = TypeVar("FormT", bound=ProductUpdateForm)


def collect_field_errors(exc: ValidationError) -> dict[str, list[str]]:
    """Group pydantic errors into a ``field -> [messages]`` mapping."""
    field_errors: dict[str, list[str]] = {}
    for error in exc.errors():
        loc = error.get("loc") or ("form",)
        field_errors.setdefault(str(loc[0]), []).append(error["msg"])
    return field_errors


def validate_form(schema: type[FormT], fields: Mapping[str, Any]) -> FormT:
    """Validate a field bag against ``schema``.

    Raises:
        ProductValidationError: With an entry for every invalid field.
    """
    try:
        return schema.model_validate(dict(fields))
    except ValidationError as exc:
        raise ProductValidationError(collect_field_errors(exc)) from exc
