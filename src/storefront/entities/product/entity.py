"""Entity: Product."""

from typing import Any

from pydantic import BaseModel, Field

from src.storefront.entities._base import Entity


class Product(Entity):
    """Product entity representing a sellable catalog item.

    Each product owns two stored assets: a private downloadable file
    (``file_path``) and a public preview image (``image_path``, a URL path).
    """

    name: str = Field(description="Display name")
    description: str = Field(description="Product description")
    price_in_cents: int = Field(ge=1, description="Price in the minor currency unit")
    file_path: str = Field(description="Location of the private downloadable file")
    image_path: str = Field(description="Public URL path of the preview image")
    is_available_for_purchase: bool = Field(
        default=False, description="Whether the product is offered in the storefront"
    )

    def __eq__(self, other: Any) -> bool:
        """Compare products by business attributes, ignoring timestamps."""
        if not isinstance(other, Product):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.description == other.description
            and self.price_in_cents == other.price_in_cents
            and self.file_path == other.file_path
            and self.image_path == other.image_path
            and self.is_available_for_purchase == other.is_available_for_purchase
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.name,
            self.description,
            self.price_in_cents,
            self.file_path,
            self.image_path,
            self.is_available_for_purchase,
        ))


class ProductSummary(BaseModel):
    """Listing projection of a product with its derived order count."""

    id: str
    name: str
    price_in_cents: int
    is_available_for_purchase: bool
    order_count: int = 0
