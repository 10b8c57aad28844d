"""Entity: Order."""

from pydantic import Field

from src.storefront.entities._base import Entity


class Order(Entity):
    """A purchase of a product.

    The admin workflow only consults how many orders reference a product.
    """

    price_paid_in_cents: int = Field(ge=0, description="Amount paid in the minor currency unit")
    customer_email: str = Field(description="Email address of the purchaser")
    product_id: str | None = Field(
        default=None, description="Identifier of the purchased product, cleared once it is deleted"
    )
