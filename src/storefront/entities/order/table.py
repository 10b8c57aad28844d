"""Order database table model."""

from sqlmodel import Field

from src.storefront.entities._base import EntityTable


class OrderTable(EntityTable, table=True):
    """Database persistence model for orders."""

    __tablename__ = "orders"

    price_paid_in_cents: int
    customer_email: str
    # Orders outlive their product; the reference is cleared when it is deleted
    product_id: str | None = Field(
        default=None, foreign_key="product.id", ondelete="SET NULL", index=True
    )
