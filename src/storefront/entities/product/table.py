"""Product database table model."""

from src.storefront.entities._base import EntityTable


class ProductTable(EntityTable, table=True):
    """Database persistence model for products.

    This represents how the Product entity is stored in the database.
    It's separate from the domain entity to maintain clean architecture
    while keeping related code together.
    """

    __tablename__ = "product"

    name: str
    description: str
    price_in_cents: int
    file_path: str
    image_path: str
    is_available_for_purchase: bool = False
