"""Product repository for data access operations."""

from sqlmodel import Session, col, desc, func, select

from src.storefront.entities.order.table import OrderTable

from .entity import Product, ProductSummary
from .table import ProductTable


class ProductRepository:
    """Data-access layer for products."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, product_id: str) -> Product | None:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None
        return Product.model_validate(row, from_attributes=True)

    def create(self, product: Product) -> Product:
        row = ProductTable.model_validate(product.model_dump())
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Product.model_validate(row, from_attributes=True)

    def update(self, product: Product) -> Product:
        """Overwrite the stored attributes of an existing product.

        Raises:
            ValueError: If no product with ``product.id`` exists.
        """
        row = self._session.get(ProductTable, product.id)
        if row is None:
            raise ValueError(f"Product with id {product.id} not found")

        row.name = product.name
        row.description = product.description
        row.price_in_cents = product.price_in_cents
        row.file_path = product.file_path
        row.image_path = product.image_path
        row.is_available_for_purchase = product.is_available_for_purchase
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Product.model_validate(row, from_attributes=True)

    def set_availability(self, product_id: str, is_available_for_purchase: bool) -> Product | None:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None
        row.is_available_for_purchase = is_available_for_purchase
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Product.model_validate(row, from_attributes=True)

    def delete(self, product_id: str) -> Product | None:
        """Delete a product row and return what was deleted, or None if absent."""
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None
        deleted = Product.model_validate(row, from_attributes=True)
        self._session.delete(row)
        self._session.flush()
        return deleted

    def list_summaries(self) -> list[ProductSummary]:
        """List every product with the number of orders placed for it."""
        order_count = func.count(col(OrderTable.id))
        statement = (
            select(ProductTable, order_count)
            .outerjoin(OrderTable, col(OrderTable.product_id) == col(ProductTable.id))
            .group_by(col(ProductTable.id))
            .order_by(col(ProductTable.name))
        )
        return [
            ProductSummary(
                id=row.id,
                name=row.name,
                price_in_cents=row.price_in_cents,
                is_available_for_purchase=row.is_available_for_purchase,
                order_count=count,
            )
            for row, count in self._session.exec(statement).all()
        ]

    def list_available(self) -> list[Product]:
        statement = (
            select(ProductTable)
            .where(col(ProductTable.is_available_for_purchase).is_(True))
            .order_by(col(ProductTable.name))
        )
        rows = self._session.exec(statement).all()
        return [Product.model_validate(row, from_attributes=True) for row in rows]

    def newest(self, limit: int) -> list[Product]:
        statement = (
            select(ProductTable)
            .where(col(ProductTable.is_available_for_purchase).is_(True))
            .order_by(desc(col(ProductTable.created_at)))
            .limit(limit)
        )
        rows = self._session.exec(statement).all()
        return [Product.model_validate(row, from_attributes=True) for row in rows]

    def most_popular(self, limit: int) -> list[Product]:
        order_count = func.count(col(OrderTable.id))
        statement = (
            select(ProductTable)
            .outerjoin(OrderTable, col(OrderTable.product_id) == col(ProductTable.id))
            .where(col(ProductTable.is_available_for_purchase).is_(True))
            .group_by(col(ProductTable.id))
            .order_by(desc(order_count), col(ProductTable.name))
            .limit(limit)
        )
        rows = self._session.exec(statement).all()
        return [Product.model_validate(row, from_attributes=True) for row in rows]
