"""Order repository for data access operations."""

from sqlmodel import Session, col, func, select

from .entity import Order
from .table import OrderTable


class OrderRepository:
    """Data-access layer for orders."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def create(self, order: Order) -> Order:
        row = OrderTable.model_validate(order.model_dump())
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Order.model_validate(row, from_attributes=True)

    def count_for_product(self, product_id: str) -> int:
        statement = select(func.count(col(OrderTable.id))).where(
            col(OrderTable.product_id) == product_id
        )
        return self._session.exec(statement).one()
