"""Unit tests for the order entity package."""

import pytest
from sqlalchemy.exc import IntegrityError

from src.storefront.entities.order import Order, OrderRepository, OrderTable
from src.storefront.entities.product import Product, ProductRepository


def _add_product(session, name: str) -> Product:
    return ProductRepository(session).create(
        Product(
            name=name,
            description=f"{name} description",
            price_in_cents=100,
            file_path=f"products/{name}.zip",
            image_path=f"/products/{name}.png",
        )
    )


def _order(product_id: str | None) -> Order:
    return Order(price_paid_in_cents=100, customer_email="a@example.com", product_id=product_id)


class TestOrder:
    def test_price_paid_cannot_be_negative(self):
        with pytest.raises(ValueError):
            Order(price_paid_in_cents=-1, customer_email="a@example.com", product_id="p")

    def test_product_reference_is_optional(self):
        assert Order(price_paid_in_cents=0, customer_email="a@example.com").product_id is None

    def test_table_name(self):
        assert OrderTable.__tablename__ == "orders"


class TestOrderRepository:
    def test_count_for_product(self, session):
        widget = _add_product(session, "Widget")
        gadget = _add_product(session, "Gadget")
        repository = OrderRepository(session)
        for product in (widget, widget, gadget):
            repository.create(_order(product.id))

        assert repository.count_for_product(widget.id) == 2
        assert repository.count_for_product(gadget.id) == 1
        assert repository.count_for_product("unknown") == 0

    def test_create_returns_entity(self, session):
        widget = _add_product(session, "Widget")

        order = OrderRepository(session).create(
            Order(price_paid_in_cents=250, customer_email="b@example.com", product_id=widget.id)
        )

        assert order.price_paid_in_cents == 250
        assert order.customer_email == "b@example.com"
        assert order.product_id == widget.id

    def test_unknown_product_is_rejected(self, session):
        with pytest.raises(IntegrityError):
            OrderRepository(session).create(_order("missing-product"))

    def test_deleting_product_clears_reference(self, session, db_service):
        widget = _add_product(session, "Widget")
        order = OrderRepository(session).create(_order(widget.id))
        session.commit()

        ProductRepository(session).delete(widget.id)
        session.commit()

        with db_service.session_scope() as other:
            assert other.get(OrderTable, order.id).product_id is None
            assert OrderRepository(other).count_for_product(widget.id) == 0
