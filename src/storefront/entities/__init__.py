"""Entities module with entity-centric structure.

Each entity has its own package containing:
- entity.py: Domain model with business logic
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .order import Order, OrderRepository, OrderTable
from .product import Product, ProductRepository, ProductSummary, ProductTable

__all__ = [
    "Order",
    "OrderTable",
    "OrderRepository",
    "Product",
    "ProductSummary",
    "ProductTable",
    "ProductRepository",
]
