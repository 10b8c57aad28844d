"""Entity package: Order."""

from .entity import Order
from .repository import OrderRepository
from .table import OrderTable

__all__ = ["Order", "OrderRepository", "OrderTable"]
