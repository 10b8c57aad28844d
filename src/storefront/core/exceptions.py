"""Domain errors raised by the product workflow.

Only validation failures and missing products are turned into intentional
responses. Storage and database errors are left to propagate.
"""


class ProductError(Exception):
    """Base class for product workflow errors."""


class ProductValidationError(ProductError):
    """A submitted form failed validation.

    ``field_errors`` maps each failing field (by its wire name) to the list of
    messages describing why it was rejected.
    """

    def __init__(self, field_errors: dict[str, list[str]]) -> None:
        super().__init__(f"Invalid fields: {', '.join(sorted(field_errors))}")
        self.field_errors = field_errors


class ProductNotFoundError(ProductError):
    """No product exists with the requested identifier."""

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product with id {product_id} not found")
        self.product_id = product_id
