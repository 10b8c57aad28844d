"""Product and order CLI commands."""

import typer
from rich.table import Table

from src.storefront.core.security import hash_password
from src.storefront.entities.order import Order, OrderRepository
from src.storefront.entities.product import ProductRepository
from src.storefront.utils.formatters import format_currency, format_number

from .utils import console, get_database_service


def hash_password_command(
    password: str = typer.Option(
        ..., prompt=True, hide_input=True, confirmation_prompt=True, help="Admin password"
    ),
) -> None:
    """Print the value to put in HASHED_ADMIN_PASSWORD."""
    console.print(hash_password(password), highlight=False, soft_wrap=True)


def list_products() -> None:
    """List every product with its price, availability and order count."""
    database_service = get_database_service()

    with database_service.session_scope() as session:
        summaries = ProductRepository(session).list_summaries()

    if not summaries:
        console.print("[yellow]No products found[/yellow]")
        return

    table = Table(title="Products")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Price", style="blue", justify="right")
    table.add_column("Available", style="yellow")
    table.add_column("Orders", style="magenta", justify="right")

    for summary in summaries:
        table.add_row(
            summary.id,
            summary.name,
            format_currency(summary.price_in_cents),
            "✅" if summary.is_available_for_purchase else "❌",
            format_number(summary.order_count),
        )

    console.print(table)
    console.print(f"\n[green]Found {len(summaries)} products[/green]")


def add_order(
    product_id: str = typer.Argument(..., help="Product that was bought"),
    email: str = typer.Option(..., "--email", "-e", help="Customer email address"),
    price_paid_in_cents: int | None = typer.Option(
        None, "--price", "-p", help="Price paid in cents; defaults to the product price"
    ),
) -> None:
    """Record an order for a product."""
    database_service = get_database_service()

    with database_service.session_scope() as session:
        product = ProductRepository(session).get(product_id)
        orders = OrderRepository(session)
        order = None
        order_count = 0
        if product is not None:
            order = orders.create(
                Order(
                    product_id=product.id,
                    customer_email=email,
                    price_paid_in_cents=(
                        product.price_in_cents
                        if price_paid_in_cents is None
                        else price_paid_in_cents
                    ),
                )
            )
            order_count = orders.count_for_product(product.id)

    if product is None or order is None:
        console.print(f"[red]❌ Product '{product_id}' not found[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]✅ Recorded order {order.id} for '{product.name}'[/green]")
    console.print(f"'{product.name}' now has {format_number(order_count)} orders")
