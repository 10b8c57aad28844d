"""Main CLI application module."""

import typer

from .db_commands import init_db_command
from .product_commands import add_order, hash_password_command, list_products

# Create the main CLI application
app = typer.Typer(
    help="🛒 Storefront admin CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command("init-db")(init_db_command)
app.command("hash-password")(hash_password_command)
app.command("list-products")(list_products)
app.command("add-order")(add_order)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
