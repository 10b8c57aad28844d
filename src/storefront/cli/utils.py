"""Shared utilities for CLI commands."""

import typer
from rich.console import Console

from src.storefront.core.services import DbSessionService

# Initialize Rich console for colored output
console = Console()


def get_database_service() -> DbSessionService:
    """Connect to the configured database or exit with a readable error."""
    try:
        return DbSessionService()
    except Exception as e:
        console.print(f"[red]❌ Failed to connect to the database: {e}[/red]")
        raise typer.Exit(code=1) from e
