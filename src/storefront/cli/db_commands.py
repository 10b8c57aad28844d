"""Database CLI commands."""

import typer
from rich.prompt import Confirm

from src.storefront.runtime.init_db import init_db

from .utils import console


def init_db_command(
    drop: bool = typer.Option(False, "--drop", help="Drop existing tables first"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
) -> None:
    """Create the product and order tables."""
    if drop and not force:
        if not Confirm.ask("[yellow]Drop all existing tables and their data?[/yellow]"):
            console.print("[blue]Aborted[/blue]")
            raise typer.Exit()

    try:
        init_db(drop=drop)
    except Exception as e:
        console.print(f"[red]❌ Failed to initialize the database: {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print("[green]✅ Database tables are ready[/green]")
