"""CLI commands for browsing the catalog."""

from __future__ import annotations

import click

from storeops.infrastructure.bootstrap import catalog


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    products = catalog().list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>10} {'Active':>7}")
    click.echo("-" * 46)
    for p in products:
        active = "yes" if p.is_active else "no"
        click.echo(f"{p.id:<6} {p.name:<20} {str(p.price):>10} {active:>7}")
