"""CLI commands for stock management."""

from __future__ import annotations

import click

from storeops.application.adjust_stock import AdjustStockHandler
from storeops.application.manage_stock_records import (
    CloseStockRecordHandler,
    OpenStockRecordHandler,
)
from storeops.application.set_stock import (
    BulkSetStockHandler,
    SetMinimumStockHandler,
    SetStockHandler,
)
from storeops.application.show_stock import (
    GetLowStockReportHandler,
    GetOutOfStockHandler,
    ShowStockHandler,
)
from storeops.domain.exceptions import DomainException
from storeops.domain.model.stock import DEFAULT_MINIMUM_THRESHOLD
from storeops.infrastructure.bootstrap import PRODUCT_LOCKS, catalog, unit_of_work
from storeops.infrastructure.cli.order_commands import parse_pairs


@click.command("show")
def stock_show() -> None:
    """Show current stock levels."""
    lines = ShowStockHandler(uow_factory=unit_of_work).handle()

    if not lines:
        click.echo("No stock records found.")
        return

    click.echo(f"{'Product':<10} {'On hand':>8} {'Minimum':>8}  Status")
    click.echo("-" * 46)
    for line in lines:
        click.echo(
            f"{line.product_id:<10} {line.quantity_on_hand:>8} {line.minimum_threshold:>8}  {line.status}"
        )


@click.command("low")
def stock_low() -> None:
    """Show products below their minimum stock, most urgent first."""
    lines = GetLowStockReportHandler(uow_factory=unit_of_work, catalog=catalog()).handle()

    if not lines:
        click.echo("No products below minimum stock.")
        return

    click.echo(f"{'Product':<10} {'Name':<20} {'On hand':>8} {'Minimum':>8} {'Needed':>8}")
    click.echo("-" * 58)
    for line in lines:
        click.echo(
            f"{line.product_id:<10} {line.product_name:<20} {line.quantity_on_hand:>8} "
            f"{line.minimum_threshold:>8} {line.units_needed:>8}"
        )


@click.command("out")
def stock_out() -> None:
    """List products with no units on hand."""
    products = GetOutOfStockHandler(uow_factory=unit_of_work, catalog=catalog()).handle()

    if not products:
        click.echo("No products are out of stock.")
        return

    for product_id, name in products:
        click.echo(f"{product_id:<10} {name}")


@click.command("open")
@click.option("--product", required=True, help="Product ID.")
@click.option("--quantity", default=0, show_default=True, type=int, help="Initial stock.")
@click.option(
    "--minimum",
    default=DEFAULT_MINIMUM_THRESHOLD,
    show_default=True,
    type=int,
    help="Minimum stock before the product counts as low.",
)
def stock_open(product: str, quantity: int, minimum: int) -> None:
    """Create the stock record for a catalog product."""
    handler = OpenStockRecordHandler(
        uow_factory=unit_of_work, catalog=catalog(), product_locks=PRODUCT_LOCKS
    )

    try:
        handler.handle(product, quantity, minimum)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock record for product '{product}' opened with {quantity} units")


@click.command("close")
@click.option("--product", required=True, help="Product ID.")
def stock_close(product: str) -> None:
    """Remove the stock record of a product taken off the catalog."""
    handler = CloseStockRecordHandler(uow_factory=unit_of_work, product_locks=PRODUCT_LOCKS)

    try:
        handler.handle(product)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock record for product '{product}' closed")


@click.command("set")
@click.option("--product", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units on hand.")
def stock_set(product: str, quantity: int) -> None:
    """Set the stock level for a product."""
    handler = SetStockHandler(uow_factory=unit_of_work, product_locks=PRODUCT_LOCKS)

    try:
        handler.handle(product, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for product '{product}' set to {quantity}")


@click.command("bulk-set")
@click.option("--items", required=True, help="Levels as 'ProductID:Qty,ProductID:Qty'.")
def stock_bulk_set(items: str) -> None:
    """Set several stock levels at once (all or nothing)."""
    levels: dict[str, int] = {}
    for product_id, qty in parse_pairs(items):
        if product_id in levels:
            raise click.BadParameter(
                f"Product '{product_id}' is listed more than once.", param_hint="--items"
            )
        levels[product_id] = qty

    handler = BulkSetStockHandler(uow_factory=unit_of_work, product_locks=PRODUCT_LOCKS)

    try:
        updated = handler.handle(levels)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{updated} stock levels updated")


@click.command("adjust")
@click.option("--product", required=True, help="Product ID.")
@click.option("--delta", required=True, type=int, help="Units to add (negative removes).")
def stock_adjust(product: str, delta: int) -> None:
    """Add or remove units of a product."""
    handler = AdjustStockHandler(uow_factory=unit_of_work, product_locks=PRODUCT_LOCKS)

    try:
        line = handler.handle(product, delta)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for product '{product}' is now {line.quantity_on_hand} ({line.status})")


@click.command("minimum")
@click.option("--product", required=True, help="Product ID.")
@click.option("--minimum", required=True, type=int, help="Minimum stock level.")
def stock_minimum(product: str, minimum: int) -> None:
    """Set the minimum stock level of a product."""
    handler = SetMinimumStockHandler(uow_factory=unit_of_work, product_locks=PRODUCT_LOCKS)

    try:
        handler.handle(product, minimum)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Minimum stock for product '{product}' set to {minimum}")
