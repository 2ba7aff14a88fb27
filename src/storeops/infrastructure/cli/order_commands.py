"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storeops.application.advance_order_status import AdvanceOrderStatusHandler
from storeops.application.cancel_order import CancelOrderHandler
from storeops.application.dto import OrderDTO, OrderLineRequest
from storeops.application.place_order import PlaceOrderHandler
from storeops.application.show_order import ListOrdersHandler, ShowOrderHandler
from storeops.application.update_shipping_address import UpdateShippingAddressHandler
from storeops.domain.exceptions import DomainException
from storeops.domain.model.order import OrderStatus
from storeops.infrastructure.bootstrap import (
    ORDER_LOCKS,
    PRODUCT_LOCKS,
    catalog,
    customer_directory,
    unit_of_work,
)


def parse_pairs(raw: str) -> list[tuple[str, int]]:
    """Parse '1:3,2:5' into [(product_id, quantity), ...]."""
    pairs: list[tuple[str, int]] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductID:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        pairs.append((product_id.strip(), qty))
    return pairs


def _display_order(dto: OrderDTO) -> None:
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_id}")
    click.echo(f"Placed:   {dto.order_date}")
    click.echo(f"Ship to:  {dto.shipping_address}")
    click.echo(f"Payment:  {dto.payment_method}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Subtotal':>10}")
    click.echo(f"  {'-'*48}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_subtotal:>10}"
        )
    click.echo(f"  {'-'*48}")
    click.echo(f"  {'Order Total':<27} {dto.total:>21}")


@click.command("place")
@click.option("--customer", required=True, help="Customer ID.")
@click.option("--items", required=True, help="Items as 'ProductID:Qty,ProductID:Qty'.")
@click.option("--address", required=True, help="Shipping address.")
@click.option("--payment", default="Card", show_default=True, help="Payment method.")
def order_place(customer: str, items: str, address: str, payment: str) -> None:
    """Place a new order (takes the stock immediately)."""
    lines = [OrderLineRequest(product_id=pid, quantity=qty) for pid, qty in parse_pairs(items)]

    handler = PlaceOrderHandler(
        uow_factory=unit_of_work,
        catalog=catalog(),
        customers=customer_directory(),
        product_locks=PRODUCT_LOCKS,
    )

    try:
        dto = handler.handle(
            customer_id=customer,
            lines=lines,
            shipping_address=address,
            payment_method=payment,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} placed.")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(uow_factory=unit_of_work)

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--customer", default=None, help="Only this customer's orders.")
@click.option(
    "--status",
    default=None,
    type=click.Choice([s.value for s in OrderStatus], case_sensitive=False),
    help="Only orders in this status.",
)
def order_list(customer: str | None, status: str | None) -> None:
    """List orders, newest first."""
    handler = ListOrdersHandler(uow_factory=unit_of_work)

    try:
        orders = handler.handle(customer_id=customer, status=status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Customer':<10} {'Status':<11} {'Total':>10}  Placed")
    click.echo("-" * 62)
    for dto in orders:
        click.echo(f"{dto.id:<6} {dto.customer_id:<10} {dto.status:<11} {dto.total:>10}  {dto.order_date}")


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
def order_cancel(order_id: int) -> None:
    """Cancel an order (puts its stock back)."""
    handler = CancelOrderHandler(
        uow_factory=unit_of_work,
        product_locks=PRODUCT_LOCKS,
        order_locks=ORDER_LOCKS,
    )

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} cancelled, stock returned.")


@click.command("advance")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option(
    "--to",
    "status",
    required=True,
    type=click.Choice([s.value for s in OrderStatus], case_sensitive=False),
    help="Target status.",
)
def order_advance(order_id: int, status: str) -> None:
    """Move an order to its next status."""
    handler = AdvanceOrderStatusHandler(
        uow_factory=unit_of_work,
        product_locks=PRODUCT_LOCKS,
        order_locks=ORDER_LOCKS,
    )

    try:
        dto = handler.handle(order_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} is now {dto.status}.")


@click.command("address")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--address", required=True, help="New shipping address.")
def order_address(order_id: int, address: str) -> None:
    """Change the shipping address of an order that has not shipped."""
    handler = UpdateShippingAddressHandler(
        uow_factory=unit_of_work,
        product_locks=PRODUCT_LOCKS,
        order_locks=ORDER_LOCKS,
    )

    try:
        handler.handle(order_id, address)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} will ship to: {address}")
