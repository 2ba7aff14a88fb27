import click

from storeops.infrastructure.cli.order_commands import (
    order_address,
    order_advance,
    order_cancel,
    order_list,
    order_place,
    order_show,
)
from storeops.infrastructure.cli.product_commands import product_list
from storeops.infrastructure.cli.stock_commands import (
    stock_adjust,
    stock_bulk_set,
    stock_close,
    stock_low,
    stock_minimum,
    stock_open,
    stock_out,
    stock_set,
    stock_show,
)
from storeops.infrastructure.logging import add_context, clear_context, configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """storeops: store orders and inventory"""
    configure_logging()
    clear_context()
    add_context(command=ctx.invoked_subcommand)


@cli.group()
def order() -> None:
    """Place and manage orders."""


@cli.group()
def product() -> None:
    """Browse the catalog."""


@cli.group()
def stock() -> None:
    """Manage stock levels."""


# Register subcommands
order.add_command(order_address)
order.add_command(order_advance)
order.add_command(order_cancel)
order.add_command(order_list)
order.add_command(order_place)
order.add_command(order_show)
product.add_command(product_list)
stock.add_command(stock_adjust)
stock.add_command(stock_bulk_set)
stock.add_command(stock_close)
stock.add_command(stock_low)
stock.add_command(stock_minimum)
stock.add_command(stock_open)
stock.add_command(stock_out)
stock.add_command(stock_set)
stock.add_command(stock_show)
