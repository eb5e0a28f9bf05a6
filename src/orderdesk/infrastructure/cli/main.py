import click

from orderdesk.infrastructure.cli.customer_commands import (
    customer_add,
    customer_deactivate,
    customer_list,
    customer_orders,
    customer_show,
    customer_update,
)
from orderdesk.infrastructure.cli.inventory_commands import inventory_show
from orderdesk.infrastructure.cli.order_commands import (
    order_cancel,
    order_complete,
    order_create,
    order_list,
    order_show,
)
from orderdesk.infrastructure.cli.product_commands import (
    product_add,
    product_deactivate,
    product_list,
    product_show,
    product_update,
)
from orderdesk.infrastructure.logging_config import configure_logging
from orderdesk.infrastructure.settings import LOG_LEVEL_ENV


@click.group()
@click.option(
    "--log-level",
    envvar=LOG_LEVEL_ENV,
    default="WARNING",
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Verbosity of diagnostic output on stderr.",
)
def cli(log_level: str) -> None:
    """orderdesk — orders, catalog and customers"""
    configure_logging(log_level)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def customer() -> None:
    """Manage customers."""


@cli.group()
def inventory() -> None:
    """Inspect inventory."""


# Register subcommands
order.add_command(order_cancel)
order.add_command(order_complete)
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_show)
product.add_command(product_add)
product.add_command(product_deactivate)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
customer.add_command(customer_add)
customer.add_command(customer_deactivate)
customer.add_command(customer_list)
customer.add_command(customer_orders)
customer.add_command(customer_show)
customer.add_command(customer_update)
inventory.add_command(inventory_show)
