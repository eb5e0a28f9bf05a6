"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from orderdesk.application.cancel_order import CancelOrderHandler
from orderdesk.application.complete_order import CompleteOrderHandler
from orderdesk.application.create_order import CreateOrderHandler
from orderdesk.application.dto import OrderDTO, OrderItemSpec
from orderdesk.application.list_orders import ListOrdersHandler
from orderdesk.application.show_order import ShowOrderHandler
from orderdesk.domain.exceptions import DomainException
from orderdesk.domain.model.order import OrderStatus
from orderdesk.infrastructure.bootstrap import (
    ORDER_LOCKS,
    customer_repository,
    inventory_ledger,
    order_repository,
    product_repository,
)
from orderdesk.infrastructure.cli.errors import DomainClickException


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse '1:3,2:5' (product id : quantity) into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(OrderItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id} {dto.order_number}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_name} <{dto.customer_email}> [{dto.customer_tier}]")
    click.echo(f"Created:  {dto.created_at}")
    click.echo(f"Updated:  {dto.updated_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'SKU':<10} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*58}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.sku:<10} {item.quantity:>5} "
            f"{item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*58}")
    click.echo(f"  {'Subtotal':<27} {dto.subtotal:>31}")
    click.echo(f"  {'Discount':<27} {dto.discount:>31}")
    click.echo(f"  {'Order Total':<27} {dto.total:>31}")


@click.command("create")
@click.option("--customer", "customer_id", required=True, help="Customer ID.")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
def order_create(customer_id: str, items: str) -> None:
    """Place a new order (reserves stock)."""
    specs = _parse_items(items)

    product_repo = product_repository()
    handler = CreateOrderHandler(
        order_repo=order_repository(),
        customer_repo=customer_repository(),
        product_repo=product_repo,
        ledger=inventory_ledger(product_repo),
    )

    try:
        dto = handler.handle(customer_id=customer_id, item_specs=specs)
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"Order #{dto.id} created  (status={dto.status})")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", type=int, default=None, help="Order ID to display.")
@click.option("--number", "order_number", default=None, help="Order number to display.")
def order_show(order_id: int | None, order_number: str | None) -> None:
    """Show details of an existing order."""
    if (order_id is None) == (order_number is None):
        raise click.UsageError("Give exactly one of --id or --number.")

    handler = ShowOrderHandler(
        order_repo=order_repository(),
        customer_repo=customer_repository(),
    )

    try:
        if order_id is not None:
            dto = handler.handle(order_id)
        else:
            dto = handler.by_number(order_number)  # type: ignore[arg-type]
    except DomainException as exc:
        raise DomainClickException(exc)

    _display_order(dto)


@click.command("list")
@click.option("--page", default=1, show_default=True, type=int, help="Page number (1-based).")
@click.option("--page-size", default=10, show_default=True, type=int, help="Orders per page (max 100).")
@click.option(
    "--status",
    type=click.Choice([s.value for s in OrderStatus], case_sensitive=False),
    default=None,
    help="Only orders with this status.",
)
def order_list(page: int, page_size: int, status: str | None) -> None:
    """List orders, newest first."""
    handler = ListOrdersHandler(
        order_repo=order_repository(),
        customer_repo=customer_repository(),
    )

    try:
        result = handler.handle(
            page=page,
            page_size=page_size,
            status=OrderStatus.parse(status) if status else None,
        )
    except DomainException as exc:
        raise DomainClickException(exc)

    if not result.items:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Number':<24} {'Customer':<22} {'Status':<10} {'Total':>12}")
    click.echo("-" * 78)
    for dto in result.items:
        click.echo(
            f"{dto.id:<6} {dto.order_number:<24} {dto.customer_name:<22} "
            f"{dto.status:<10} {dto.total:>12}"
        )
    click.echo(
        f"Page {result.page} of {result.total_pages} ({result.total_count} orders)"
    )


@click.command("complete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to complete.")
def order_complete(order_id: int) -> None:
    """Complete a pending order."""
    handler = CompleteOrderHandler(
        order_repo=order_repository(),
        customer_repo=customer_repository(),
        order_locks=ORDER_LOCKS,
    )

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"Order #{order_id} completed.")


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
def order_cancel(order_id: int) -> None:
    """Cancel a pending order (returns its stock)."""
    handler = CancelOrderHandler(
        order_repo=order_repository(),
        customer_repo=customer_repository(),
        ledger=inventory_ledger(),
        order_locks=ORDER_LOCKS,
    )

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"Order #{order_id} cancelled — stock returned.")
