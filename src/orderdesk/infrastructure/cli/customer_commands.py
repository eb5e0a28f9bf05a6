"""CLI commands for the Customer aggregate."""

from __future__ import annotations

import click

from orderdesk.application.add_customer import AddCustomerHandler
from orderdesk.application.list_orders import ListCustomerOrdersHandler
from orderdesk.application.show_customer import ListCustomersHandler, ShowCustomerHandler
from orderdesk.application.update_customer import (
    DeactivateCustomerHandler,
    UpdateCustomerHandler,
)
from orderdesk.domain.exceptions import DomainException
from orderdesk.domain.model.customer import CustomerTier
from orderdesk.infrastructure.bootstrap import customer_repository, order_repository
from orderdesk.infrastructure.cli.errors import DomainClickException


@click.command("add")
@click.option("--first-name", required=True)
@click.option("--last-name", required=True)
@click.option("--email", required=True)
@click.option("--phone", "phone_number", default=None)
@click.option(
    "--tier",
    type=click.Choice([t.value for t in CustomerTier], case_sensitive=False),
    default=CustomerTier.REGULAR.value,
    show_default=True,
)
def customer_add(
    first_name: str,
    last_name: str,
    email: str,
    phone_number: str | None,
    tier: str,
) -> None:
    """Register a new customer."""
    handler = AddCustomerHandler(customer_repo=customer_repository())

    try:
        customer = handler.handle(
            first_name=first_name,
            last_name=last_name,
            email=email,
            tier=tier,
            phone_number=phone_number,
        )
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"Customer #{customer.id} {customer.name} added ({customer.tier})")


@click.command("show")
@click.option("--id", "customer_id", required=True, help="Customer ID.")
def customer_show(customer_id: str) -> None:
    """Show one customer, active or not."""
    handler = ShowCustomerHandler(customer_repo=customer_repository())

    try:
        c = handler.handle(customer_id)
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"Customer #{c.id} {c.name} <{c.email}>")
    click.echo(f"Tier:   {c.tier}")
    click.echo(f"Phone:  {c.phone_number or '-'}")
    click.echo(f"Active: {'yes' if c.is_active else 'no'}")


@click.command("list")
def customer_list() -> None:
    """List active customers."""
    customers = ListCustomersHandler(customer_repo=customer_repository()).handle()

    if not customers:
        click.echo("No customers found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Email':<30} {'Tier':<8}")
    click.echo("-" * 70)
    for c in customers:
        click.echo(f"{c.id:<6} {c.name:<24} {c.email:<30} {c.tier:<8}")


@click.command("deactivate")
@click.option("--id", "customer_id", required=True, help="Customer ID.")
def customer_deactivate(customer_id: str) -> None:
    """Hide a customer from listings (orders stay readable)."""
    handler = DeactivateCustomerHandler(customer_repo=customer_repository())

    try:
        handler.handle(customer_id)
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"Customer #{customer_id} deactivated.")


@click.command("update")
@click.option("--id", "customer_id", required=True, help="Customer ID.")
@click.option("--first-name", default=None)
@click.option("--last-name", default=None)
@click.option("--email", default=None)
@click.option("--phone", "phone_number", default=None, help="Empty string clears the phone.")
@click.option(
    "--tier",
    type=click.Choice([t.value for t in CustomerTier], case_sensitive=False),
    default=None,
)
def customer_update(
    customer_id: str,
    first_name: str | None,
    last_name: str | None,
    email: str | None,
    phone_number: str | None,
    tier: str | None,
) -> None:
    """Change a customer's name, contact details or tier."""
    handler = UpdateCustomerHandler(customer_repo=customer_repository())

    try:
        c = handler.handle(
            customer_id,
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone_number=phone_number,
            tier=tier,
        )
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"Customer #{c.id} {c.name} <{c.email}> updated ({c.tier})")


@click.command("orders")
@click.option("--id", "customer_id", required=True, help="Customer ID.")
@click.option("--page", default=1, show_default=True, type=int, help="Page number (1-based).")
@click.option("--page-size", default=10, show_default=True, type=int, help="Orders per page (max 100).")
def customer_orders(customer_id: str, page: int, page_size: int) -> None:
    """List one customer's orders, newest first."""
    handler = ListCustomerOrdersHandler(
        order_repo=order_repository(),
        customer_repo=customer_repository(),
    )

    try:
        result = handler.handle(customer_id, page=page, page_size=page_size)
    except DomainException as exc:
        raise DomainClickException(exc)

    if not result.items:
        click.echo(f"Customer #{customer_id} has no orders.")
        return

    click.echo(f"{'ID':<6} {'Number':<24} {'Status':<10} {'Created':<26} {'Total':>12}")
    click.echo("-" * 82)
    for dto in result.items:
        click.echo(
            f"{dto.id:<6} {dto.order_number:<24} {dto.status:<10} "
            f"{dto.created_at:<26} {dto.total:>12}"
        )
    click.echo(
        f"Page {result.page} of {result.total_pages} ({result.total_count} orders)"
    )
