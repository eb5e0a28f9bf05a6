"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from orderdesk.application.add_product import AddProductHandler
from orderdesk.application.search_products import (
    SORT_KEYS,
    SearchProductsHandler,
    ShowProductHandler,
)
from orderdesk.application.update_product import UpdateProductHandler
from orderdesk.domain.exceptions import DomainException
from orderdesk.infrastructure.bootstrap import product_repository
from orderdesk.infrastructure.cli.errors import DomainClickException


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--sku", required=True, help="Unique stock-keeping unit.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", "stock_quantity", default=0, show_default=True, type=int, help="Opening stock.")
@click.option("--description", default=None, help="Optional description.")
def product_add(
    name: str,
    sku: str,
    price: str,
    stock_quantity: int,
    description: str | None,
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            name=name,
            sku=sku,
            price=price,
            stock_quantity=stock_quantity,
            description=description,
        )
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(
        f"Product #{product.id} '{product.name}' ({product.sku}) added at "
        f"{product.price} with {product.stock_quantity} in stock"
    )


@click.command("list")
@click.option("--search", "query", default=None, help="Filter by name or SKU.")
@click.option("--description", default=None, help="Filter by description text.")
@click.option(
    "--sort-by",
    type=click.Choice(sorted(SORT_KEYS), case_sensitive=False),
    default="name",
    show_default=True,
)
@click.option("--desc", "descending", is_flag=True, default=False, help="Sort in descending order.")
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--page-size", default=10, show_default=True, type=int)
def product_list(
    query: str | None,
    description: str | None,
    sort_by: str,
    descending: bool,
    page: int,
    page_size: int,
) -> None:
    """List active products in the catalog."""
    handler = SearchProductsHandler(product_repo=product_repository())

    try:
        result = handler.handle(
            query=query,
            page=page,
            page_size=page_size,
            description=description,
            sort_by=sort_by,
            descending=descending,
        )
    except DomainException as exc:
        raise DomainClickException(exc)

    if not result.items:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'SKU':<10} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 57)
    for p in result.items:
        click.echo(f"{p.id:<6} {p.name:<20} {p.sku:<10} {p.price:>10} {p.stock_quantity:>7}")
    click.echo(f"Page {result.page} of {result.total_pages} ({result.total_count} products)")


@click.command("show")
@click.option("--id", "product_id", default=None, help="Product ID.")
@click.option("--sku", default=None, help="Product SKU.")
def product_show(product_id: str | None, sku: str | None) -> None:
    """Show one product, by id or by SKU."""
    if (product_id is None) == (sku is None):
        raise click.UsageError("Give exactly one of --id or --sku.")

    handler = ShowProductHandler(product_repo=product_repository())

    try:
        if product_id is not None:
            p = handler.handle(product_id)
        else:
            p = handler.by_sku(sku)  # type: ignore[arg-type]
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"Product #{p.id} {p.name} ({p.sku})")
    click.echo(f"Price:  {p.price}")
    click.echo(f"Stock:  {p.stock_quantity}")
    click.echo(f"Active: {'yes' if p.is_active else 'no'}")
    if p.description:
        click.echo(p.description)


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", required=True, help="New price (e.g. 29.99).")
def product_update(product_id: str, price: str) -> None:
    """Update a product's price."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(product_id=product_id, new_price=price)
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"Product #{product_id} price updated to {product.price}")


@click.command("deactivate")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_deactivate(product_id: str) -> None:
    """Remove a product from search and from new orders."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        handler.deactivate(product_id)
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"Product #{product_id} deactivated.")
