"""CLI commands for inventory inspection."""

from __future__ import annotations

import click

from orderdesk.application.show_inventory import ShowInventoryHandler
from orderdesk.infrastructure.bootstrap import inventory_ledger, product_repository


@click.command("show")
@click.option("--all", "include_inactive", is_flag=True, default=False, help="Include inactive products.")
def inventory_show(include_inactive: bool) -> None:
    """Show current stock levels."""
    product_repo = product_repository()
    handler = ShowInventoryHandler(product_repo, inventory_ledger(product_repo))
    lines = handler.handle(include_inactive=include_inactive)

    if not lines:
        click.echo("No products found.")
        return

    click.echo(f"{'Product':<20} {'SKU':<10} {'Stock':>8} {'Status':>14}")
    click.echo("-" * 55)
    for line in lines:
        status = "in stock" if line.in_stock else "out of stock"
        click.echo(f"{line.product_name:<20} {line.sku:<10} {line.stock:>8} {status:>14}")
