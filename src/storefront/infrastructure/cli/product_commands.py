"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.list_products import ListProductsHandler
from storefront.application.show_product import ShowProductHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import product_repository
from storefront.infrastructure.config import Settings


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Unit price (e.g. 15.00).")
@click.option("--stock", "stock", required=True, type=int, help="Units in stock.")
@click.option("--description", default="", help="Free-text description.")
@click.pass_obj
def product_add(settings: Settings, name: str, price: str, stock: int, description: str) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository(settings))

    try:
        dto = handler.handle(name=name, price=price, stock_quantity=stock, description=description)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} '{dto.name}' added at {dto.price:.2f} ({dto.stock_quantity} in stock)")


@click.command("list")
@click.pass_obj
def product_list(settings: Settings) -> None:
    """List all products in the catalog."""
    products = ListProductsHandler(product_repo=product_repository(settings)).handle()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<38} {'Name':<20} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 78)
    for p in products:
        click.echo(f"{p.id:<38} {p.name:<20} {p.price:>10.2f} {p.stock_quantity:>7}")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product id.")
@click.pass_obj
def product_show(settings: Settings, product_id: str) -> None:
    """Show one product."""
    dto = ShowProductHandler(product_repo=product_repository(settings)).handle(product_id)
    if dto is None:
        raise click.ClickException(f"Product '{product_id}' not found")

    click.echo(f"Product {dto.id}")
    click.echo(f"Name:        {dto.name}")
    if dto.description:
        click.echo(f"Description: {dto.description}")
    click.echo(f"Price:       {dto.price:.2f} {dto.currency}")
    click.echo(f"Stock:       {dto.stock_quantity}")
    click.echo(f"Created:     {dto.created_at}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product id.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--stock", "stock", default=None, type=int, help="New stock level.")
@click.pass_obj
def product_update(settings: Settings, product_id: str, price: str | None, stock: int | None) -> None:
    """Update a product's price and/or stock level."""
    handler = UpdateProductHandler(product_repo=product_repository(settings))

    try:
        dto = handler.handle(product_id=product_id, price=price, stock_quantity=stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} updated: price {dto.price:.2f}, stock {dto.stock_quantity}")
