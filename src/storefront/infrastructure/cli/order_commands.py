"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.dto import OrderDTO, OrderItemSpec
from storefront.application.list_orders import ListOrdersHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    create_order_handler,
    order_repository,
    revise_order_handler,
)
from storefront.infrastructure.config import Settings


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'ID1:3,ID2:5' into an OrderItemSpec list."""
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
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<38} {'Qty':>5} {'Price':>12} {'Total':>12}")
    click.echo(f"  {'-'*70}")
    for item in dto.items:
        click.echo(
            f"  {item.product_id:<38} {item.quantity:>5} "
            f"{item.unit_price:>12.2f} {item.line_total:>12.2f}"
        )
    click.echo(f"  {'-'*70}")
    click.echo(f"  {'Order Total':<44} {dto.total:>12.2f} {dto.currency:>12}")


@click.command("create")
@click.option("--customer", required=True, help="Customer id.")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.pass_obj
def order_create(settings: Settings, customer: str, items: str) -> None:
    """Create an order, taking the items out of stock."""
    specs = _parse_items(items)
    handler = create_order_handler(settings)

    try:
        order_id = handler.handle(customer_id=customer, item_specs=specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} created")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order id to display.")
@click.pass_obj
def order_show(settings: Settings, order_id: str) -> None:
    """Show details of an existing order."""
    dto = ShowOrderHandler(order_repo=order_repository(settings)).handle(order_id)
    if dto is None:
        raise click.ClickException(f"Order '{order_id}' not found")
    _display_order(dto)


@click.command("list")
@click.option("--customer", default=None, help="Only this customer's orders.")
@click.pass_obj
def order_list(settings: Settings, customer: str | None) -> None:
    """List orders."""
    orders = ListOrdersHandler(order_repo=order_repository(settings)).handle(customer)

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<38} {'Customer':<20} {'Status':<12} {'Total':>12}")
    click.echo("-" * 85)
    for dto in orders:
        click.echo(f"{dto.id:<38} {dto.customer_id:<20} {dto.status:<12} {dto.total:>12.2f}")


@click.command("revise")
@click.option("--id", "order_id", required=True, help="Order id to revise.")
@click.option("--status", required=True, help="New status label (e.g. PROCESSING).")
@click.option("--items", "items_str", default=None, help="Replacement items as 'ProductId:Qty,...'.")
@click.pass_obj
def order_revise(settings: Settings, order_id: str, status: str, items_str: str | None) -> None:
    """Change an order's status and optionally replace its items."""
    specs = _parse_items(items_str) if items_str else None
    handler = revise_order_handler(settings)

    try:
        dto = handler.handle(order_id, status, specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if dto is None:
        raise click.ClickException(f"Order '{order_id}' not found")
    _display_order(dto)
