"""CLI commands for the Sale aggregate."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from uuid import UUID

import click

from sales.application.dto import (
    CancelSaleCommand,
    CreateSaleCommand,
    DeleteSaleCommand,
    GetSaleCommand,
    ItemQuantitySpec,
    SaleDTO,
    SaleItemSpec,
    UpdateSaleCommand,
)
from sales.domain.constraints import (
    CANCELLATION_REASON_MAX_LENGTH,
    DEFAULT_CANCELLATION_REASON,
    MAX_ITEM_QUANTITY,
    MIN_ITEM_QUANTITY,
)
from sales.domain.exceptions import DomainException
from sales.infrastructure import bootstrap

ITEM_FORMAT = "PRODUCT_ID|NAME|PRICE|QTY"


def _parse_quantity(raw: str, context: str) -> int:
    try:
        qty = int(raw)
    except ValueError:
        raise click.BadParameter(f"Invalid quantity '{raw}' for {context}.")
    if not MIN_ITEM_QUANTITY <= qty <= MAX_ITEM_QUANTITY:
        raise click.BadParameter(
            f"Quantity for {context} must be between "
            f"{MIN_ITEM_QUANTITY} and {MAX_ITEM_QUANTITY}."
        )
    return qty


def _parse_uuid(raw: str) -> UUID:
    try:
        return UUID(raw.strip())
    except ValueError:
        raise click.BadParameter(f"Invalid product ID '{raw}'.")


def _parse_item(raw: str) -> SaleItemSpec:
    """Parse 'PRODUCT_ID|Widget|9.99|3' into a SaleItemSpec."""
    parts = raw.split("|")
    if len(parts) != 4:
        raise click.BadParameter(
            f"Invalid item format '{raw}'. Expected '{ITEM_FORMAT}'."
        )
    product_id, name, price_str, qty_str = (p.strip() for p in parts)
    try:
        price = Decimal(price_str)
    except InvalidOperation:
        raise click.BadParameter(f"Invalid price '{price_str}' for product '{name}'.")
    if not price.is_finite():
        raise click.BadParameter(f"Invalid price '{price_str}' for product '{name}'.")
    return SaleItemSpec(
        product_id=_parse_uuid(product_id),
        product_name=name,
        unit_price=price,
        quantity=_parse_quantity(qty_str, f"product '{name}'"),
    )


def _parse_quantity_update(raw: str) -> ItemQuantitySpec:
    """Parse 'PRODUCT_ID:5' into an ItemQuantitySpec."""
    if ":" not in raw:
        raise click.BadParameter(
            f"Invalid update format '{raw}'. Expected 'PRODUCT_ID:QTY'."
        )
    product_id, qty_str = raw.rsplit(":", 1)
    return ItemQuantitySpec(
        product_id=_parse_uuid(product_id),
        quantity=_parse_quantity(qty_str.strip(), f"product '{product_id}'"),
    )


def _display_sale(dto: SaleDTO) -> None:
    """Shared formatting for displaying a sale."""
    click.echo(f"Sale #{dto.sale_number}  (status={dto.status})")
    click.echo(f"ID:       {dto.id}")
    click.echo(f"Customer: {dto.customer_name}")
    click.echo(f"Branch:   {dto.branch_name}")
    click.echo(f"Date:     {dto.sale_date.strftime('%Y-%m-%d %H:%M UTC')}")
    click.echo()
    click.echo(
        f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Disc':>5} {'Total':>10}"
    )
    click.echo(f"  {'-'*54}")
    for item in dto.items:
        name = f"{item.product_name} (cancelled)" if item.is_cancelled else item.product_name
        click.echo(
            f"  {name:<20} {item.quantity:>5} {item.unit_price:>10.2f} "
            f"{item.discount_percentage:>4}% {item.total_amount:>10.2f}"
        )
    click.echo(f"  {'-'*54}")
    click.echo(f"  {'Sale Total':<27} {dto.total_amount:>27.2f}")


@click.command("create")
@click.option("--customer-id", required=True, type=click.UUID, help="Customer ID.")
@click.option("--customer-name", required=True, help="Customer name.")
@click.option("--branch-id", required=True, type=click.UUID, help="Branch ID.")
@click.option("--branch-name", required=True, help="Branch name.")
@click.option(
    "--item", "items", required=True, multiple=True,
    help=f"Item as '{ITEM_FORMAT}'. Repeatable.",
)
def sale_create(
    customer_id: UUID,
    customer_name: str,
    branch_id: UUID,
    branch_name: str,
    items: tuple[str, ...],
) -> None:
    """Create a new sale."""
    command = CreateSaleCommand(
        customer_id=customer_id,
        customer_name=customer_name,
        branch_id=branch_id,
        branch_name=branch_name,
        items=[_parse_item(raw) for raw in items],
    )

    try:
        dto = bootstrap.create_sale_handler().handle(command)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Sale created.")
    _display_sale(dto)


@click.command("show")
@click.option("--id", "sale_id", required=True, type=click.UUID, help="Sale ID to display.")
def sale_show(sale_id: UUID) -> None:
    """Show details of an existing sale."""
    try:
        dto = bootstrap.get_sale_handler().handle(GetSaleCommand(id=sale_id))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_sale(dto)


@click.command("update")
@click.option("--id", "sale_id", required=True, type=click.UUID, help="Sale ID to update.")
@click.option("--add", "to_add", multiple=True, help=f"Item to add as '{ITEM_FORMAT}'.")
@click.option("--set", "to_update", multiple=True, help="New quantity as 'PRODUCT_ID:QTY'.")
@click.option("--remove", "to_remove", multiple=True, type=click.UUID, help="Product ID to remove.")
def sale_update(
    sale_id: UUID,
    to_add: tuple[str, ...],
    to_update: tuple[str, ...],
    to_remove: tuple[UUID, ...],
) -> None:
    """Add, re-quantify and remove items (applied in that order)."""
    command = UpdateSaleCommand(
        id=sale_id,
        items_to_add=[_parse_item(raw) for raw in to_add],
        items_to_update=[_parse_quantity_update(raw) for raw in to_update],
        product_ids_to_remove=list(to_remove),
    )

    try:
        result = bootstrap.update_sale_handler().handle(command)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(result.message)
    click.echo(
        f"Sale #{result.sale_number}: {result.item_count} item(s), "
        f"total {result.total_amount:.2f} (status={result.status})"
    )


@click.command("cancel")
@click.option("--id", "sale_id", required=True, type=click.UUID, help="Sale ID to cancel.")
@click.option(
    "--reason", default=DEFAULT_CANCELLATION_REASON, show_default=True,
    help=f"Cancellation reason (max {CANCELLATION_REASON_MAX_LENGTH} characters).",
)
def sale_cancel(sale_id: UUID, reason: str) -> None:
    """Cancel a sale and every one of its items."""
    try:
        result = bootstrap.cancel_sale_handler().handle(
            CancelSaleCommand(id=sale_id, cancellation_reason=reason)
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sale #{result.sale_number}: {result.message}")


@click.command("delete")
@click.option("--id", "sale_id", required=True, type=click.UUID, help="Sale ID to delete.")
def sale_delete(sale_id: UUID) -> None:
    """Permanently delete a sale."""
    try:
        result = bootstrap.delete_sale_handler().handle(DeleteSaleCommand(id=sale_id))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(result.message)
