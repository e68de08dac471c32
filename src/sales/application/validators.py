"""Command validators.

Each validator collects every field-level problem and raises a single
ValidationError, so a caller sees all mistakes at once.  Validation
runs before any repository access.  Limits come from
``sales.domain.constraints``, the same values the aggregate enforces.
"""

from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from sales.application.dto import (
    CancelSaleCommand,
    CreateSaleCommand,
    DeleteSaleCommand,
    GetSaleCommand,
    ItemQuantitySpec,
    SaleItemSpec,
    UpdateSaleCommand,
)
from sales.domain.constraints import (
    CANCELLATION_REASON_MAX_LENGTH,
    MAX_ITEM_QUANTITY,
    MAX_QUANTITY_EXCEEDED,
    MIN_ITEM_QUANTITY,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
)
from sales.domain.exceptions import ValidationError

_NIL_UUID = UUID(int=0)


def validate_create_sale(command: CreateSaleCommand) -> None:
    errors: list[str] = []
    _check_id(command.customer_id, "Customer ID", errors)
    _check_name(command.customer_name, "Customer name", errors)
    _check_id(command.branch_id, "Branch ID", errors)
    _check_name(command.branch_name, "Branch name", errors)

    if not command.items:
        errors.append("A sale must contain at least one item")
    for index, spec in enumerate(command.items):
        _check_item(spec, f"items[{index}]", errors)

    _raise_if_any(errors)


def validate_get_sale(command: GetSaleCommand) -> None:
    errors: list[str] = []
    _check_id(command.id, "Sale ID", errors)
    _raise_if_any(errors)


def validate_update_sale(command: UpdateSaleCommand) -> None:
    errors: list[str] = []
    _check_id(command.id, "Sale ID", errors)

    for index, spec in enumerate(command.items_to_add):
        _check_item(spec, f"items_to_add[{index}]", errors)
    for index, spec in enumerate(command.items_to_update):
        _check_quantity_update(spec, f"items_to_update[{index}]", errors)
    for index, product_id in enumerate(command.product_ids_to_remove):
        if _is_empty_id(product_id):
            errors.append(
                f"product_ids_to_remove[{index}]: Product ID to remove cannot be empty"
            )

    _raise_if_any(errors)


def validate_cancel_sale(command: CancelSaleCommand) -> None:
    errors: list[str] = []
    _check_id(command.id, "Sale ID", errors)
    reason = command.cancellation_reason or ""
    if len(reason) > CANCELLATION_REASON_MAX_LENGTH:
        errors.append(
            f"Cancellation reason cannot exceed {CANCELLATION_REASON_MAX_LENGTH} characters"
        )
    _raise_if_any(errors)


def validate_delete_sale(command: DeleteSaleCommand) -> None:
    errors: list[str] = []
    _check_id(command.id, "Sale ID", errors)
    _raise_if_any(errors)


# --- Field rules --------------------------------------------------------------


def _check_item(spec: SaleItemSpec, path: str, errors: list[str]) -> None:
    _check_id(spec.product_id, f"{path}: Product ID", errors)
    _check_name(spec.product_name, f"{path}: Product name", errors)
    if not _is_positive_price(spec.unit_price):
        errors.append(f"{path}: Unit price must be greater than 0")
    _check_quantity(spec.quantity, path, errors)


def _check_quantity_update(spec: ItemQuantitySpec, path: str, errors: list[str]) -> None:
    _check_id(spec.product_id, f"{path}: Product ID", errors)
    _check_quantity(spec.quantity, path, errors)


def _check_quantity(quantity: int, path: str, errors: list[str]) -> None:
    if quantity is None or quantity < MIN_ITEM_QUANTITY:
        errors.append(f"{path}: Quantity must be greater than 0")
    elif quantity > MAX_ITEM_QUANTITY:
        errors.append(f"{path}: {MAX_QUANTITY_EXCEEDED}")


def _check_id(value: UUID | None, label: str, errors: list[str]) -> None:
    if _is_empty_id(value):
        errors.append(f"{label} is required")


def _check_name(value: str | None, label: str, errors: list[str]) -> None:
    if not value or not value.strip():
        errors.append(f"{label} is required")
    elif not NAME_MIN_LENGTH <= len(value) <= NAME_MAX_LENGTH:
        errors.append(
            f"{label} must contain between {NAME_MIN_LENGTH} and "
            f"{NAME_MAX_LENGTH} characters"
        )


def _is_empty_id(value: UUID | None) -> bool:
    return value is None or value == _NIL_UUID


def _is_positive_price(value: Decimal | None) -> bool:
    if value is None:
        return False
    # NaN and Infinity cannot be ordered against zero
    if isinstance(value, Decimal) and not value.is_finite():
        return False
    return value > 0


def _raise_if_any(errors: list[str]) -> None:
    if errors:
        raise ValidationError(errors)
