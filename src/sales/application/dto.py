"""Data Transfer Objects: plain containers that cross layer boundaries.

Commands carry caller input into the handlers; results and DTOs carry
the outcome back out without exposing domain internals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sales.domain.constraints import DEFAULT_CANCELLATION_REASON


# ---------------------------------------------------------------------------
# Commands (input)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SaleItemSpec:
    """A product line to put on a sale."""

    product_id: UUID
    product_name: str
    unit_price: Decimal
    quantity: int


@dataclass(frozen=True)
class ItemQuantitySpec:
    """A new quantity for a product line already on the sale."""

    product_id: UUID
    quantity: int


@dataclass(frozen=True)
class CreateSaleCommand:
    customer_id: UUID
    customer_name: str
    branch_id: UUID
    branch_name: str
    items: list[SaleItemSpec] = field(default_factory=list)


@dataclass(frozen=True)
class GetSaleCommand:
    id: UUID


@dataclass(frozen=True)
class UpdateSaleCommand:
    """Three independent operation lists, applied add -> update -> remove."""

    id: UUID
    items_to_add: list[SaleItemSpec] = field(default_factory=list)
    items_to_update: list[ItemQuantitySpec] = field(default_factory=list)
    product_ids_to_remove: list[UUID] = field(default_factory=list)


@dataclass(frozen=True)
class CancelSaleCommand:
    id: UUID
    cancellation_reason: str = DEFAULT_CANCELLATION_REASON


@dataclass(frozen=True)
class DeleteSaleCommand:
    id: UUID


# ---------------------------------------------------------------------------
# Results (output)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SaleItemDTO:
    id: UUID
    product_id: UUID
    product_name: str
    quantity: int
    unit_price: Decimal
    discount_percentage: int
    discount_amount: Decimal
    total_amount: Decimal
    is_cancelled: bool


@dataclass(frozen=True)
class SaleDTO:
    """Output: a complete sale as returned by create and get."""

    id: UUID
    sale_number: int
    sale_date: datetime
    customer_id: UUID
    customer_name: str
    branch_id: UUID
    branch_name: str
    total_amount: Decimal
    currency: str
    status: str
    created_at: datetime
    updated_at: datetime | None
    items: list[SaleItemDTO]


@dataclass(frozen=True)
class UpdateSaleResult:
    id: UUID
    sale_number: int
    total_amount: Decimal
    status: str
    item_count: int
    updated_at: datetime | None
    items_added: int
    items_updated: int
    items_removed: int
    message: str


@dataclass(frozen=True)
class CancelSaleResult:
    success: bool
    sale_id: UUID
    sale_number: int
    message: str
    cancelled_at: datetime


@dataclass(frozen=True)
class DeleteSaleResult:
    success: bool
    message: str
