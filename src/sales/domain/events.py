"""Domain events raised when a sale is cancelled.

Events are immutable snapshots.  They are handed to the logger and to an
optional listener; nothing guarantees their delivery.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID

from sales.domain.constraints import DEFAULT_CANCELLATION_REASON
from sales.domain.model.sale import Sale, SaleItem


@dataclass(frozen=True)
class SaleCancelledEvent:
    sale_id: UUID
    sale_number: int
    customer_id: UUID
    customer_name: str
    branch_id: UUID
    branch_name: str
    total_amount: Decimal
    cancelled_at: datetime
    cancellation_reason: str

    @staticmethod
    def from_sale(
        sale: Sale, cancellation_reason: str = DEFAULT_CANCELLATION_REASON
    ) -> SaleCancelledEvent:
        return SaleCancelledEvent(
            sale_id=sale.id,
            sale_number=sale.sale_number,
            customer_id=sale.customer_id,
            customer_name=sale.customer_name,
            branch_id=sale.branch_id,
            branch_name=sale.branch_name,
            total_amount=sale.total_amount.amount,
            cancelled_at=sale.updated_at or datetime.now(timezone.utc),
            cancellation_reason=cancellation_reason,
        )


@dataclass(frozen=True)
class SaleItemCancelledEvent:
    item_id: UUID
    sale_id: UUID | None
    product_id: UUID
    product_name: str
    quantity: int
    unit_price: Decimal
    cancellation_reason: str

    @staticmethod
    def from_item(
        item: SaleItem, cancellation_reason: str = DEFAULT_CANCELLATION_REASON
    ) -> SaleItemCancelledEvent:
        return SaleItemCancelledEvent(
            item_id=item.id,
            sale_id=item.sale_id,
            product_id=item.product_id,
            product_name=item.product_name,
            quantity=item.quantity,
            unit_price=item.unit_price.amount,
            cancellation_reason=cancellation_reason,
        )


DomainEvent = SaleCancelledEvent | SaleItemCancelledEvent
