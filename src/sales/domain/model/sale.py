"""Sale aggregate, the core of the domain.

The Sale is an aggregate root that owns its line items.  Every mutation
goes through its methods so the cross-item invariants hold:

- ``total_amount`` is always the sum of the item totals
- no product ever exceeds MAX_ITEM_QUANTITY units on one sale
- a cancelled sale rejects further item changes
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from uuid import UUID, uuid4

from sales.domain.constraints import (
    MAX_ITEM_QUANTITY,
    MIN_ITEM_QUANTITY,
    MAX_QUANTITY_EXCEEDED,
    SALE_NUMBER_MAX,
    SALE_NUMBER_MIN,
    discount_percentage_for,
)
from sales.domain.exceptions import InvalidArgumentError, InvalidOperationError
from sales.domain.model.value_objects import DEFAULT_CURRENCY, Money


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SaleStatus(Enum):
    CONFIRMED = "Confirmed"
    CANCELLED = "Cancelled"


@dataclass
class SaleItem:
    """One product line of a sale.

    Owns its own discount and total computation.  Use
    ``SaleItem.create()`` for new lines; the plain constructor is how the
    repository reconstitutes persisted lines without recomputing them.
    """

    product_id: UUID
    product_name: str
    unit_price: Money
    quantity: int
    id: UUID = field(default_factory=uuid4)
    sale_id: UUID | None = None
    discount_percentage: int = 0
    discount_amount: Money = field(default_factory=Money.zero)
    total_amount: Money = field(default_factory=Money.zero)
    is_cancelled: bool = False

    # --- Factory (used for NEW lines only) ------------------------------------

    @staticmethod
    def create(
        product_id: UUID,
        product_name: str,
        unit_price: Money | Decimal | str | int,
        quantity: int,
        currency: str = DEFAULT_CURRENCY,
    ) -> SaleItem:
        """Build a line and price it from its quantity tier."""
        _check_quantity(quantity)
        if quantity < MIN_ITEM_QUANTITY:
            raise InvalidArgumentError(
                f"Quantity must be at least {MIN_ITEM_QUANTITY}"
            )
        price = _to_price(unit_price, currency)
        item = SaleItem(
            product_id=product_id,
            product_name=product_name,
            unit_price=price,
            quantity=quantity,
            discount_amount=Money.zero(price.currency),
            total_amount=Money.zero(price.currency),
        )
        item._apply_discount_tier()
        item._calculate_total()
        return item

    # --- Mutations ------------------------------------------------------------

    def update_quantity(self, new_quantity: int) -> None:
        """Change the quantity and re-price the line."""
        _check_quantity(new_quantity)
        if self.is_cancelled:
            raise InvalidOperationError("Cannot update quantity of a cancelled item")

        self.quantity = new_quantity
        self._apply_discount_tier()
        self._calculate_total()

    def update_unit_price(self, new_unit_price: Money | Decimal | str | int) -> None:
        """Change the unit price; the discount tier stays tied to quantity."""
        price = _to_price(new_unit_price, self.unit_price.currency)
        if self.is_cancelled:
            raise InvalidOperationError("Cannot update price of a cancelled item")

        self.unit_price = price
        self._apply_discount_tier()
        self._calculate_total()

    def cancel(self) -> None:
        """Cancel the line.  Quantity and price are kept as a record."""
        self.is_cancelled = True
        self.discount_percentage = 0
        self.discount_amount = Money.zero(self.unit_price.currency)
        self.total_amount = Money.zero(self.unit_price.currency)

    # --- Computed properties --------------------------------------------------

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity

    # --- Internal helpers -----------------------------------------------------

    def _apply_discount_tier(self) -> None:
        if self.is_cancelled:
            return
        self.discount_percentage = discount_percentage_for(self.quantity)

    def _calculate_total(self) -> None:
        if self.is_cancelled:
            self.discount_amount = Money.zero(self.unit_price.currency)
            self.total_amount = Money.zero(self.unit_price.currency)
            return

        subtotal = self.subtotal
        self.discount_amount = subtotal.percent(self.discount_percentage)
        self.total_amount = subtotal - self.discount_amount


@dataclass
class Sale:
    """Aggregate root for sale records.

    Use the ``Sale.create()`` factory for new sales.  The ``__init__`` is
    intentionally simple so the repository can reconstitute persisted
    sales without re-validating.
    """

    sale_number: int
    customer_id: UUID
    customer_name: str
    branch_id: UUID
    branch_name: str
    id: UUID = field(default_factory=uuid4)
    sale_date: datetime = field(default_factory=_utcnow)
    status: SaleStatus = SaleStatus.CONFIRMED
    currency: str = DEFAULT_CURRENCY
    total_amount: Money = field(default_factory=Money.zero)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime | None = None
    items: list[SaleItem] = field(default_factory=list)

    # --- Factory (used for NEW sales only) ------------------------------------

    @staticmethod
    def create(
        sale_number: int,
        customer_id: UUID,
        customer_name: str,
        branch_id: UUID,
        branch_name: str,
        currency: str = DEFAULT_CURRENCY,
    ) -> Sale:
        """Open a new, empty, confirmed sale."""
        if not SALE_NUMBER_MIN <= sale_number <= SALE_NUMBER_MAX:
            raise InvalidArgumentError(
                f"Sale number must be between {SALE_NUMBER_MIN} and {SALE_NUMBER_MAX}"
            )
        now = _utcnow()
        return Sale(
            sale_number=sale_number,
            customer_id=customer_id,
            customer_name=customer_name,
            branch_id=branch_id,
            branch_name=branch_name,
            sale_date=now,
            created_at=now,
            currency=currency,
            total_amount=Money.zero(currency),
        )

    # --- Item operations ------------------------------------------------------

    def add_item(self, item: SaleItem) -> None:
        """Add a line, merging into an existing line for the same product.

        Fails before touching anything if the merged quantity would pass
        the per-product cap.
        """
        if self.is_cancelled:
            raise InvalidOperationError("Cannot add items to a cancelled sale")
        if item.unit_price.currency != self.currency:
            raise InvalidArgumentError(
                f"Cannot add a {item.unit_price.currency} item to a {self.currency} sale"
            )

        existing = self.find_item(item.product_id)
        merged_quantity = (existing.quantity if existing else 0) + item.quantity
        if merged_quantity > MAX_ITEM_QUANTITY:
            raise InvalidOperationError(MAX_QUANTITY_EXCEEDED)

        if existing is not None:
            existing.update_quantity(merged_quantity)
        else:
            item.sale_id = self.id
            self.items.append(item)

        self._recalculate_total()
        self._touch()

    def remove_item(self, product_id: UUID) -> None:
        """Drop the line for *product_id*; unknown products are ignored."""
        if self.is_cancelled:
            raise InvalidOperationError("Cannot remove items from a cancelled sale")

        item = self.find_item(product_id)
        if item is None:
            return

        self.items.remove(item)
        self._recalculate_total()
        self._touch()

    def update_item_quantity(self, product_id: UUID, quantity: int) -> None:
        """Set a line's quantity.  A quantity of 0 removes the line."""
        if self.is_cancelled:
            raise InvalidOperationError("Cannot update items in a cancelled sale")
        if quantity > MAX_ITEM_QUANTITY:
            raise InvalidOperationError(MAX_QUANTITY_EXCEEDED)

        if quantity == 0:
            self.remove_item(product_id)
            return

        item = self.find_item(product_id)
        if item is None:
            return

        item.update_quantity(quantity)
        self._recalculate_total()
        self._touch()

    # --- State transitions ----------------------------------------------------

    def cancel(self) -> None:
        """Transition to CANCELLED, cancelling every line.

        Re-cancelling is not an error here; the application handler
        rejects it before calling.
        """
        self.status = SaleStatus.CANCELLED
        self._touch()

        for item in self.items:
            item.cancel()

        self._recalculate_total()

    # --- Queries --------------------------------------------------------------

    @property
    def is_cancelled(self) -> bool:
        return self.status == SaleStatus.CANCELLED

    @property
    def item_count(self) -> int:
        return len(self.items)

    def find_item(self, product_id: UUID) -> SaleItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    # --- Internal helpers -----------------------------------------------------

    def _recalculate_total(self) -> None:
        total = Money.zero(self.currency)
        for item in self.items:
            total = total + item.total_amount
        self.total_amount = total

    def _touch(self) -> None:
        self.updated_at = _utcnow()


def _check_quantity(quantity: int) -> None:
    if quantity < 0:
        raise InvalidArgumentError("Quantity cannot be negative")
    if quantity > MAX_ITEM_QUANTITY:
        raise InvalidArgumentError(MAX_QUANTITY_EXCEEDED)


def _to_price(value: Money | Decimal | str | int, currency: str) -> Money:
    if isinstance(value, Money):
        return value
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise InvalidArgumentError(f"Invalid unit price: {value!r}") from exc
    if not amount.is_finite():
        raise InvalidArgumentError(f"Invalid unit price: {value!r}")
    if amount < 0:
        raise InvalidArgumentError("Unit price cannot be negative")
    return Money(amount, currency)
