"""Business constants shared by every layer.

The aggregate, the application validators and the CLI option types all
read their limits from here so the rules cannot drift apart.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Quantities
# ---------------------------------------------------------------------------
MIN_ITEM_QUANTITY = 1
MAX_ITEM_QUANTITY = 20

# (minimum quantity, discount percentage), highest tier first
DISCOUNT_TIERS: tuple[tuple[int, int], ...] = (
    (10, 20),
    (4, 10),
)

# ---------------------------------------------------------------------------
# Text fields
# ---------------------------------------------------------------------------
NAME_MIN_LENGTH = 1
NAME_MAX_LENGTH = 100
CANCELLATION_REASON_MAX_LENGTH = 500
DEFAULT_CANCELLATION_REASON = "Sale cancelled"

# ---------------------------------------------------------------------------
# Sale numbers
# ---------------------------------------------------------------------------
SALE_NUMBER_MIN = 1_000_000_000
SALE_NUMBER_MAX = 9_999_999_999

# ---------------------------------------------------------------------------
# Messages that callers match on verbatim
# ---------------------------------------------------------------------------
MAX_QUANTITY_EXCEEDED = (
    f"You cannot add more than {MAX_ITEM_QUANTITY} of the same item to a sale"
)
SALE_ALREADY_CANCELLED = "Sale has already been cancelled"
CANCELLED_SALE_NOT_UPDATABLE = "Canceled sales cannot be updated"


def discount_percentage_for(quantity: int) -> int:
    """Return the discount tier (0, 10 or 20) for a line quantity.

    Callers reject quantities above MAX_ITEM_QUANTITY before asking.
    """
    for minimum, percentage in DISCOUNT_TIERS:
        if quantity >= minimum:
            return percentage
    return 0


def sale_not_found(sale_id: object) -> str:
    return f"Sale with ID {sale_id} not found"
