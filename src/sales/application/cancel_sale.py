"""Application service: Cancel Sale use case.

Cancelling cascades to every line and drives the total to zero.  After
the sale is persisted, one SaleCancelledEvent and one
SaleItemCancelledEvent per previously active line are logged and handed
to the optional ``on_event`` listener.  Those notifications are
best-effort: a failing listener never undoes the cancellation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from sales.application.dto import CancelSaleCommand, CancelSaleResult
from sales.application.validators import validate_cancel_sale
from sales.domain.constraints import (
    DEFAULT_CANCELLATION_REASON,
    SALE_ALREADY_CANCELLED,
    sale_not_found,
)
from sales.domain.events import DomainEvent, SaleCancelledEvent, SaleItemCancelledEvent
from sales.domain.exceptions import EntityNotFoundError, InvalidOperationError
from sales.domain.repository.sale_repository import SaleRepository

logger = logging.getLogger(__name__)

EventListener = Callable[[DomainEvent], None]


class CancelSaleHandler:

    def __init__(
        self,
        sale_repo: SaleRepository,
        on_event: EventListener | None = None,
    ) -> None:
        self._sale_repo = sale_repo
        self._on_event = on_event

    def handle(self, command: CancelSaleCommand) -> CancelSaleResult:
        validate_cancel_sale(command)

        sale = self._sale_repo.get_by_id(command.id)
        if sale is None:
            raise EntityNotFoundError(sale_not_found(command.id))
        if sale.is_cancelled:
            raise InvalidOperationError(SALE_ALREADY_CANCELLED)

        active_items = [item for item in sale.items if not item.is_cancelled]
        sale.cancel()
        persisted = self._sale_repo.update(sale)

        reason = command.cancellation_reason or DEFAULT_CANCELLATION_REASON
        self._notify(SaleCancelledEvent.from_sale(persisted, reason))
        for item in active_items:
            self._notify(SaleItemCancelledEvent.from_item(item, reason))

        return CancelSaleResult(
            success=True,
            sale_id=persisted.id,
            sale_number=persisted.sale_number,
            message="Sale has been cancelled successfully",
            cancelled_at=persisted.updated_at or datetime.now(timezone.utc),
        )

    def _notify(self, event: DomainEvent) -> None:
        logger.info("%s: %s", type(event).__name__, event)
        if self._on_event is None:
            return
        try:
            self._on_event(event)
        except Exception:
            logger.exception("Listener failed for %s", type(event).__name__)
