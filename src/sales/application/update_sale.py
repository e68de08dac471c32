"""Application service: Update Sale use case.

Applies three independent operation lists to one sale, always in the
same order:

  1. adds: ``Sale.add_item`` (merge into an existing line or append)
  2. updates: ``Sale.update_item_quantity`` (quantity 0 removes the line)
  3. removals: ``Sale.remove_item``

The order is observable: adding and removing the same product in one
command leaves it absent, and an update can target a line added by the
same command.  The sale is persisted once, after every operation
succeeded; a failure part-way leaves the stored sale untouched.
"""

from __future__ import annotations

import logging

from sales.application.dto import UpdateSaleCommand, UpdateSaleResult
from sales.application.validators import validate_update_sale
from sales.domain.constraints import CANCELLED_SALE_NOT_UPDATABLE, sale_not_found
from sales.domain.exceptions import EntityNotFoundError, InvalidOperationError
from sales.domain.model.sale import Sale, SaleItem
from sales.domain.repository.sale_repository import SaleRepository

logger = logging.getLogger(__name__)


class UpdateSaleHandler:

    def __init__(self, sale_repo: SaleRepository) -> None:
        self._sale_repo = sale_repo

    def handle(self, command: UpdateSaleCommand) -> UpdateSaleResult:
        validate_update_sale(command)

        sale = self._sale_repo.get_by_id(command.id)
        if sale is None:
            raise EntityNotFoundError(sale_not_found(command.id))
        if sale.is_cancelled:
            raise InvalidOperationError(CANCELLED_SALE_NOT_UPDATABLE)

        self._apply(sale, command)

        persisted = self._sale_repo.update(sale)
        message = self._summarize(command)
        logger.info("Sale %s updated: %s", persisted.id, message)

        return UpdateSaleResult(
            id=persisted.id,
            sale_number=persisted.sale_number,
            total_amount=persisted.total_amount.amount,
            status=persisted.status.value,
            item_count=persisted.item_count,
            updated_at=persisted.updated_at,
            items_added=len(command.items_to_add),
            items_updated=len(command.items_to_update),
            items_removed=len(command.product_ids_to_remove),
            message=message,
        )

    @staticmethod
    def _apply(sale: Sale, command: UpdateSaleCommand) -> None:
        for spec in command.items_to_add:
            sale.add_item(
                SaleItem.create(
                    product_id=spec.product_id,
                    product_name=spec.product_name.strip(),
                    unit_price=spec.unit_price,
                    quantity=spec.quantity,
                    currency=sale.currency,
                )
            )

        for update in command.items_to_update:
            sale.update_item_quantity(update.product_id, update.quantity)

        for product_id in command.product_ids_to_remove:
            sale.remove_item(product_id)

    @staticmethod
    def _summarize(command: UpdateSaleCommand) -> str:
        parts: list[str] = []
        if command.items_to_add:
            parts.append(f"{len(command.items_to_add)} item(s) added")
        if command.items_to_update:
            parts.append(f"{len(command.items_to_update)} item(s) updated")
        if command.product_ids_to_remove:
            parts.append(f"{len(command.product_ids_to_remove)} item(s) removed")

        if not parts:
            return "Sale saved: no changes requested"
        return "Sale saved: " + ", ".join(parts)
