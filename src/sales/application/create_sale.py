"""Application service: Create Sale use case.

Builds a new Sale through the aggregate's own ``add_item`` so duplicate
product lines in the request merge exactly as later additions would.
"""

from __future__ import annotations

import logging

from sales.application.dto import CreateSaleCommand, SaleDTO
from sales.application.mapping import to_sale_dto
from sales.application.validators import validate_create_sale
from sales.domain.exceptions import DuplicateSaleNumberError
from sales.domain.model.sale import Sale, SaleItem
from sales.domain.model.value_objects import DEFAULT_CURRENCY
from sales.domain.repository.sale_repository import SaleRepository
from sales.domain.service.sale_number_generator import (
    RandomSaleNumberGenerator,
    SaleNumberGenerator,
)

logger = logging.getLogger(__name__)

MAX_SALE_NUMBER_ATTEMPTS = 3


class CreateSaleHandler:

    def __init__(
        self,
        sale_repo: SaleRepository,
        sale_numbers: SaleNumberGenerator | None = None,
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self._sale_repo = sale_repo
        self._sale_numbers = sale_numbers or RandomSaleNumberGenerator()
        self._currency = currency

    def handle(self, command: CreateSaleCommand) -> SaleDTO:
        """Create a new confirmed sale.

        Steps:
        1. Validate the command (no repository access on failure).
        2. Open the sale and add each line through the aggregate.
        3. Persist, drawing a fresh sale number if the store reports
           a collision.
        4. Return a DTO of the persisted sale.
        """
        validate_create_sale(command)

        sale = Sale.create(
            sale_number=self._sale_numbers.next_number(),
            customer_id=command.customer_id,
            customer_name=command.customer_name.strip(),
            branch_id=command.branch_id,
            branch_name=command.branch_name.strip(),
            currency=self._currency,
        )
        for spec in command.items:
            sale.add_item(
                SaleItem.create(
                    product_id=spec.product_id,
                    product_name=spec.product_name.strip(),
                    unit_price=spec.unit_price,
                    quantity=spec.quantity,
                    currency=self._currency,
                )
            )

        persisted = self._create_with_unique_number(sale)
        logger.info(
            "Sale %s created (number=%s, items=%d, total=%s)",
            persisted.id,
            persisted.sale_number,
            persisted.item_count,
            persisted.total_amount,
        )
        return to_sale_dto(persisted)

    def _create_with_unique_number(self, sale: Sale) -> Sale:
        attempt = 1
        while True:
            try:
                return self._sale_repo.create(sale)
            except DuplicateSaleNumberError:
                if attempt >= MAX_SALE_NUMBER_ATTEMPTS:
                    raise
                logger.warning(
                    "Sale number %s already taken, drawing another (attempt %d/%d)",
                    sale.sale_number,
                    attempt,
                    MAX_SALE_NUMBER_ATTEMPTS,
                )
                sale.sale_number = self._sale_numbers.next_number()
                attempt += 1
