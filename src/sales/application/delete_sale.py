"""Application service: Delete Sale use case.

A hard delete of the sale and all of its lines.
"""

from __future__ import annotations

import logging

from sales.application.dto import DeleteSaleCommand, DeleteSaleResult
from sales.application.validators import validate_delete_sale
from sales.domain.constraints import sale_not_found
from sales.domain.exceptions import EntityNotFoundError
from sales.domain.repository.sale_repository import SaleRepository

logger = logging.getLogger(__name__)


class DeleteSaleHandler:

    def __init__(self, sale_repo: SaleRepository) -> None:
        self._sale_repo = sale_repo

    def handle(self, command: DeleteSaleCommand) -> DeleteSaleResult:
        validate_delete_sale(command)

        if not self._sale_repo.delete(command.id):
            raise EntityNotFoundError(sale_not_found(command.id))

        logger.info("Sale %s deleted", command.id)
        return DeleteSaleResult(success=True, message="Sale deleted successfully")
