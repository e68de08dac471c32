"""Application service: Get Sale use case (query)."""

from __future__ import annotations

from sales.application.dto import GetSaleCommand, SaleDTO
from sales.application.mapping import to_sale_dto
from sales.application.validators import validate_get_sale
from sales.domain.constraints import sale_not_found
from sales.domain.exceptions import EntityNotFoundError
from sales.domain.repository.sale_repository import SaleRepository


class GetSaleHandler:

    def __init__(self, sale_repo: SaleRepository) -> None:
        self._sale_repo = sale_repo

    def handle(self, command: GetSaleCommand) -> SaleDTO:
        validate_get_sale(command)

        sale = self._sale_repo.get_by_id(command.id)
        if sale is None:
            raise EntityNotFoundError(sale_not_found(command.id))
        return to_sale_dto(sale)
