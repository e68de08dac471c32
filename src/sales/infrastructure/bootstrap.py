"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import logging

from sales.application.cancel_sale import CancelSaleHandler
from sales.application.create_sale import CreateSaleHandler
from sales.application.delete_sale import DeleteSaleHandler
from sales.application.get_sale import GetSaleHandler
from sales.application.update_sale import UpdateSaleHandler
from sales.domain.service.sale_number_generator import RandomSaleNumberGenerator
from sales.infrastructure.config import Settings, load_settings
from sales.infrastructure.persistence.json_sale_repository import (
    JsonSaleRepository,
)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings: Settings | None = None) -> None:
    settings = settings or load_settings()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)


def sale_repository(settings: Settings | None = None) -> JsonSaleRepository:
    settings = settings or load_settings()
    return JsonSaleRepository(settings.sales_file)


def create_sale_handler() -> CreateSaleHandler:
    settings = load_settings()
    return CreateSaleHandler(
        sale_repo=sale_repository(settings),
        sale_numbers=RandomSaleNumberGenerator(),
        currency=settings.currency,
    )


def get_sale_handler() -> GetSaleHandler:
    return GetSaleHandler(sale_repo=sale_repository())


def update_sale_handler() -> UpdateSaleHandler:
    return UpdateSaleHandler(sale_repo=sale_repository())


def cancel_sale_handler() -> CancelSaleHandler:
    return CancelSaleHandler(sale_repo=sale_repository())


def delete_sale_handler() -> DeleteSaleHandler:
    return DeleteSaleHandler(sale_repo=sale_repository())
