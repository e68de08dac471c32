"""JSON-file-backed implementation of SaleRepository.

Each call re-reads and rewrites the whole file, so the stored document
is the unit of durability.  Reads always return fresh objects; an
aggregate mutated in memory is not visible until ``update`` is called.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from uuid import UUID

from sales.domain.constraints import sale_not_found
from sales.domain.exceptions import (
    DuplicateSaleNumberError,
    EntityNotFoundError,
    InvalidOperationError,
)
from sales.domain.model.sale import Sale, SaleItem, SaleStatus
from sales.domain.model.value_objects import DEFAULT_CURRENCY, Money
from sales.domain.repository.sale_repository import SaleRepository

logger = logging.getLogger(__name__)


class JsonSaleRepository(SaleRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- SaleRepository interface ---------------------------------------------

    def get_by_id(self, sale_id: UUID) -> Sale | None:
        for raw in self._load_raw():
            if raw["id"] == str(sale_id):
                logger.debug("Loaded sale %s", sale_id)
                return self._to_domain(raw)
        return None

    def create(self, sale: Sale) -> Sale:
        sales = self._load_raw()
        for raw in sales:
            if raw["sale_number"] == sale.sale_number:
                raise DuplicateSaleNumberError(
                    f"Sale number {sale.sale_number} is already in use"
                )
            if raw["id"] == str(sale.id):
                raise InvalidOperationError(f"Sale {sale.id} already exists")

        record = self._to_raw(sale)
        sales.append(record)
        self._persist_raw(sales)
        logger.debug("Created sale %s", sale.id)
        return self._to_domain(record)

    def update(self, sale: Sale) -> Sale:
        sales = self._load_raw()
        for i, raw in enumerate(sales):
            if raw["id"] == str(sale.id):
                record = self._to_raw(sale)
                sales[i] = record
                self._persist_raw(sales)
                logger.debug("Updated sale %s", sale.id)
                return self._to_domain(record)
        raise EntityNotFoundError(sale_not_found(sale.id))

    def delete(self, sale_id: UUID) -> bool:
        sales = self._load_raw()
        remaining = [raw for raw in sales if raw["id"] != str(sale_id)]
        if len(remaining) == len(sales):
            return False
        self._persist_raw(remaining)
        logger.debug("Deleted sale %s", sale_id)
        return True

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(sale: Sale) -> dict:
        return {
            "id": str(sale.id),
            "sale_number": sale.sale_number,
            "sale_date": sale.sale_date.isoformat(),
            "customer_id": str(sale.customer_id),
            "customer_name": sale.customer_name,
            "branch_id": str(sale.branch_id),
            "branch_name": sale.branch_name,
            "currency": sale.currency,
            "total_amount": str(sale.total_amount.amount),
            "status": sale.status.value,
            "created_at": sale.created_at.isoformat(),
            "updated_at": sale.updated_at.isoformat() if sale.updated_at else None,
            "items": [
                {
                    "id": str(item.id),
                    "sale_id": str(item.sale_id) if item.sale_id else None,
                    "product_id": str(item.product_id),
                    "product_name": item.product_name,
                    "unit_price": str(item.unit_price.amount),
                    "quantity": item.quantity,
                    "discount_percentage": item.discount_percentage,
                    "discount_amount": str(item.discount_amount.amount),
                    "total_amount": str(item.total_amount.amount),
                    "is_cancelled": item.is_cancelled,
                }
                for item in sale.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Sale:
        currency = raw.get("currency", DEFAULT_CURRENCY)

        def money(value: str) -> Money:
            return Money(Decimal(value), currency)

        items = [
            SaleItem(
                id=UUID(i["id"]),
                sale_id=UUID(i["sale_id"]) if i.get("sale_id") else None,
                product_id=UUID(i["product_id"]),
                product_name=i["product_name"],
                unit_price=money(i["unit_price"]),
                quantity=i["quantity"],
                discount_percentage=i["discount_percentage"],
                discount_amount=money(i["discount_amount"]),
                total_amount=money(i["total_amount"]),
                is_cancelled=i.get("is_cancelled", False),
            )
            for i in raw["items"]
        ]
        updated_at = raw.get("updated_at")
        return Sale(
            id=UUID(raw["id"]),
            sale_number=raw["sale_number"],
            sale_date=datetime.fromisoformat(raw["sale_date"]),
            customer_id=UUID(raw["customer_id"]),
            customer_name=raw["customer_name"],
            branch_id=UUID(raw["branch_id"]),
            branch_name=raw["branch_name"],
            currency=currency,
            total_amount=money(raw["total_amount"]),
            status=SaleStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(updated_at) if updated_at else None,
            items=items,
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, sales: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(sales, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
