"""In-memory fakes for testing.

These implement the same abstract interfaces as the JSON repository but
keep everything in a dict. No file I/O, no side effects.

The repository stores deep copies, like a real store: mutating a loaded
sale changes nothing until ``update`` is called.  Call counters let
tests assert that validation happens before any repository access.
"""

from __future__ import annotations

import copy
from collections import Counter
from uuid import UUID

from sales.domain.exceptions import DuplicateSaleNumberError, EntityNotFoundError
from sales.domain.model.sale import Sale
from sales.domain.repository.sale_repository import SaleRepository
from sales.domain.service.sale_number_generator import SaleNumberGenerator


class FakeSaleRepository(SaleRepository):

    def __init__(self, sales: list[Sale] | None = None) -> None:
        self._store: dict[UUID, Sale] = {}
        self.calls: Counter[str] = Counter()
        for sale in sales or []:
            self._store[sale.id] = copy.deepcopy(sale)

    def get_by_id(self, sale_id: UUID) -> Sale | None:
        self.calls["get_by_id"] += 1
        sale = self._store.get(sale_id)
        return copy.deepcopy(sale) if sale is not None else None

    def create(self, sale: Sale) -> Sale:
        self.calls["create"] += 1
        if any(s.sale_number == sale.sale_number for s in self._store.values()):
            raise DuplicateSaleNumberError(
                f"Sale number {sale.sale_number} is already in use"
            )
        self._store[sale.id] = copy.deepcopy(sale)
        return copy.deepcopy(sale)

    def update(self, sale: Sale) -> Sale:
        self.calls["update"] += 1
        if sale.id not in self._store:
            raise EntityNotFoundError(f"Sale with ID {sale.id} not found")
        self._store[sale.id] = copy.deepcopy(sale)
        return copy.deepcopy(sale)

    def delete(self, sale_id: UUID) -> bool:
        self.calls["delete"] += 1
        return self._store.pop(sale_id, None) is not None

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())


class FixedSaleNumberGenerator(SaleNumberGenerator):
    """Hands out the given numbers in order."""

    def __init__(self, *numbers: int) -> None:
        self._numbers = list(numbers)

    def next_number(self) -> int:
        return self._numbers.pop(0)
