"""Abstract repository for the Sale aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations live in the infrastructure
layer.  Every method works on the whole aggregate, items included.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from uuid import UUID

from sales.domain.model.sale import Sale


class SaleRepository(ABC):

    @abstractmethod
    def get_by_id(self, sale_id: UUID) -> Sale | None:
        """Return a sale with its items, or None if not found."""

    @abstractmethod
    def create(self, sale: Sale) -> Sale:
        """Persist a new sale.

        Raises DuplicateSaleNumberError if the sale number is taken.
        """

    @abstractmethod
    def update(self, sale: Sale) -> Sale:
        """Replace the stored state of an existing sale and its items."""

    @abstractmethod
    def delete(self, sale_id: UUID) -> bool:
        """Hard-delete a sale and its items.  False if nothing was stored."""
