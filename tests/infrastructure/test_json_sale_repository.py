"""Tests for the JSON-file-backed sale repository, using pytest's tmp_path."""

import json
from decimal import Decimal
from uuid import uuid4

import pytest

from sales.domain.exceptions import (
    DuplicateSaleNumberError,
    EntityNotFoundError,
    InvalidOperationError,
)
from sales.domain.model.sale import Sale, SaleItem, SaleStatus
from sales.infrastructure.persistence.json_sale_repository import JsonSaleRepository


def _make_sale(sale_number: int = 1_000_000_010) -> Sale:
    sale = Sale.create(
        sale_number=sale_number,
        customer_id=uuid4(),
        customer_name="Alice",
        branch_id=uuid4(),
        branch_name="Downtown",
    )
    sale.add_item(SaleItem.create(uuid4(), "Widget", Decimal("9.99"), 10))
    sale.add_item(SaleItem.create(uuid4(), "Gadget", Decimal("2.50"), 2))
    return sale


@pytest.fixture
def repo(tmp_path) -> JsonSaleRepository:
    return JsonSaleRepository(tmp_path / "data" / "sales.json")


class TestJsonSaleRepository:

    def test_creates_file_on_first_use(self, tmp_path):
        path = tmp_path / "nested" / "sales.json"
        JsonSaleRepository(path)
        assert json.loads(path.read_text()) == []

    def test_round_trip_preserves_amounts_and_discounts(self, repo):
        sale = _make_sale()
        repo.create(sale)

        loaded = repo.get_by_id(sale.id)

        assert loaded is not None
        assert loaded.sale_number == sale.sale_number
        assert loaded.total_amount == sale.total_amount
        widget = loaded.items[0]
        assert widget.discount_percentage == 20
        assert widget.total_amount.amount == Decimal("79.92")
        assert widget.sale_id == sale.id
        assert loaded.status is SaleStatus.CONFIRMED

    def test_round_trip_preserves_cancellation(self, repo):
        sale = _make_sale()
        repo.create(sale)
        sale.cancel()
        repo.update(sale)

        loaded = repo.get_by_id(sale.id)

        assert loaded.is_cancelled
        assert all(item.is_cancelled for item in loaded.items)
        assert loaded.total_amount.is_zero
        assert loaded.updated_at is not None

    def test_unknown_id_returns_none(self, repo):
        assert repo.get_by_id(uuid4()) is None

    def test_duplicate_sale_number_rejected(self, repo):
        repo.create(_make_sale(1_234_567_890))
        with pytest.raises(DuplicateSaleNumberError):
            repo.create(_make_sale(1_234_567_890))

    def test_duplicate_id_rejected(self, repo):
        sale = _make_sale(1_000_000_011)
        repo.create(sale)
        sale.sale_number = 1_000_000_012
        with pytest.raises(InvalidOperationError):
            repo.create(sale)

    def test_mutation_invisible_until_update(self, repo):
        sale = _make_sale()
        repo.create(sale)

        loaded = repo.get_by_id(sale.id)
        loaded.remove_item(loaded.items[0].product_id)

        assert repo.get_by_id(sale.id).item_count == 2
        repo.update(loaded)
        assert repo.get_by_id(sale.id).item_count == 1

    def test_update_missing_sale_rejected(self, repo):
        with pytest.raises(EntityNotFoundError):
            repo.update(_make_sale())

    def test_delete_reports_whether_sale_existed(self, repo):
        sale = _make_sale()
        repo.create(sale)

        assert repo.delete(sale.id) is True
        assert repo.get_by_id(sale.id) is None
        assert repo.delete(sale.id) is False
