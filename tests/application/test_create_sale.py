"""Integration tests for the CreateSale use case.

Uses in-memory fake repositories, no file I/O.
"""

from decimal import Decimal
from uuid import uuid4

import pytest

from sales.application.create_sale import CreateSaleHandler
from sales.application.dto import CreateSaleCommand, SaleItemSpec
from sales.domain.constraints import MAX_QUANTITY_EXCEEDED
from sales.domain.exceptions import (
    DuplicateSaleNumberError,
    InvalidOperationError,
    ValidationError,
)
from sales.domain.model.sale import Sale
from sales.domain.service.sale_number_generator import SequentialSaleNumberGenerator
from tests.fakes import FakeSaleRepository, FixedSaleNumberGenerator

P1 = uuid4()
P2 = uuid4()


def _setup(
    sale_numbers=None,
) -> tuple[CreateSaleHandler, FakeSaleRepository]:
    sale_repo = FakeSaleRepository()
    handler = CreateSaleHandler(
        sale_repo, sale_numbers or SequentialSaleNumberGenerator()
    )
    return handler, sale_repo


def _command(*items: SaleItemSpec, **overrides) -> CreateSaleCommand:
    fields = dict(
        customer_id=uuid4(),
        customer_name="Alice",
        branch_id=uuid4(),
        branch_name="Downtown",
        items=list(items) or [SaleItemSpec(P1, "Widget", Decimal("9.99"), 10)],
    )
    fields.update(overrides)
    return CreateSaleCommand(**fields)


class TestCreateSaleHappyPath:

    def test_applies_discount_and_totals(self):
        handler, _ = _setup()
        dto = handler.handle(_command())

        assert dto.status == "Confirmed"
        assert len(dto.items) == 1
        item = dto.items[0]
        assert item.discount_percentage == 20
        assert item.total_amount == Decimal("79.92")
        assert dto.total_amount == Decimal("79.92")

    def test_persists_sale(self):
        handler, sale_repo = _setup()
        dto = handler.handle(_command())

        saved = sale_repo.get_by_id(dto.id)
        assert saved is not None
        assert saved.customer_name == "Alice"
        assert saved.items[0].sale_id == dto.id
        assert sale_repo.calls["create"] == 1

    def test_uses_injected_sale_number(self):
        handler, _ = _setup(SequentialSaleNumberGenerator(start=5_000_000_000))
        first = handler.handle(_command())
        second = handler.handle(_command())
        assert first.sale_number == 5_000_000_000
        assert second.sale_number == 5_000_000_001

    def test_duplicate_product_lines_merge(self):
        handler, _ = _setup()
        dto = handler.handle(_command(
            SaleItemSpec(P1, "Widget", Decimal("10.00"), 2),
            SaleItemSpec(P1, "Widget", Decimal("10.00"), 3),
            SaleItemSpec(P2, "Gadget", Decimal("1.00"), 1),
        ))
        assert len(dto.items) == 2
        assert dto.items[0].quantity == 5
        assert dto.total_amount == Decimal("46")

    def test_names_are_trimmed(self):
        handler, _ = _setup()
        dto = handler.handle(_command(customer_name="  Alice  "))
        assert dto.customer_name == "Alice"


class TestCreateSaleNumberCollision:

    def test_retries_with_a_fresh_number(self):
        handler, sale_repo = _setup(
            FixedSaleNumberGenerator(1_111_111_111, 1_111_111_111, 2_222_222_222)
        )
        handler.handle(_command())
        dto = handler.handle(_command())

        assert dto.sale_number == 2_222_222_222
        assert sale_repo.calls["create"] == 3

    def test_gives_up_after_three_attempts(self):
        handler, sale_repo = _setup(FixedSaleNumberGenerator(*[1_111_111_111] * 4))
        handler.handle(_command())

        with pytest.raises(DuplicateSaleNumberError):
            handler.handle(_command())
        assert sale_repo.calls["create"] == 4


class TestCreateSaleValidation:

    def test_no_items_rejected_before_repository(self):
        handler, sale_repo = _setup()
        with pytest.raises(ValidationError, match="at least one item"):
            handler.handle(CreateSaleCommand(uuid4(), "Alice", uuid4(), "Downtown", []))
        assert sale_repo.total_calls == 0

    def test_collects_every_field_error(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError) as exc_info:
            handler.handle(_command(
                SaleItemSpec(None, "", Decimal("0"), 0),
                customer_id=None,
                branch_name="x" * 101,
            ))
        errors = exc_info.value.errors
        assert "Customer ID is required" in errors
        assert "Branch name must contain between 1 and 100 characters" in errors
        assert "items[0]: Product ID is required" in errors
        assert "items[0]: Product name is required" in errors
        assert "items[0]: Unit price must be greater than 0" in errors
        assert "items[0]: Quantity must be greater than 0" in errors

    def test_merged_lines_over_cap_rejected(self):
        handler, sale_repo = _setup()
        with pytest.raises(InvalidOperationError, match=MAX_QUANTITY_EXCEEDED):
            handler.handle(_command(
                SaleItemSpec(P1, "Widget", Decimal("1.00"), 15),
                SaleItemSpec(P1, "Widget", Decimal("1.00"), 6),
            ))
        assert sale_repo.calls["create"] == 0

    @pytest.mark.parametrize("price", ["NaN", "sNaN", "Infinity", "-Infinity"])
    def test_non_finite_price_rejected_before_repository(self, price):
        handler, sale_repo = _setup()
        with pytest.raises(ValidationError) as exc_info:
            handler.handle(_command(SaleItemSpec(P1, "Widget", Decimal(price), 3)))
        assert exc_info.value.errors == ["items[0]: Unit price must be greater than 0"]
        assert sale_repo.total_calls == 0
