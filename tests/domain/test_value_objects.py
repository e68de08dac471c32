"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from sales.domain.exceptions import InvalidArgumentError
from sales.domain.model.value_objects import Money


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "USD"

    def test_of_factory_from_string(self):
        assert Money.of("25.99").amount == Decimal("25.99")

    def test_of_factory_rejects_garbage(self):
        with pytest.raises(InvalidArgumentError, match="Invalid money amount"):
            Money.of("abc")

    def test_negative_amount_rejected(self):
        with pytest.raises(InvalidArgumentError, match="cannot be negative"):
            Money.of("-1")

    @pytest.mark.parametrize("raw", ["NaN", "sNaN", "Infinity", "-Infinity"])
    def test_non_finite_amount_rejected(self, raw):
        with pytest.raises(InvalidArgumentError, match="must be finite"):
            Money(Decimal(raw))

    def test_float_amount_rejected(self):
        with pytest.raises(InvalidArgumentError, match="must be a Decimal"):
            Money(10.5)  # type: ignore[arg-type]

    def test_addition(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_subtraction_going_negative_rejected(self):
        with pytest.raises(InvalidArgumentError, match="negative amount"):
            Money.of("5") - Money.of("10")

    def test_multiplication_by_int(self):
        assert Money.of("7.50") * 3 == Money.of("22.50")

    def test_percent(self):
        assert Money.of("99.90").percent(20) == Money.of("19.98")
        assert Money.of("40").percent(0).is_zero

    def test_zero(self):
        assert Money.zero().is_zero
        assert Money.zero("EUR").currency == "EUR"

    def test_currency_mismatch_rejected(self):
        with pytest.raises(InvalidArgumentError, match="Cannot combine"):
            Money(Decimal("10"), "USD") + Money(Decimal("5"), "EUR")

    def test_str_formatting(self):
        assert str(Money.of("15")) == "$15.00"
        assert str(Money.of("9.5")) == "$9.50"
