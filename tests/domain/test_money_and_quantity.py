"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from llantera.domain.exceptions import ValidationError
from llantera.domain.model.value_objects import Money, Quantity, parse_price, to_decimal


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_default_currency(self):
        assert Money(Decimal("10.50")).currency == "MXN"

    def test_of_factory_avoids_float_noise(self):
        assert Money.of(0.1).amount == Decimal("0.1")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_multiply_by_int(self):
        assert (Money.of("1250") * 3).amount == Decimal("3750")

    def test_formatting(self):
        assert str(Money.of("1250")) == "$1,250.00"

    def test_currency_mismatch(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money.of("1") + Money(Decimal("1"), "USD")


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_positive(self):
        assert Quantity(4).value == 4

    @pytest.mark.parametrize("value", [0, -2])
    def test_non_positive_rejected(self, value):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(value)

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(True)


# ── Parsing ──────────────────────────────────────────────────────────────────


class TestParsing:

    @pytest.mark.parametrize("raw,expected", [
        ("$1,250.00", Decimal("1250.00")),
        (" 99.5 ", Decimal("99.5")),
        ("", Decimal("0")),
        ("-", Decimal("0")),
        ("N/A", Decimal("0")),
    ])
    def test_parse_price(self, raw, expected):
        assert parse_price(raw) == expected

    def test_to_decimal_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid amount"):
            to_decimal("doce")
