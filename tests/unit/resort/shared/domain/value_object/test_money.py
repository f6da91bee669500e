from decimal import Decimal

import pytest

from resort.shared.domain import Currency, Money


class TestMoney:
    def test_add_same_currency(self):
        result = Money.usd(Decimal("100")).add(Money.usd(Decimal("50.50")))
        assert result == Money.usd(Decimal("150.50"))

    def test_add_different_currency_raises_error(self):
        with pytest.raises(ValueError, match="different currencies"):
            Money.usd(Decimal("100")).add(Money(Decimal("100"), Currency("JPY")))

    def test_multiply_by_nights(self):
        assert Money.usd(Decimal("250")).multiply(3) == Money.usd(Decimal("750"))

    def test_zero(self):
        assert Money.zero(Currency.usd()).amount == Decimal("0")

    def test_negative_amount_raises_error(self):
        with pytest.raises(ValueError, match="Amount cannot be negative"):
            Money.usd(Decimal("-1"))

    def test_str(self):
        assert str(Money.usd(Decimal("10"))) == "10 USD"


class TestCurrency:
    def test_code_is_normalized_to_upper_case(self):
        assert Currency("eur").code == "EUR"

    def test_unsupported_currency_raises_error(self):
        with pytest.raises(ValueError, match="Unsupported currency"):
            Currency("GBP")
