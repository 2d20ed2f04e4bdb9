from decimal import Decimal

import pytest

from src.core.pricing import (
    CurrencyMismatchError,
    InvalidAmountError,
    InvalidCurrencyError,
    Money,
    MoneyDivisionByZeroError,
    MoneyPayload,
    PricingValidationError,
)
from tests.factories import usd


def test_money_rounds_half_up_and_normalizes_currency():
    money = Money(100.005, "usd")

    assert money.amount == Decimal("100.01")
    assert money.currency == "USD"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("0.004", "0.00"),
        ("0.005", "0.01"),
        ("2.675", "2.68"),
        (10, "10.00"),
        (Decimal("1.1"), "1.10"),
    ],
)
def test_money_amount_always_has_scale_two(raw, expected):
    amount = Money(raw).amount

    assert amount == Decimal(expected)
    assert amount.as_tuple().exponent == -2


def test_money_defaults_to_usd():
    assert Money("5").currency == "USD"
    assert Money.zero().amount == Decimal("0.00")
    assert Money.zero("eur").currency == "EUR"


@pytest.mark.parametrize("amount", ["-0.01", -1, "nan", "Infinity", "abc", None, True])
def test_money_rejects_invalid_amounts(amount):
    with pytest.raises(InvalidAmountError):
        Money(amount)


def test_money_rejects_amounts_beyond_decimal_precision():
    with pytest.raises(InvalidAmountError, match="exceeds supported precision"):
        Money(Decimal("1e27"))
    with pytest.raises(PricingValidationError):
        usd("1000.00") * 10**27


@pytest.mark.parametrize("currency", ["", "   ", "US", "USDX", "U5D", None])
def test_money_rejects_invalid_currency(currency):
    with pytest.raises(InvalidCurrencyError):
        Money("1", currency)


def test_money_validation_errors_share_pricing_base():
    with pytest.raises(PricingValidationError):
        Money("-5")


def test_money_add_and_subtract_same_currency():
    assert usd("10.50") + usd("0.25") == usd("10.75")
    assert usd("10.50") - usd("0.50") == usd("10.00")


def test_money_subtraction_below_zero_is_rejected():
    with pytest.raises(InvalidAmountError, match="cannot be negative"):
        usd("1.00") - usd("2.00")


def test_money_arithmetic_rejects_currency_mismatch():
    with pytest.raises(CurrencyMismatchError, match="USD and EUR"):
        usd("1") + Money("1", "EUR")
    with pytest.raises(CurrencyMismatchError):
        usd("1") - Money("1", "EUR")
    with pytest.raises(CurrencyMismatchError):
        _ = usd("1") < Money("1", "EUR")


def test_money_scalar_multiplication_and_division():
    assert usd("10.00") * 3 == usd("30.00")
    assert 3 * usd("10.00") == usd("30.00")
    assert usd("10.00") * Decimal("0.333") == usd("3.33")
    assert usd("10.00") / 3 == usd("3.33")
    assert usd("10.00") / Decimal("4") == usd("2.50")


def test_money_division_by_zero_is_distinct_error():
    with pytest.raises(MoneyDivisionByZeroError):
        usd("10") / 0
    with pytest.raises(ZeroDivisionError):
        usd("10") / Decimal("0")


def test_money_multiplication_by_money_is_unsupported():
    with pytest.raises(TypeError):
        usd("1") * usd("2")


def test_money_ordering_within_currency():
    assert usd("1.00") < usd("2.00")
    assert usd("2.00") <= usd("2.00")
    assert usd("3.00") > usd("2.00")
    assert usd("2.00") >= usd("2.00")
    assert sorted([usd("3"), usd("1"), usd("2")]) == [usd("1"), usd("2"), usd("3")]


def test_money_value_equality_and_hash():
    assert Money("1.5", "usd") == Money("1.50", "USD")
    assert Money("1.5", "USD") != Money("1.5", "EUR")
    assert len({Money("1.5"), Money("1.50")}) == 1


def test_money_is_immutable():
    money = usd("1")
    with pytest.raises(AttributeError):
        money.amount = Decimal("2")


def test_money_string_uses_grouping_and_two_decimals():
    assert str(Money("1234.5", "USD")) == "USD 1,234.50"
    assert str(Money("0", "BRL")) == "BRL 0.00"


def test_money_payload_conversion():
    payload = Money("99.999", "eur").to_payload()

    assert payload == MoneyPayload(amount=Decimal("100.00"), currency="EUR")
    assert Money.from_payload(MoneyPayload(amount=Decimal("5"), currency="gbp")) == Money(
        "5", "GBP"
    )


def test_money_hydrate_skips_validation_for_stored_values():
    stored = Money.hydrate(amount=Decimal("12.30"), currency="USD")

    assert stored == usd("12.30")
    assert stored.amount.as_tuple().exponent == -2
