from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from pydantic import BaseModel, Field

from src.core.pricing.errors import (
    CurrencyMismatchError,
    InvalidAmountError,
    InvalidCurrencyError,
    MoneyDivisionByZeroError,
)

Numeric = Union[Decimal, int, float, str]

DEFAULT_CURRENCY = "USD"
_CENT = Decimal("0.01")


class MoneyPayload(BaseModel):
    amount: Decimal = Field(
        description="Monetary amount rounded to 2 decimal places.",
        examples=["1000.50"],
    )
    currency: str = Field(
        description="ISO 4217 currency code in upper case.",
        examples=["USD"],
    )


@dataclass(frozen=True)
class Money:
    """Immutable currency-tagged amount with a fixed scale of 2.

    Arithmetic between two values requires the same currency. Every operation
    returns a new instance and re-applies the construction rules, so a
    subtraction that would go below zero fails the same way a negative
    literal does.
    """

    amount: Decimal
    currency: str

    def __init__(self, amount: Numeric, currency: str = DEFAULT_CURRENCY) -> None:
        object.__setattr__(self, "amount", _quantize(_to_decimal(amount)))
        object.__setattr__(self, "currency", _normalize_currency(currency))

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> "Money":
        return cls(Decimal("0"), currency)

    @classmethod
    def hydrate(cls, *, amount: Decimal, currency: str) -> "Money":
        """Rebuild a stored value without re-running validation."""
        money = object.__new__(cls)
        object.__setattr__(money, "amount", amount)
        object.__setattr__(money, "currency", currency)
        return money

    @classmethod
    def from_payload(cls, payload: MoneyPayload) -> "Money":
        return cls(payload.amount, payload.currency)

    def to_payload(self) -> MoneyPayload:
        return MoneyPayload(amount=self.amount, currency=self.currency)

    def __add__(self, other: object) -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        self._require_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: object) -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        self._require_same_currency(other)
        return Money(self.amount - other.amount, self.currency)

    def __mul__(self, multiplier: object) -> "Money":
        if isinstance(multiplier, Money) or not _is_scalar(multiplier):
            return NotImplemented
        return Money(self.amount * _to_decimal(multiplier), self.currency)

    __rmul__ = __mul__

    def __truediv__(self, divisor: object) -> "Money":
        if isinstance(divisor, Money) or not _is_scalar(divisor):
            return NotImplemented
        value = _to_decimal(divisor, allow_negative=True)
        if value == 0:
            raise MoneyDivisionByZeroError("Cannot divide money by zero")
        return Money(self.amount / value, self.currency)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._require_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._require_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._require_same_currency(other)
        return self.amount > other.amount

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._require_same_currency(other)
        return self.amount >= other.amount

    def __str__(self) -> str:
        return f"{self.currency} {self.amount:,.2f}"

    def _require_same_currency(self, other: "Money") -> None:
        if self.currency != other.currency:
            raise CurrencyMismatchError(
                f"Cannot operate on different currencies: {self.currency} and {other.currency}"
            )


def _is_scalar(value: object) -> bool:
    return isinstance(value, (Decimal, int, float)) and not isinstance(value, bool)


def _to_decimal(value: object, *, allow_negative: bool = False) -> Decimal:
    if isinstance(value, bool):
        raise InvalidAmountError("Money amount must be numeric")
    if isinstance(value, Decimal):
        decimal_value = value
    elif isinstance(value, int):
        decimal_value = Decimal(value)
    elif isinstance(value, float):
        # str() keeps the shortest repr, so 100.005 stays 100.005 instead of 100.00499...
        decimal_value = Decimal(str(value))
    elif isinstance(value, str):
        try:
            decimal_value = Decimal(value.strip())
        except InvalidOperation as exc:
            raise InvalidAmountError(f"Money amount is not a number: {value!r}") from exc
    else:
        raise InvalidAmountError("Money amount must be numeric")

    if not decimal_value.is_finite():
        raise InvalidAmountError("Money amount must be finite")
    if not allow_negative and decimal_value < 0:
        raise InvalidAmountError("Money value cannot be negative")
    return decimal_value


def _quantize(value: Decimal) -> Decimal:
    try:
        return value.quantize(_CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise InvalidAmountError("Money amount exceeds supported precision") from exc


def _normalize_currency(currency: object) -> str:
    if not isinstance(currency, str) or not currency.strip():
        raise InvalidCurrencyError("Currency cannot be empty")
    normalized = currency.strip()
    if len(normalized) != 3 or not (normalized.isascii() and normalized.isalpha()):
        raise InvalidCurrencyError(
            "Currency must be a 3-letter code (e.g., USD, BRL, EUR)"
        )
    return normalized.upper()
