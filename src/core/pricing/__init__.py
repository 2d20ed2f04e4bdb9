from src.core.pricing.discount_items import DiscountRequestItem, DiscountRequestItemPayload
from src.core.pricing.errors import (
    CurrencyMismatchError,
    InvalidAmountError,
    InvalidCurrencyError,
    InvalidDiscountRangeError,
    InvalidProductNameError,
    InvalidQuantityError,
    MissingBasePriceError,
    MoneyDivisionByZeroError,
    PricingError,
    PricingValidationError,
)
from src.core.pricing.money import Money, MoneyPayload

__all__ = [
    "CurrencyMismatchError",
    "DiscountRequestItem",
    "DiscountRequestItemPayload",
    "InvalidAmountError",
    "InvalidCurrencyError",
    "InvalidDiscountRangeError",
    "InvalidProductNameError",
    "InvalidQuantityError",
    "MissingBasePriceError",
    "Money",
    "MoneyDivisionByZeroError",
    "MoneyPayload",
    "PricingError",
    "PricingValidationError",
]
