class PricingError(Exception):
    pass


class PricingValidationError(PricingError):
    pass


class InvalidAmountError(PricingValidationError):
    pass


class InvalidCurrencyError(PricingValidationError):
    pass


class InvalidProductNameError(PricingValidationError):
    pass


class InvalidQuantityError(PricingValidationError):
    pass


class InvalidDiscountRangeError(PricingValidationError):
    pass


class MissingBasePriceError(PricingValidationError):
    pass


class CurrencyMismatchError(PricingError):
    pass


class MoneyDivisionByZeroError(PricingError, ZeroDivisionError):
    pass
