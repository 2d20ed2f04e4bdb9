from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from pydantic import BaseModel, Field

from src.core.pricing.errors import (
    InvalidDiscountRangeError,
    InvalidProductNameError,
    InvalidQuantityError,
    MissingBasePriceError,
)
from src.core.pricing.money import Money, MoneyPayload

_HUNDRED = Decimal("100")


class DiscountRequestItemPayload(BaseModel):
    product_id: str = Field(description="Product identifier.", examples=["prd_widget"])
    product_name: str = Field(
        description="Product name snapshot taken when the item was built.",
        examples=["Widget"],
    )
    quantity: int = Field(description="Requested quantity.", examples=[3])
    discount_percentage: Decimal = Field(
        description="Requested discount percentage between 0 and 100.",
        examples=["20"],
    )
    unit_base_price: MoneyPayload = Field(description="Unit list price.")
    unit_final_price: MoneyPayload = Field(description="Unit price after discount.")
    total_base_price: MoneyPayload = Field(description="Unit list price times quantity.")
    total_final_price: MoneyPayload = Field(description="Unit final price times quantity.")
    total_discount_amount: MoneyPayload = Field(
        description="Total base price minus total final price."
    )


@dataclass(frozen=True, eq=False)
class DiscountRequestItem:
    """A discounted line item.

    The unit final price is always derived from the base price and the
    discount percentage. Identity is (product_id, quantity,
    discount_percentage): the price fields follow from those, so they are
    left out of equality and hashing.
    """

    product_id: str
    product_name: str
    quantity: int
    unit_base_price: Money
    discount_percentage: Decimal
    unit_final_price: Money

    def __init__(
        self,
        product_id: str,
        product_name: str,
        quantity: int,
        unit_base_price: Optional[Money],
        discount_percentage: Union[Decimal, int, float, str],
    ) -> None:
        _validate_product_name(product_name)
        _validate_quantity(quantity)
        percentage = _validate_discount_percentage(discount_percentage)
        if unit_base_price is None:
            raise MissingBasePriceError("Unit base price is required")

        object.__setattr__(self, "product_id", product_id)
        object.__setattr__(self, "product_name", product_name)
        object.__setattr__(self, "quantity", quantity)
        object.__setattr__(self, "unit_base_price", unit_base_price)
        object.__setattr__(self, "discount_percentage", percentage)
        object.__setattr__(
            self, "unit_final_price", calculate_final_price(unit_base_price, percentage)
        )

    @classmethod
    def hydrate(
        cls,
        *,
        product_id: str,
        product_name: str,
        quantity: int,
        unit_base_price: Money,
        discount_percentage: Decimal,
        unit_final_price: Money,
    ) -> "DiscountRequestItem":
        """Rebuild a stored item as persisted, skipping validation."""
        item = object.__new__(cls)
        object.__setattr__(item, "product_id", product_id)
        object.__setattr__(item, "product_name", product_name)
        object.__setattr__(item, "quantity", quantity)
        object.__setattr__(item, "unit_base_price", unit_base_price)
        object.__setattr__(item, "discount_percentage", discount_percentage)
        object.__setattr__(item, "unit_final_price", unit_final_price)
        return item

    def total_base_price(self) -> Money:
        return self.unit_base_price * self.quantity

    def total_final_price(self) -> Money:
        return self.unit_final_price * self.quantity

    def total_discount_amount(self) -> Money:
        return self.total_base_price() - self.total_final_price()

    def with_discount_percentage(
        self, discount_percentage: Union[Decimal, int, float, str]
    ) -> "DiscountRequestItem":
        return DiscountRequestItem(
            self.product_id,
            self.product_name,
            self.quantity,
            self.unit_base_price,
            discount_percentage,
        )

    def with_quantity(self, quantity: int) -> "DiscountRequestItem":
        return DiscountRequestItem(
            self.product_id,
            self.product_name,
            quantity,
            self.unit_base_price,
            self.discount_percentage,
        )

    def to_payload(self) -> DiscountRequestItemPayload:
        return DiscountRequestItemPayload(
            product_id=self.product_id,
            product_name=self.product_name,
            quantity=self.quantity,
            discount_percentage=self.discount_percentage,
            unit_base_price=self.unit_base_price.to_payload(),
            unit_final_price=self.unit_final_price.to_payload(),
            total_base_price=self.total_base_price().to_payload(),
            total_final_price=self.total_final_price().to_payload(),
            total_discount_amount=self.total_discount_amount().to_payload(),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DiscountRequestItem):
            return NotImplemented
        return (
            self.product_id == other.product_id
            and self.quantity == other.quantity
            and self.discount_percentage == other.discount_percentage
        )

    def __hash__(self) -> int:
        return hash((self.product_id, self.quantity, self.discount_percentage))

    def __str__(self) -> str:
        return (
            f"{self.product_name} - Qty: {self.quantity}, "
            f"Discount: {self.discount_percentage:.2f}%"
        )


def calculate_final_price(base_price: Money, discount_percentage: Decimal) -> Money:
    return base_price * (Decimal("1") - discount_percentage / _HUNDRED)


def validate_discount_percentage(value: Union[Decimal, int, float, str]) -> Decimal:
    return _validate_discount_percentage(value)


def _validate_product_name(product_name: object) -> None:
    if not isinstance(product_name, str) or not product_name.strip():
        raise InvalidProductNameError("Product name cannot be empty")


def _validate_quantity(quantity: object) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidQuantityError("Quantity must be a whole number")
    if quantity <= 0:
        raise InvalidQuantityError("Quantity must be greater than zero")


def _validate_discount_percentage(value: object) -> Decimal:
    if isinstance(value, bool):
        raise InvalidDiscountRangeError("Discount percentage must be numeric")
    try:
        percentage = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise InvalidDiscountRangeError("Discount percentage must be numeric") from exc
    if not percentage.is_finite() or percentage < 0 or percentage > _HUNDRED:
        raise InvalidDiscountRangeError("Discount percentage must be between 0 and 100")
    return percentage
