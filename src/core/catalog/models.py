from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from src.core.pricing.discount_items import calculate_final_price, validate_discount_percentage
from src.core.pricing.money import Money, MoneyPayload
from src.core.tenancy.models import TenantInfo

ProductStatus = Literal["ACTIVE", "INACTIVE", "DISCONTINUED"]
CustomerStatus = Literal["ACTIVE", "INACTIVE", "BLOCKED", "PROSPECT"]
CustomerClassification = Literal["A", "B", "C", "UNCLASSIFIED"]

# Margin points lost per discount point in the catalog-level estimate.
_MARGIN_REDUCTION_FACTOR = Decimal("0.5")


class ProductRecord(BaseModel):
    product_id: str = Field(description="Internal product identifier.", examples=["prd_001"])
    company_id: str = Field(description="Owning company identifier.", examples=["cmp_acme"])
    name: str = Field(
        min_length=2, max_length=200, description="Internal product name.", examples=["Widget"]
    )
    category: Optional[str] = Field(
        default=None, description="Internal category.", examples=["Hardware"]
    )
    sku: Optional[str] = Field(default=None, description="Internal SKU.", examples=["WID-001"])
    base_price_amount: Decimal = Field(
        ge=0, description="Internal list price amount column.", examples=["10.00"]
    )
    base_price_currency: str = Field(
        min_length=3, max_length=3, description="Internal list price currency column."
    )
    base_margin_percentage: Decimal = Field(
        ge=0, le=100, description="Internal base margin percentage.", examples=["35"]
    )
    status: ProductStatus = Field(default="ACTIVE", description="Internal product status.")
    additional_info: Optional[str] = Field(default=None, description="Internal free-form notes.")
    created_at: datetime = Field(description="Internal creation timestamp.")
    updated_at: Optional[datetime] = Field(default=None, description="Internal update timestamp.")

    def base_price(self) -> Money:
        return Money.hydrate(amount=self.base_price_amount, currency=self.base_price_currency)

    def is_active(self) -> bool:
        return self.status == "ACTIVE"

    def can_be_included_in_discount_requests(self) -> bool:
        return self.status == "ACTIVE"

    def price_after_discount(self, discount_percentage: Decimal) -> Money:
        percentage = validate_discount_percentage(discount_percentage)
        return calculate_final_price(self.base_price(), percentage)

    def margin_after_discount(self, discount_percentage: Decimal) -> Decimal:
        percentage = validate_discount_percentage(discount_percentage)
        estimated = self.base_margin_percentage - percentage * _MARGIN_REDUCTION_FACTOR
        return max(Decimal("0"), estimated)


class CustomerRecord(BaseModel):
    customer_id: str = Field(description="Internal customer identifier.", examples=["cus_001"])
    company_id: str = Field(description="Owning company identifier.", examples=["cmp_acme"])
    name: str = Field(min_length=1, description="Internal customer name.", examples=["Globex"])
    segment: Optional[str] = Field(default=None, description="Internal segment.")
    classification: CustomerClassification = Field(
        default="UNCLASSIFIED", description="Internal ABC classification."
    )
    status: CustomerStatus = Field(default="PROSPECT", description="Internal customer status.")
    external_system_id: Optional[str] = Field(
        default=None, description="Internal identifier in the source CRM/ERP."
    )
    additional_info: Optional[str] = Field(default=None, description="Internal free-form notes.")
    created_at: datetime = Field(description="Internal creation timestamp.")
    updated_at: Optional[datetime] = Field(default=None, description="Internal update timestamp.")

    def is_active(self) -> bool:
        return self.status == "ACTIVE"


class ProductSummary(BaseModel):
    id: str = Field(description="Product identifier.", examples=["prd_001"])
    name: str = Field(description="Product name.", examples=["Widget"])
    category: Optional[str] = Field(default=None, description="Category.", examples=["Hardware"])
    sku: Optional[str] = Field(default=None, description="SKU.", examples=["WID-001"])
    base_price: MoneyPayload = Field(description="List price.")
    base_margin_percentage: Decimal = Field(description="Base margin.", examples=["35"])
    status: ProductStatus = Field(description="Product status.", examples=["ACTIVE"])


class ProductDetail(ProductSummary):
    additional_info: Optional[str] = Field(default=None, description="Free-form notes.")
    created_at: datetime = Field(description="Creation timestamp.")
    updated_at: Optional[datetime] = Field(default=None, description="Last update timestamp.")


class ProductListResponse(BaseModel):
    tenant_info: TenantInfo = Field(description="Caller tenant the list is scoped to.")
    items: List[ProductSummary] = Field(description="Products owned by the caller company.")
    total_count: int = Field(description="Number of returned products.", examples=[2])


class ProductDetailResponse(BaseModel):
    tenant_info: TenantInfo = Field(description="Caller tenant the lookup is scoped to.")
    product: ProductDetail = Field(description="Product owned by the caller company.")


class CustomerSummary(BaseModel):
    id: str = Field(description="Customer identifier.", examples=["cus_001"])
    name: str = Field(description="Customer name.", examples=["Globex"])
    segment: Optional[str] = Field(default=None, description="Segment.", examples=["Enterprise"])
    classification: CustomerClassification = Field(description="ABC classification.")
    status: CustomerStatus = Field(description="Customer status.", examples=["ACTIVE"])
    created_at: datetime = Field(description="Creation timestamp.")


class CustomerDetail(CustomerSummary):
    external_system_id: Optional[str] = Field(default=None, description="Source system id.")
    additional_info: Optional[str] = Field(default=None, description="Free-form notes.")
    updated_at: Optional[datetime] = Field(default=None, description="Last update timestamp.")


class CustomerListResponse(BaseModel):
    tenant_info: TenantInfo = Field(description="Caller tenant the list is scoped to.")
    items: List[CustomerSummary] = Field(description="Customers owned by the caller company.")
    total_count: int = Field(description="Number of returned customers.", examples=[1])


class CustomerDetailResponse(BaseModel):
    tenant_info: TenantInfo = Field(description="Caller tenant the lookup is scoped to.")
    customer: CustomerDetail = Field(description="Customer owned by the caller company.")
