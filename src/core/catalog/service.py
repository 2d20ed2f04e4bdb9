import logging
from typing import Optional

from src.core.catalog.models import (
    CustomerDetail,
    CustomerDetailResponse,
    CustomerListResponse,
    CustomerRecord,
    CustomerSummary,
    ProductDetail,
    ProductDetailResponse,
    ProductListResponse,
    ProductRecord,
    ProductSummary,
)
from src.core.catalog.repository import CustomerRepository, ProductRepository
from src.core.tenancy import (
    TenantContext,
    require_company_id,
    scope_entities,
    scope_entity,
    tenant_info,
)

logger = logging.getLogger(__name__)


class CatalogQueryService:
    def __init__(
        self,
        *,
        products: ProductRepository,
        customers: CustomerRepository,
    ) -> None:
        self._products = products
        self._customers = customers

    def list_products(
        self, *, context: TenantContext, category: Optional[str] = None
    ) -> ProductListResponse:
        company_id = require_company_id(context)
        logger.info(
            "Fetching products for company %s by user %s, category: %s",
            company_id,
            context.user_id,
            category or "all",
        )
        rows = scope_entities(
            self._products.list_products_by_company(company_id=company_id),
            company_id=company_id,
            attribute="category",
            value=category,
        )
        items = [_to_product_summary(row) for row in rows]
        return ProductListResponse(
            tenant_info=tenant_info(context),
            items=items,
            total_count=len(items),
        )

    def get_product(self, *, context: TenantContext, product_id: str) -> ProductDetailResponse:
        product = self.get_scoped_product(context=context, product_id=product_id)
        return ProductDetailResponse(
            tenant_info=tenant_info(context, include_requester=False),
            product=_to_product_detail(product),
        )

    def get_scoped_product(self, *, context: TenantContext, product_id: str) -> ProductRecord:
        company_id = require_company_id(context)
        return scope_entity(
            self._products.get_product(product_id=product_id),
            company_id=company_id,
            entity_label="product",
            entity_id=product_id,
        )

    def list_customers(
        self, *, context: TenantContext, segment: Optional[str] = None
    ) -> CustomerListResponse:
        company_id = require_company_id(context)
        logger.info(
            "Fetching customers for company %s by user %s, segment: %s",
            company_id,
            context.user_id,
            segment or "all",
        )
        rows = scope_entities(
            self._customers.list_customers_by_company(company_id=company_id),
            company_id=company_id,
            attribute="segment",
            value=segment,
        )
        items = [_to_customer_summary(row) for row in rows]
        return CustomerListResponse(
            tenant_info=tenant_info(context),
            items=items,
            total_count=len(items),
        )

    def get_customer(self, *, context: TenantContext, customer_id: str) -> CustomerDetailResponse:
        customer = self.get_scoped_customer(context=context, customer_id=customer_id)
        return CustomerDetailResponse(
            tenant_info=tenant_info(context, include_requester=False),
            customer=_to_customer_detail(customer),
        )

    def get_scoped_customer(self, *, context: TenantContext, customer_id: str) -> CustomerRecord:
        company_id = require_company_id(context)
        logger.info(
            "Fetching customer %s for company %s by user %s",
            customer_id,
            company_id,
            context.user_id,
        )
        return scope_entity(
            self._customers.get_customer(customer_id=customer_id),
            company_id=company_id,
            entity_label="customer",
            entity_id=customer_id,
        )


def _to_product_summary(product: ProductRecord) -> ProductSummary:
    return ProductSummary(
        id=product.product_id,
        name=product.name,
        category=product.category,
        sku=product.sku,
        base_price=product.base_price().to_payload(),
        base_margin_percentage=product.base_margin_percentage,
        status=product.status,
    )


def _to_product_detail(product: ProductRecord) -> ProductDetail:
    return ProductDetail(
        **_to_product_summary(product).model_dump(),
        additional_info=product.additional_info,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def _to_customer_summary(customer: CustomerRecord) -> CustomerSummary:
    return CustomerSummary(
        id=customer.customer_id,
        name=customer.name,
        segment=customer.segment,
        classification=customer.classification,
        status=customer.status,
        created_at=customer.created_at,
    )


def _to_customer_detail(customer: CustomerRecord) -> CustomerDetail:
    return CustomerDetail(
        **_to_customer_summary(customer).model_dump(),
        external_system_id=customer.external_system_id,
        additional_info=customer.additional_info,
        updated_at=customer.updated_at,
    )
