import logging
from decimal import Decimal
from typing import Optional, Sequence

from src.core.catalog import CatalogQueryService, ProductRecord
from src.core.discounts.models import DiscountEvaluationRequest, DiscountEvaluationResponse
from src.core.governance import AutoApprovalFacts, GovernanceService, evaluate_auto_approval
from src.core.pricing import DiscountRequestItem, PricingValidationError
from src.core.tenancy import CompanyRepository, TenantContext, require_company_id, tenant_info

logger = logging.getLogger(__name__)


class DiscountEvaluationError(Exception):
    pass


class DiscountRequestValidationError(DiscountEvaluationError):
    pass


class DiscountEvaluationService:
    def __init__(
        self,
        *,
        catalog: CatalogQueryService,
        governance: GovernanceService,
        companies: CompanyRepository,
    ) -> None:
        self._catalog = catalog
        self._governance = governance
        self._companies = companies

    def evaluate(
        self,
        *,
        context: TenantContext,
        request: DiscountEvaluationRequest,
    ) -> DiscountEvaluationResponse:
        company_id = require_company_id(context)
        customer = self._catalog.get_scoped_customer(
            context=context, customer_id=request.customer_id
        )

        products: list[ProductRecord] = []
        items: list[DiscountRequestItem] = []
        for line in request.items:
            product = self._catalog.get_scoped_product(context=context, product_id=line.product_id)
            if not product.can_be_included_in_discount_requests():
                raise DiscountRequestValidationError(
                    f"DISCOUNT_REQUEST_PRODUCT_NOT_ACTIVE: {product.product_id}"
                )
            try:
                items.append(
                    DiscountRequestItem(
                        product.product_id,
                        product.name,
                        line.quantity,
                        product.base_price(),
                        line.discount_percentage,
                    )
                )
            except PricingValidationError as exc:
                raise DiscountRequestValidationError(
                    f"DISCOUNT_REQUEST_INVALID_ITEM: {product.product_id}: {exc}"
                ) from exc
            products.append(product)

        company = self._companies.get_company(company_id=company_id)
        settings = self._governance.load_settings(company_id=company_id)
        margin = estimate_margin_percentage(products, items)
        decision = evaluate_auto_approval(
            settings.policy(),
            AutoApprovalFacts(
                items=items,
                risk_score=request.risk_score,
                ai_confidence=request.ai_confidence,
                estimated_margin_percentage=margin,
                customer_active=customer.is_active(),
                company_active=company is not None and company.is_active(),
            ),
        )
        logger.info(
            "Discount request evaluated for company %s customer %s: %s (%s)",
            company_id,
            customer.customer_id,
            decision.outcome,
            decision.reason_code,
        )
        return DiscountEvaluationResponse(
            tenant_info=tenant_info(context),
            customer_id=customer.customer_id,
            estimated_margin_percentage=margin,
            decision=decision,
        )


def estimate_margin_percentage(
    products: Sequence[ProductRecord], items: Sequence[DiscountRequestItem]
) -> Optional[Decimal]:
    """Weight each product's post-discount margin by its discounted revenue."""
    weighted = Decimal("0")
    revenue = Decimal("0")
    for product, item in zip(products, items):
        line_revenue = item.total_final_price().amount
        weighted += product.margin_after_discount(item.discount_percentage) * line_revenue
        revenue += line_revenue
    if revenue == 0:
        return None
    return (weighted / revenue).quantize(Decimal("0.01"))
