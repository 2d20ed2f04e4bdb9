from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.routers.http_errors import raise_marginiq_http_exception
from src.api.routers.runtime_utils import assert_feature_enabled
from src.api.routers.service_registry import get_discount_evaluation_service
from src.api.tenancy import get_tenant_context
from src.core.discounts import (
    DiscountEvaluationRequest,
    DiscountEvaluationResponse,
    DiscountEvaluationService,
)
from src.core.tenancy import TenantContext

router = APIRouter(prefix="/api/discount-requests", tags=["Discount Requests"])


@router.post(
    "/evaluate",
    response_model=DiscountEvaluationResponse,
    status_code=status.HTTP_200_OK,
    summary="Evaluate Discount Request for Auto-Approval",
    description=(
        "Prices the requested items from the caller company's catalog and decides whether "
        "the request may be auto-approved under the company's governance settings or must "
        "go to human review."
    ),
)
def evaluate_discount_request(
    payload: DiscountEvaluationRequest,
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[DiscountEvaluationService, Depends(get_discount_evaluation_service)] = None,
) -> DiscountEvaluationResponse:
    assert_feature_enabled(
        name="AUTO_APPROVAL_EVALUATION_ENABLED",
        default=True,
        detail="AUTO_APPROVAL_EVALUATION_DISABLED",
    )
    try:
        return service.evaluate(context=context, request=payload)
    except Exception as exc:
        raise_marginiq_http_exception(exc)
