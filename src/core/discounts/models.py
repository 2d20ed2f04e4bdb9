from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from src.core.governance.models import AutoApprovalDecision
from src.core.tenancy.models import TenantInfo

MAX_LINE_QUANTITY = 1_000_000


class DiscountRequestLine(BaseModel):
    product_id: str = Field(
        description="Product owned by the caller company.", examples=["prd_widget"]
    )
    quantity: int = Field(
        le=MAX_LINE_QUANTITY, description="Requested quantity.", examples=[3]
    )
    discount_percentage: Decimal = Field(
        description="Requested discount percentage between 0 and 100.", examples=["12.5"]
    )


class DiscountEvaluationRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "example": {
                "customer_id": "cus_globex",
                "items": [
                    {"product_id": "prd_widget", "quantity": 3, "discount_percentage": "10"}
                ],
                "risk_score": "42",
                "ai_confidence": "0.82",
            }
        }
    }

    customer_id: str = Field(description="Customer the discount is for.", examples=["cus_globex"])
    items: List[DiscountRequestLine] = Field(
        min_length=1, description="Requested discounted line items."
    )
    risk_score: Decimal = Field(
        ge=0, le=100, description="Risk score of the request (0-100).", examples=["42"]
    )
    ai_confidence: Optional[Decimal] = Field(
        default=None,
        ge=0,
        le=1,
        description="Confidence of the AI recommendation (0-1), when one is available.",
        examples=["0.82"],
    )


class DiscountEvaluationResponse(BaseModel):
    tenant_info: TenantInfo = Field(description="Caller tenant the evaluation is scoped to.")
    customer_id: str = Field(description="Evaluated customer.", examples=["cus_globex"])
    estimated_margin_percentage: Optional[Decimal] = Field(
        default=None,
        description="Revenue-weighted margin estimate after discount.",
        examples=["29.5"],
    )
    decision: AutoApprovalDecision = Field(description="Auto-approval routing decision.")
