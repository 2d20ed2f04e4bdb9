from src.core.discounts.models import (
    DiscountEvaluationRequest,
    DiscountEvaluationResponse,
    DiscountRequestLine,
)
from src.core.discounts.service import (
    DiscountEvaluationError,
    DiscountEvaluationService,
    DiscountRequestValidationError,
)

__all__ = [
    "DiscountEvaluationError",
    "DiscountEvaluationRequest",
    "DiscountEvaluationResponse",
    "DiscountEvaluationService",
    "DiscountRequestLine",
    "DiscountRequestValidationError",
]
