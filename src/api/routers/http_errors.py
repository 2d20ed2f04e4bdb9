from typing import NoReturn

from fastapi import HTTPException, status

from src.core.discounts import DiscountRequestValidationError
from src.core.governance import (
    GovernanceCompanyNotFoundError,
    GovernancePresetNotFoundError,
    GovernanceValidationError,
    GovernanceVersionConflictError,
)
from src.core.pricing import PricingValidationError
from src.core.tenancy import MissingTenantError, TenantEntityNotFoundError

HTTP_422_UNPROCESSABLE = getattr(
    status,
    "HTTP_422_UNPROCESSABLE_CONTENT",
    status.HTTP_422_UNPROCESSABLE_ENTITY,
)


def raise_marginiq_http_exception(exc: Exception) -> NoReturn:
    if isinstance(exc, MissingTenantError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if isinstance(
        exc,
        (TenantEntityNotFoundError, GovernanceCompanyNotFoundError, GovernancePresetNotFoundError),
    ):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    if isinstance(exc, GovernanceVersionConflictError):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    if isinstance(
        exc,
        (GovernanceValidationError, DiscountRequestValidationError, PricingValidationError),
    ):
        raise HTTPException(
            status_code=HTTP_422_UNPROCESSABLE,
            detail=str(exc),
        ) from exc
    raise exc
