from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from src.api.routers.http_errors import raise_marginiq_http_exception
from src.api.routers.runtime_utils import assert_feature_enabled
from src.api.routers.service_registry import get_governance_service
from src.api.tenancy import get_tenant_context
from src.core.governance import (
    GovernanceAuditResponse,
    GovernancePresetCatalogResponse,
    GovernanceService,
    GovernanceSettingsResponse,
    GovernanceSettingsUpdateBody,
    GovernanceUpdateRequest,
    list_presets,
    parse_preset,
)
from src.core.tenancy import TenantContext, require_company_id

router = APIRouter(prefix="/api/governance", tags=["AI Governance"])


def _assert_preset_apis_enabled() -> None:
    assert_feature_enabled(
        name="GOVERNANCE_PRESET_APIS_ENABLED",
        default=True,
        detail="GOVERNANCE_PRESET_APIS_DISABLED",
    )


@router.get(
    "",
    response_model=GovernanceSettingsResponse,
    status_code=status.HTTP_200_OK,
    summary="Get AI Governance Settings",
    description=(
        "Returns the caller company's governance settings with autonomy description, "
        "policy summary, and next retraining date. Defaults are created on first read."
    ),
)
def get_governance_settings(
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[GovernanceService, Depends(get_governance_service)] = None,
) -> GovernanceSettingsResponse:
    try:
        return service.get_settings(company_id=require_company_id(context))
    except Exception as exc:
        raise_marginiq_http_exception(exc)


@router.put(
    "",
    response_model=GovernanceSettingsResponse,
    status_code=status.HTTP_200_OK,
    summary="Update AI Governance Settings",
    description=(
        "Replaces the caller company's governance settings as a whole. Invalid values reject "
        "the update without changing stored settings."
    ),
)
def update_governance_settings(
    payload: GovernanceSettingsUpdateBody,
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[GovernanceService, Depends(get_governance_service)] = None,
) -> GovernanceSettingsResponse:
    try:
        request = GovernanceUpdateRequest(
            **payload.model_dump(exclude={"expected_updated_at"}),
            company_id=require_company_id(context),
        )
        return service.update_settings(
            request=request,
            updated_by=context.user_id,
            expected_updated_at=payload.expected_updated_at,
        )
    except Exception as exc:
        raise_marginiq_http_exception(exc)


@router.get(
    "/presets",
    response_model=GovernancePresetCatalogResponse,
    status_code=status.HTTP_200_OK,
    summary="List Governance Presets",
    description="Lists the named governance presets and the settings each one applies.",
)
def list_governance_presets() -> GovernancePresetCatalogResponse:
    _assert_preset_apis_enabled()
    return list_presets()


@router.post(
    "/presets/{preset}",
    response_model=GovernanceSettingsResponse,
    status_code=status.HTTP_200_OK,
    summary="Apply Governance Preset",
    description="Replaces the caller company's governance settings with a named preset.",
)
def apply_governance_preset(
    preset: Annotated[
        str,
        Path(
            description="Preset name (CONSERVATIVE, BALANCED, AGGRESSIVE, DISABLED).",
            examples=["CONSERVATIVE"],
        ),
    ],
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[GovernanceService, Depends(get_governance_service)] = None,
) -> GovernanceSettingsResponse:
    _assert_preset_apis_enabled()
    try:
        return service.apply_preset(
            company_id=require_company_id(context),
            preset=parse_preset(preset),
            updated_by=context.user_id,
        )
    except Exception as exc:
        raise_marginiq_http_exception(exc)


@router.get(
    "/audit",
    response_model=GovernanceAuditResponse,
    status_code=status.HTTP_200_OK,
    summary="List Governance Audit Trail",
    description="Returns governance setting changes for the caller company, newest first.",
)
def list_governance_audit(
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[GovernanceService, Depends(get_governance_service)] = None,
) -> GovernanceAuditResponse:
    try:
        return service.list_audit(company_id=require_company_id(context))
    except Exception as exc:
        raise_marginiq_http_exception(exc)
