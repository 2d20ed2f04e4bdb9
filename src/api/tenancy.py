from typing import Annotated, Optional

from fastapi import Header, Request

from src.core.tenancy import TenantContext, build_tenant_context

CLAIM_HEADER_PREFIX = "x-claim-"


async def get_tenant_context(
    request: Request,
    company_id: Annotated[
        Optional[str],
        Header(
            alias="X-Company-Id",
            description="Caller company set by the upstream gateway.",
            examples=["cmp_acme"],
        ),
    ] = None,
    company_name: Annotated[
        Optional[str],
        Header(alias="X-Company-Name", examples=["Acme Industrial Ltd."]),
    ] = None,
    user_id: Annotated[
        Optional[str],
        Header(
            alias="X-User-Id",
            description="Authenticated user id; absent for anonymous callers.",
            examples=["usr_jane"],
        ),
    ] = None,
    user_name: Annotated[Optional[str], Header(alias="X-User-Name")] = None,
    user_email: Annotated[Optional[str], Header(alias="X-User-Email")] = None,
    user_role: Annotated[
        Optional[str],
        Header(alias="X-User-Role", examples=["PRICING_MANAGER"]),
    ] = None,
) -> TenantContext:
    claims = {
        key[len(CLAIM_HEADER_PREFIX) :]: value
        for key, value in request.headers.items()
        if key.lower().startswith(CLAIM_HEADER_PREFIX)
    }
    return build_tenant_context(
        company_id=company_id,
        company_name=company_name,
        user_id=user_id,
        user_name=user_name,
        user_email=user_email,
        user_role=user_role,
        additional_claims=claims,
    )
