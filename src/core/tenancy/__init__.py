from src.core.tenancy.context import TenantContext, build_tenant_context
from src.core.tenancy.models import CompanyRecord, TenantInfo
from src.core.tenancy.repository import CompanyRepository
from src.core.tenancy.scoping import (
    MissingTenantError,
    TenantEntityNotFoundError,
    TenantError,
    require_company_id,
    scope_entities,
    scope_entity,
    tenant_info,
)

__all__ = [
    "CompanyRecord",
    "CompanyRepository",
    "MissingTenantError",
    "TenantContext",
    "TenantEntityNotFoundError",
    "TenantError",
    "TenantInfo",
    "build_tenant_context",
    "require_company_id",
    "scope_entities",
    "scope_entity",
    "tenant_info",
]
