from dataclasses import dataclass, field
from typing import Mapping, Optional


@dataclass(frozen=True)
class TenantContext:
    """Per-request caller identity resolved at the transport edge."""

    company_id: Optional[str] = None
    company_name: Optional[str] = None
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    user_role: Optional[str] = None
    authenticated: bool = False
    additional_claims: Mapping[str, str] = field(default_factory=dict)

    @property
    def is_authenticated(self) -> bool:
        return self.authenticated and self.company_id is not None


ANONYMOUS_CONTEXT = TenantContext()


def build_tenant_context(
    *,
    company_id: Optional[str],
    company_name: Optional[str] = None,
    user_id: Optional[str] = None,
    user_name: Optional[str] = None,
    user_email: Optional[str] = None,
    user_role: Optional[str] = None,
    additional_claims: Optional[Mapping[str, str]] = None,
) -> TenantContext:
    normalized_company_id = normalize_optional_value(company_id)
    normalized_user_id = normalize_optional_value(user_id)
    claims: dict[str, str] = {}
    for name, value in (additional_claims or {}).items():
        normalized_name = normalize_optional_value(name)
        if normalized_name is None or normalized_name in claims:
            continue
        claims[normalized_name] = value
    return TenantContext(
        company_id=normalized_company_id,
        company_name=normalize_optional_value(company_name),
        user_id=normalized_user_id,
        user_name=normalize_optional_value(user_name),
        user_email=normalize_optional_value(user_email),
        user_role=normalize_optional_value(user_role),
        authenticated=normalized_user_id is not None,
        additional_claims=claims,
    )


def normalize_optional_value(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    normalized = value.strip()
    return normalized or None
