from datetime import datetime
from typing import Literal, Optional, Protocol

from pydantic import BaseModel, Field

CompanyStatus = Literal["ACTIVE", "INACTIVE", "SUSPENDED", "TRIAL"]
CompanySegment = Literal[
    "MANUFACTURING",
    "DISTRIBUTION",
    "RETAIL",
    "SERVICES",
    "TECHNOLOGY",
    "OTHER",
]


class TenantOwned(Protocol):
    company_id: str


class CompanyRecord(BaseModel):
    company_id: str = Field(description="Tenant identifier.", examples=["cmp_acme"])
    name: str = Field(description="Company display name.", examples=["Acme Industrial"])
    segment: CompanySegment = Field(
        default="OTHER", description="Business segment.", examples=["MANUFACTURING"]
    )
    status: CompanyStatus = Field(
        default="ACTIVE", description="Company lifecycle status.", examples=["ACTIVE"]
    )
    created_at: datetime = Field(
        description="Onboarding timestamp.", examples=["2026-01-07T00:22:35+00:00"]
    )
    updated_at: Optional[datetime] = Field(
        default=None,
        description="Last profile change timestamp.",
        examples=["2026-02-01T09:00:00+00:00"],
    )

    def is_active(self) -> bool:
        return self.status == "ACTIVE"


class TenantInfo(BaseModel):
    company_id: str = Field(description="Caller company identifier.", examples=["cmp_acme"])
    company_name: Optional[str] = Field(
        default=None, description="Caller company name.", examples=["Acme Industrial"]
    )
    requested_by: Optional[str] = Field(
        default=None, description="Caller user name.", examples=["Maria Sales"]
    )
