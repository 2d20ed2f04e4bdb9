from typing import Optional, Protocol

from src.core.tenancy.models import CompanyRecord


class CompanyRepository(Protocol):
    def get_company(self, *, company_id: str) -> Optional[CompanyRecord]: ...

    def save_company(self, company: CompanyRecord) -> None: ...

    def list_companies(self) -> list[CompanyRecord]: ...
