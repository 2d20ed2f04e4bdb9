from copy import deepcopy
from threading import Lock
from typing import Optional

from src.core.tenancy.models import CompanyRecord
from src.core.tenancy.repository import CompanyRepository


class InMemoryCompanyRepository(CompanyRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._companies: dict[str, CompanyRecord] = {}

    def get_company(self, *, company_id: str) -> Optional[CompanyRecord]:
        with self._lock:
            company = self._companies.get(company_id)
            return deepcopy(company) if company is not None else None

    def save_company(self, company: CompanyRecord) -> None:
        with self._lock:
            self._companies[company.company_id] = deepcopy(company)

    def list_companies(self) -> list[CompanyRecord]:
        with self._lock:
            rows = list(self._companies.values())
        rows = sorted(rows, key=lambda x: x.company_id)
        return [deepcopy(row) for row in rows]
