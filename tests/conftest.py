"""
FILE: tests/conftest.py
Shared fixtures for service and API tests.
"""

from pathlib import Path

import pytest

from src.api.routers.service_registry import reset_services_for_tests
from src.core.catalog import CatalogQueryService
from src.core.governance import GovernanceService
from src.core.tenancy import CompanyRecord, build_tenant_context
from src.infrastructure.catalog import InMemoryCustomerRepository, InMemoryProductRepository
from src.infrastructure.governance import InMemoryGovernanceRepository
from src.infrastructure.tenancy import InMemoryCompanyRepository
from tests.factories import CREATED_AT, make_customer, make_product


def _has_marker(item: pytest.Item, name: str) -> bool:
    return item.get_closest_marker(name) is not None


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if _has_marker(item, "unit") or _has_marker(item, "integration"):
            continue

        path = Path(str(item.fspath)).as_posix().lower()
        if "/tests/integration/" in path or "_integration.py" in path:
            item.add_marker(pytest.mark.integration)
            continue
        item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def isolated_runtime(monkeypatch: pytest.MonkeyPatch):
    """Fresh in-memory stores with the demo tenants for every test."""

    monkeypatch.setenv("MARGINIQ_STORE_BACKEND", "IN_MEMORY")
    monkeypatch.setenv("MARGINIQ_SEED_DEMO_DATA", "true")
    for name in (
        "GOVERNANCE_PRESET_APIS_ENABLED",
        "AUTO_APPROVAL_EVALUATION_ENABLED",
        "GOVERNANCE_REQUIRE_EXPECTED_UPDATED_AT",
        "AI_MODEL_VERSION",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_services_for_tests()
    yield
    reset_services_for_tests()


@pytest.fixture
def companies() -> InMemoryCompanyRepository:
    repository = InMemoryCompanyRepository()
    repository.save_company(CompanyRecord(company_id="cmp_one", name="One", created_at=CREATED_AT))
    repository.save_company(CompanyRecord(company_id="cmp_two", name="Two", created_at=CREATED_AT))
    return repository


@pytest.fixture
def products() -> InMemoryProductRepository:
    repository = InMemoryProductRepository()
    repository.save_product(make_product("prd_a", "cmp_one", name="Alpha", category="Hardware"))
    repository.save_product(make_product("prd_b", "cmp_one", name="Bravo", category="services"))
    repository.save_product(make_product("prd_x", "cmp_two", name="Xray", category="Hardware"))
    return repository


@pytest.fixture
def customers() -> InMemoryCustomerRepository:
    repository = InMemoryCustomerRepository()
    repository.save_customer(make_customer("cus_a", "cmp_one", name="Acme", segment="Enterprise"))
    repository.save_customer(
        make_customer("cus_p", "cmp_one", name="Prospect Co", segment="SMB", status="PROSPECT")
    )
    repository.save_customer(make_customer("cus_x", "cmp_two", name="Other", segment="Enterprise"))
    return repository


@pytest.fixture
def catalog_service(products, customers) -> CatalogQueryService:
    return CatalogQueryService(products=products, customers=customers)


@pytest.fixture
def governance_service(companies) -> GovernanceService:
    return GovernanceService(repository=InMemoryGovernanceRepository(), companies=companies)


@pytest.fixture
def tenant_one():
    return build_tenant_context(
        company_id="cmp_one",
        company_name="One",
        user_id="usr_1",
        user_name="Jane Doe",
    )


@pytest.fixture
def tenant_two():
    return build_tenant_context(company_id="cmp_two", company_name="Two", user_id="usr_2")
