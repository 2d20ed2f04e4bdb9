import logging
import os
from dataclasses import dataclass
from typing import Optional

from src.api.routers.runtime_utils import env_flag
from src.core.catalog import CatalogQueryService
from src.core.discounts import DiscountEvaluationService
from src.core.governance import GovernanceService
from src.infrastructure.catalog import InMemoryCustomerRepository, InMemoryProductRepository
from src.infrastructure.demo_seed import seed_demo_data
from src.infrastructure.governance import InMemoryGovernanceRepository
from src.infrastructure.tenancy import InMemoryCompanyRepository

logger = logging.getLogger(__name__)

SUPPORTED_STORE_BACKENDS = ("IN_MEMORY",)


@dataclass
class InMemoryStores:
    companies: InMemoryCompanyRepository
    products: InMemoryProductRepository
    customers: InMemoryCustomerRepository
    governance: InMemoryGovernanceRepository


def store_backend_name() -> str:
    backend = os.getenv("MARGINIQ_STORE_BACKEND", "IN_MEMORY").strip().upper()
    if backend not in SUPPORTED_STORE_BACKENDS:
        raise RuntimeError(f"MARGINIQ_STORE_BACKEND_UNSUPPORTED: {backend}")
    return backend


def build_stores() -> InMemoryStores:
    store_backend_name()
    stores = InMemoryStores(
        companies=InMemoryCompanyRepository(),
        products=InMemoryProductRepository(),
        customers=InMemoryCustomerRepository(),
        governance=InMemoryGovernanceRepository(),
    )
    if env_flag("MARGINIQ_SEED_DEMO_DATA", False):
        seed_demo_data(
            companies=stores.companies,
            products=stores.products,
            customers=stores.customers,
            governance=GovernanceService(
                repository=stores.governance,
                companies=stores.companies,
            ),
        )
        logger.info("Demo tenants seeded into in-memory stores")
    return stores


_STORES: Optional[InMemoryStores] = None
_CATALOG_SERVICE: Optional[CatalogQueryService] = None
_GOVERNANCE_SERVICE: Optional[GovernanceService] = None
_DISCOUNT_SERVICE: Optional[DiscountEvaluationService] = None


def get_stores() -> InMemoryStores:
    global _STORES
    if _STORES is None:
        _STORES = build_stores()
    return _STORES


def get_catalog_query_service() -> CatalogQueryService:
    global _CATALOG_SERVICE
    if _CATALOG_SERVICE is None:
        stores = get_stores()
        _CATALOG_SERVICE = CatalogQueryService(
            products=stores.products,
            customers=stores.customers,
        )
    return _CATALOG_SERVICE


def get_governance_service() -> GovernanceService:
    global _GOVERNANCE_SERVICE
    if _GOVERNANCE_SERVICE is None:
        stores = get_stores()
        _GOVERNANCE_SERVICE = GovernanceService(
            repository=stores.governance,
            companies=stores.companies,
            require_expected_updated_at=env_flag("GOVERNANCE_REQUIRE_EXPECTED_UPDATED_AT", False),
            model_version=os.getenv("AI_MODEL_VERSION", "").strip() or None,
        )
    return _GOVERNANCE_SERVICE


def get_discount_evaluation_service() -> DiscountEvaluationService:
    global _DISCOUNT_SERVICE
    if _DISCOUNT_SERVICE is None:
        _DISCOUNT_SERVICE = DiscountEvaluationService(
            catalog=get_catalog_query_service(),
            governance=get_governance_service(),
            companies=get_stores().companies,
        )
    return _DISCOUNT_SERVICE


def reset_services_for_tests() -> None:
    global _STORES
    global _CATALOG_SERVICE
    global _GOVERNANCE_SERVICE
    global _DISCOUNT_SERVICE
    _STORES = None
    _CATALOG_SERVICE = None
    _GOVERNANCE_SERVICE = None
    _DISCOUNT_SERVICE = None
