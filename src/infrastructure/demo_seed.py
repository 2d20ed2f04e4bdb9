from datetime import datetime, timezone
from decimal import Decimal

from src.core.catalog.models import CustomerRecord, ProductRecord
from src.core.catalog.repository import CustomerRepository, ProductRepository
from src.core.governance import GovernancePreset, GovernanceService
from src.core.tenancy.models import CompanyRecord
from src.core.tenancy.repository import CompanyRepository

DEMO_COMPANY_ID = "cmp_acme"
DEMO_OTHER_COMPANY_ID = "cmp_globex"

DEMO_GOVERNANCE_PRESETS = {
    DEMO_COMPANY_ID: GovernancePreset.BALANCED,
    DEMO_OTHER_COMPANY_ID: GovernancePreset.AGGRESSIVE,
}

_SEEDED_AT = datetime(2026, 1, 7, 0, 22, 35, tzinfo=timezone.utc)


def seed_demo_data(
    *,
    companies: CompanyRepository,
    products: ProductRepository,
    customers: CustomerRepository,
    governance: GovernanceService,
) -> None:
    if companies.get_company(company_id=DEMO_COMPANY_ID) is not None:
        return

    companies.save_company(
        CompanyRecord(
            company_id=DEMO_COMPANY_ID,
            name="Acme Industrial Ltd.",
            segment="MANUFACTURING",
            created_at=_SEEDED_AT,
        )
    )
    companies.save_company(
        CompanyRecord(
            company_id=DEMO_OTHER_COMPANY_ID,
            name="Globex Distribution",
            segment="DISTRIBUTION",
            created_at=_SEEDED_AT,
        )
    )

    for product in (
        _product("prd_widget", DEMO_COMPANY_ID, "Widget", "Hardware", "10.00", "35"),
        _product("prd_gear", DEMO_COMPANY_ID, "Gear Assembly", "hardware", "250.00", "28"),
        _product("prd_support", DEMO_COMPANY_ID, "Support Plan", "Services", "1200.00", "60"),
        _product("prd_pump", DEMO_OTHER_COMPANY_ID, "Pump", "Hardware", "480.00", "22"),
    ):
        products.save_product(product)

    for customer in (
        _customer("cus_initech", DEMO_COMPANY_ID, "Initech", "Enterprise", "A", "ACTIVE"),
        _customer("cus_hooli", DEMO_COMPANY_ID, "Hooli", "SMB", "B", "PROSPECT"),
        _customer("cus_umbrella", DEMO_OTHER_COMPANY_ID, "Umbrella", "Enterprise", "A", "ACTIVE"),
    ):
        customers.save_customer(customer)

    for company_id, preset in DEMO_GOVERNANCE_PRESETS.items():
        governance.onboard_company(company_id=company_id, preset=preset, onboarded_at=_SEEDED_AT)


def _product(
    product_id: str,
    company_id: str,
    name: str,
    category: str,
    price: str,
    margin: str,
) -> ProductRecord:
    return ProductRecord(
        product_id=product_id,
        company_id=company_id,
        name=name,
        category=category,
        sku=f"{product_id.upper()}-01",
        base_price_amount=Decimal(price),
        base_price_currency="USD",
        base_margin_percentage=Decimal(margin),
        created_at=_SEEDED_AT,
    )


def _customer(
    customer_id: str,
    company_id: str,
    name: str,
    segment: str,
    classification: str,
    status: str,
) -> CustomerRecord:
    return CustomerRecord(
        customer_id=customer_id,
        company_id=company_id,
        name=name,
        segment=segment,
        classification=classification,
        status=status,
        created_at=_SEEDED_AT,
    )
