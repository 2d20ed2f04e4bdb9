from typing import Optional, Protocol

from src.core.catalog.models import CustomerRecord, ProductRecord


class ProductRepository(Protocol):
    def get_product(self, *, product_id: str) -> Optional[ProductRecord]: ...

    def list_products_by_company(self, *, company_id: str) -> list[ProductRecord]: ...

    def save_product(self, product: ProductRecord) -> None: ...


class CustomerRepository(Protocol):
    def get_customer(self, *, customer_id: str) -> Optional[CustomerRecord]: ...

    def list_customers_by_company(self, *, company_id: str) -> list[CustomerRecord]: ...

    def save_customer(self, customer: CustomerRecord) -> None: ...
