from copy import deepcopy
from threading import Lock
from typing import Optional

from src.core.catalog.models import CustomerRecord, ProductRecord
from src.core.catalog.repository import CustomerRepository, ProductRepository


class InMemoryProductRepository(ProductRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._products: dict[str, ProductRecord] = {}

    def get_product(self, *, product_id: str) -> Optional[ProductRecord]:
        with self._lock:
            product = self._products.get(product_id)
            return deepcopy(product) if product is not None else None

    def list_products_by_company(self, *, company_id: str) -> list[ProductRecord]:
        with self._lock:
            rows = [row for row in self._products.values() if row.company_id == company_id]
        rows = sorted(rows, key=lambda x: (x.name.casefold(), x.product_id))
        return [deepcopy(row) for row in rows]

    def save_product(self, product: ProductRecord) -> None:
        with self._lock:
            self._products[product.product_id] = deepcopy(product)


class InMemoryCustomerRepository(CustomerRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._customers: dict[str, CustomerRecord] = {}

    def get_customer(self, *, customer_id: str) -> Optional[CustomerRecord]:
        with self._lock:
            customer = self._customers.get(customer_id)
            return deepcopy(customer) if customer is not None else None

    def list_customers_by_company(self, *, company_id: str) -> list[CustomerRecord]:
        with self._lock:
            rows = [row for row in self._customers.values() if row.company_id == company_id]
        rows = sorted(rows, key=lambda x: (x.name.casefold(), x.customer_id))
        return [deepcopy(row) for row in rows]

    def save_customer(self, customer: CustomerRecord) -> None:
        with self._lock:
            self._customers[customer.customer_id] = deepcopy(customer)
