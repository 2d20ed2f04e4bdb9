from src.core.catalog.models import (
    CustomerDetailResponse,
    CustomerListResponse,
    CustomerRecord,
    ProductDetailResponse,
    ProductListResponse,
    ProductRecord,
)
from src.core.catalog.repository import CustomerRepository, ProductRepository
from src.core.catalog.service import CatalogQueryService

__all__ = [
    "CatalogQueryService",
    "CustomerDetailResponse",
    "CustomerListResponse",
    "CustomerRecord",
    "CustomerRepository",
    "ProductDetailResponse",
    "ProductListResponse",
    "ProductRecord",
    "ProductRepository",
]
