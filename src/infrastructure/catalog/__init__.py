from src.infrastructure.catalog.in_memory import (
    InMemoryCustomerRepository,
    InMemoryProductRepository,
)

__all__ = ["InMemoryCustomerRepository", "InMemoryProductRepository"]
