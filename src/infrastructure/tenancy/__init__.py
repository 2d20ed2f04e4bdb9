from src.infrastructure.tenancy.in_memory import InMemoryCompanyRepository

__all__ = ["InMemoryCompanyRepository"]
