from src.infrastructure.governance.in_memory import InMemoryGovernanceRepository

__all__ = ["InMemoryGovernanceRepository"]
