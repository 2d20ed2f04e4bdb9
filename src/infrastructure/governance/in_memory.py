from copy import deepcopy
from threading import Lock
from typing import Optional

from src.core.governance.models import GovernanceAuditRecord, GovernanceSettingsRecord
from src.core.governance.repository import GovernanceRepository


class InMemoryGovernanceRepository(GovernanceRepository):
    """Last-writer-wins store; optimistic checks live in the service."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._settings: dict[str, GovernanceSettingsRecord] = {}
        self._audit: dict[str, list[GovernanceAuditRecord]] = {}

    def get_settings(self, *, company_id: str) -> Optional[GovernanceSettingsRecord]:
        with self._lock:
            settings = self._settings.get(company_id)
            return deepcopy(settings) if settings is not None else None

    def save_settings(self, settings: GovernanceSettingsRecord) -> None:
        with self._lock:
            self._settings[settings.company_id] = deepcopy(settings)

    def append_audit(self, record: GovernanceAuditRecord) -> None:
        with self._lock:
            self._audit.setdefault(record.company_id, []).append(deepcopy(record))

    def list_audit(self, *, company_id: str) -> list[GovernanceAuditRecord]:
        with self._lock:
            records = self._audit.get(company_id, [])
            return [deepcopy(record) for record in records]
