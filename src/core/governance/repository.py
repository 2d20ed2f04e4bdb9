from typing import Optional, Protocol

from src.core.governance.models import GovernanceAuditRecord, GovernanceSettingsRecord


class GovernanceRepository(Protocol):
    def get_settings(self, *, company_id: str) -> Optional[GovernanceSettingsRecord]: ...

    def save_settings(self, settings: GovernanceSettingsRecord) -> None: ...

    def append_audit(self, record: GovernanceAuditRecord) -> None: ...

    def list_audit(self, *, company_id: str) -> list[GovernanceAuditRecord]: ...
