from src.core.governance.auto_approval import AutoApprovalFacts, evaluate_auto_approval
from src.core.governance.descriptions import (
    build_governance_summary,
    describe_autonomy,
    describe_governance,
    next_retraining_date,
)
from src.core.governance.errors import (
    GovernanceCompanyNotFoundError,
    GovernanceError,
    GovernancePresetNotFoundError,
    GovernanceValidationError,
    GovernanceVersionConflictError,
)
from src.core.governance.models import (
    AutoApprovalDecision,
    GovernanceAuditResponse,
    GovernancePolicy,
    GovernancePresetCatalogResponse,
    GovernanceSettingsRecord,
    GovernanceSettingsResponse,
    GovernanceSettingsUpdateBody,
    GovernanceUpdateRequest,
)
from src.core.governance.presets import (
    GovernancePreset,
    list_presets,
    parse_preset,
    preset_request,
)
from src.core.governance.repository import GovernanceRepository
from src.core.governance.service import GovernanceService, validate_governance_policy

__all__ = [
    "AutoApprovalDecision",
    "AutoApprovalFacts",
    "GovernanceAuditResponse",
    "GovernanceCompanyNotFoundError",
    "GovernanceError",
    "GovernancePolicy",
    "GovernancePreset",
    "GovernancePresetCatalogResponse",
    "GovernancePresetNotFoundError",
    "GovernanceRepository",
    "GovernanceService",
    "GovernanceSettingsRecord",
    "GovernanceSettingsResponse",
    "GovernanceSettingsUpdateBody",
    "GovernanceUpdateRequest",
    "GovernanceValidationError",
    "GovernanceVersionConflictError",
    "build_governance_summary",
    "describe_autonomy",
    "describe_governance",
    "evaluate_auto_approval",
    "list_presets",
    "next_retraining_date",
    "parse_preset",
    "preset_request",
    "validate_governance_policy",
]
