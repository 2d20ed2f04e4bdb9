from decimal import Decimal
from enum import Enum

from src.core.governance.errors import GovernancePresetNotFoundError
from src.core.governance.models import (
    GovernancePolicy,
    GovernancePresetCatalogResponse,
    GovernancePresetDefinition,
    GovernanceUpdateRequest,
)


class GovernancePreset(str, Enum):
    CONSERVATIVE = "CONSERVATIVE"
    BALANCED = "BALANCED"
    AGGRESSIVE = "AGGRESSIVE"
    DISABLED = "DISABLED"


_PRESET_POLICIES: dict[GovernancePreset, GovernancePolicy] = {
    # Thresholds here are unreachable on purpose: 0 risk and 100% confidence.
    GovernancePreset.CONSERVATIVE: GovernancePolicy(
        ai_enabled=True,
        autonomy_level=10,
        max_risk_score_for_auto_approval=Decimal("0"),
        min_confidence_for_auto_approval=Decimal("1.00"),
        require_human_review=True,
        enable_audit=True,
        enable_explainability=True,
        max_auto_approval_discount=Decimal("0"),
        enable_incremental_learning=True,
        retraining_frequency_days=30,
    ),
    GovernancePreset.BALANCED: GovernancePolicy(
        ai_enabled=True,
        autonomy_level=50,
        max_risk_score_for_auto_approval=Decimal("60"),
        min_confidence_for_auto_approval=Decimal("0.75"),
        require_human_review=False,
        enable_audit=True,
        enable_explainability=True,
        max_auto_approval_discount=Decimal("15"),
        enable_incremental_learning=True,
        retraining_frequency_days=30,
    ),
    GovernancePreset.AGGRESSIVE: GovernancePolicy(
        ai_enabled=True,
        autonomy_level=85,
        max_risk_score_for_auto_approval=Decimal("80"),
        min_confidence_for_auto_approval=Decimal("0.60"),
        require_human_review=False,
        enable_audit=True,
        enable_explainability=True,
        max_auto_approval_discount=Decimal("30"),
        enable_incremental_learning=True,
        retraining_frequency_days=15,
    ),
    GovernancePreset.DISABLED: GovernancePolicy(
        ai_enabled=False,
        autonomy_level=0,
        max_risk_score_for_auto_approval=Decimal("0"),
        min_confidence_for_auto_approval=Decimal("1.00"),
        require_human_review=True,
        enable_audit=True,
        enable_explainability=False,
        max_auto_approval_discount=Decimal("0"),
        enable_incremental_learning=False,
        retraining_frequency_days=0,
    ),
}

_PRESET_DESCRIPTIONS: dict[GovernancePreset, str] = {
    GovernancePreset.CONSERVATIVE: (
        "AI recommends only, all decisions require human approval."
    ),
    GovernancePreset.BALANCED: "Moderate autonomy with reasonable guardrails (recommended).",
    GovernancePreset.AGGRESSIVE: "High autonomy, AI has broad decision-making power.",
    GovernancePreset.DISABLED: "AI completely disabled, manual approval only.",
}

DEFAULT_PRESET = GovernancePreset.BALANCED


def parse_preset(name: str) -> GovernancePreset:
    normalized = (name or "").strip().upper()
    try:
        return GovernancePreset(normalized)
    except ValueError as exc:
        raise GovernancePresetNotFoundError(f"GOVERNANCE_PRESET_NOT_FOUND: {name}") from exc


def preset_policy(preset: GovernancePreset) -> GovernancePolicy:
    return _PRESET_POLICIES[preset].model_copy(deep=True)


def preset_request(preset: GovernancePreset, company_id: str) -> GovernanceUpdateRequest:
    return GovernanceUpdateRequest(
        **preset_policy(preset).model_dump(),
        company_id=company_id,
    )


def list_presets() -> GovernancePresetCatalogResponse:
    items = [
        GovernancePresetDefinition(
            preset=preset.value,
            description=_PRESET_DESCRIPTIONS[preset],
            policy=preset_policy(preset),
        )
        for preset in GovernancePreset
    ]
    return GovernancePresetCatalogResponse(total=len(items), items=items)
