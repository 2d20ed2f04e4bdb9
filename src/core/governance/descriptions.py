from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from src.core.governance.models import (
    GovernanceOperationalStatus,
    GovernancePolicy,
    GovernanceSettingsRecord,
    GovernanceSettingsResponse,
)

AUTONOMY_TIERS: tuple[tuple[int, str], ...] = (
    (25, "Conservative: AI recommends only, requires human approval for all decisions"),
    (50, "Low: AI can auto-approve low-risk decisions within strict limits"),
    (75, "Moderate: AI can auto-approve medium-risk decisions within guardrails"),
    (90, "High: AI has broad autonomy, human approval only for high-risk cases"),
)
FULL_AUTONOMY_DESCRIPTION = "Full: AI has maximum autonomy within configured guardrails"


def describe_autonomy(autonomy_level: int) -> str:
    for upper_bound, description in AUTONOMY_TIERS:
        if autonomy_level < upper_bound:
            return description
    return FULL_AUTONOMY_DESCRIPTION


def build_governance_summary(policy: GovernancePolicy) -> str:
    if not policy.ai_enabled:
        return "AI is disabled for this company"
    if policy.require_human_review:
        return "All decisions require human review"
    return ", ".join(
        [
            "Auto-approval enabled for risk "
            f"≤{format_whole(policy.max_risk_score_for_auto_approval)}",
            f"discounts ≤{format_whole(policy.max_auto_approval_discount)}%",
            f"confidence ≥{format_percent(policy.min_confidence_for_auto_approval)}",
        ]
    )


def next_retraining_date(settings: GovernanceSettingsRecord) -> Optional[datetime]:
    if not settings.enable_incremental_learning or settings.retraining_frequency_days <= 0:
        return None
    return settings.updated_at + timedelta(days=settings.retraining_frequency_days)


def describe_governance(
    settings: GovernanceSettingsRecord,
    *,
    status: GovernanceOperationalStatus,
) -> GovernanceSettingsResponse:
    return GovernanceSettingsResponse(
        **settings.policy().model_dump(),
        company_id=settings.company_id,
        autonomy_description=describe_autonomy(settings.autonomy_level),
        summary=build_governance_summary(settings),
        next_retraining_date=next_retraining_date(settings),
        updated_at=settings.updated_at,
        updated_by=settings.updated_by,
        status=status,
    )


def build_change_log(old: GovernancePolicy, new: GovernancePolicy) -> list[str]:
    changes: list[str] = []
    if old.ai_enabled != new.ai_enabled:
        changes.append(f"AI Enabled: {old.ai_enabled} → {new.ai_enabled}")
    if old.autonomy_level != new.autonomy_level:
        changes.append(f"Autonomy Level: {old.autonomy_level} → {new.autonomy_level}")
    if old.max_risk_score_for_auto_approval != new.max_risk_score_for_auto_approval:
        changes.append(
            "Max Risk Score: "
            f"{old.max_risk_score_for_auto_approval} → {new.max_risk_score_for_auto_approval}"
        )
    if old.min_confidence_for_auto_approval != new.min_confidence_for_auto_approval:
        changes.append(
            "Min Confidence: "
            f"{format_percent(old.min_confidence_for_auto_approval)} → "
            f"{format_percent(new.min_confidence_for_auto_approval)}"
        )
    if old.require_human_review != new.require_human_review:
        changes.append(
            f"Require Human Review: {old.require_human_review} → {new.require_human_review}"
        )
    if old.enable_audit != new.enable_audit:
        changes.append(f"Enable Audit: {old.enable_audit} → {new.enable_audit}")
    if old.enable_explainability != new.enable_explainability:
        changes.append(
            f"Enable Explainability: {old.enable_explainability} → {new.enable_explainability}"
        )
    if old.max_auto_approval_discount != new.max_auto_approval_discount:
        changes.append(
            "Max Auto-Approval Discount: "
            f"{old.max_auto_approval_discount}% → {new.max_auto_approval_discount}%"
        )
    if old.enable_incremental_learning != new.enable_incremental_learning:
        changes.append(
            "Enable Incremental Learning: "
            f"{old.enable_incremental_learning} → {new.enable_incremental_learning}"
        )
    if old.retraining_frequency_days != new.retraining_frequency_days:
        changes.append(
            "Retraining Frequency: "
            f"{old.retraining_frequency_days} days → {new.retraining_frequency_days} days"
        )
    return changes


def format_whole(value: Decimal) -> str:
    return str(Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_percent(value: Decimal) -> str:
    return f"{format_whole(Decimal(value) * 100)}%"
