from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from src.core.pricing.discount_items import DiscountRequestItemPayload
from src.core.pricing.money import MoneyPayload

GovernancePresetName = Literal["CONSERVATIVE", "BALANCED", "AGGRESSIVE", "DISABLED"]
AutoApprovalOutcome = Literal["AUTO_APPROVE", "HUMAN_REVIEW"]
AutoApprovalReasonCode = Literal[
    "ALL_CRITERIA_MET",
    "AI_DISABLED",
    "COMPANY_NOT_ACTIVE",
    "HUMAN_REVIEW_REQUIRED",
    "RISK_SCORE_ABOVE_THRESHOLD",
    "AI_RECOMMENDATION_UNAVAILABLE",
    "AI_CONFIDENCE_BELOW_THRESHOLD",
    "DISCOUNT_ABOVE_THRESHOLD",
    "CUSTOMER_NOT_ACTIVE",
    "ORDER_VALUE_ABOVE_LIMIT",
    "NEGATIVE_MARGIN",
    "TOO_MANY_ITEMS",
    "CURRENCY_MISMATCH",
]


class GovernancePolicy(BaseModel):
    """Full desired governance state; updates always replace every field."""

    ai_enabled: bool = Field(
        default=True,
        description="Enable AI assistance for this company.",
        examples=[True],
    )
    autonomy_level: int = Field(
        default=50,
        description=(
            "Autonomy level between 0 and 100. 0 means the AI only recommends, "
            "100 means full autonomy within guardrails."
        ),
        examples=[50],
    )
    max_risk_score_for_auto_approval: Decimal = Field(
        default=Decimal("60"),
        description="Highest risk score (0-100) still eligible for auto-approval.",
        examples=["60"],
    )
    min_confidence_for_auto_approval: Decimal = Field(
        default=Decimal("0.75"),
        description="Lowest AI confidence (0-1) still eligible for auto-approval.",
        examples=["0.75"],
    )
    require_human_review: bool = Field(
        default=False,
        description="Route every decision to a human regardless of thresholds.",
        examples=[False],
    )
    enable_audit: bool = Field(
        default=True,
        description="Record governance changes and AI decisions in the audit trail.",
        examples=[True],
    )
    enable_explainability: bool = Field(
        default=True,
        description="Attach explanations to AI decisions.",
        examples=[True],
    )
    max_auto_approval_discount: Decimal = Field(
        default=Decimal("15"),
        description="Highest discount percentage (0-100) the AI may auto-approve.",
        examples=["15"],
    )
    enable_incremental_learning: bool = Field(
        default=True,
        description="Continuously learn from decisions and outcomes.",
        examples=[True],
    )
    retraining_frequency_days: int = Field(
        default=30,
        description="Model retraining cadence in days.",
        examples=[30],
    )


class GovernanceUpdateRequest(GovernancePolicy):
    company_id: str = Field(description="Company the policy applies to.", examples=["cmp_acme"])

    def policy(self) -> GovernancePolicy:
        return GovernancePolicy.model_validate(self.model_dump(exclude={"company_id"}))


class GovernanceSettingsUpdateBody(GovernancePolicy):
    expected_updated_at: Optional[datetime] = Field(
        default=None,
        description=(
            "Optional `updated_at` value the caller last read. When supplied the update is "
            "rejected if the stored settings changed since."
        ),
        examples=["2026-02-19T12:00:00+00:00"],
    )

    @model_validator(mode="before")
    @classmethod
    def require_full_policy(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        missing = [name for name in GovernancePolicy.model_fields if name not in data]
        if missing:
            raise ValueError(
                f"GOVERNANCE_SETTINGS_INCOMPLETE: missing fields {', '.join(missing)}"
            )
        return data


class GovernanceSettingsRecord(GovernancePolicy):
    company_id: str = Field(description="Internal owning company.", examples=["cmp_acme"])
    updated_at: datetime = Field(
        description="Internal last update timestamp.", examples=["2026-02-19T12:00:00+00:00"]
    )
    updated_by: Optional[str] = Field(
        default=None, description="Internal actor of the last update.", examples=["usr_admin"]
    )

    def policy(self) -> GovernancePolicy:
        return GovernancePolicy.model_validate(
            self.model_dump(exclude={"company_id", "updated_at", "updated_by"})
        )


class GovernanceOperationalStatus(BaseModel):
    is_available: bool = Field(description="AI service is enabled and reachable.", examples=[True])
    last_checked: datetime = Field(description="When availability was evaluated.")
    model_version: Optional[str] = Field(
        default=None, description="Current model version, when configured.", examples=["v3"]
    )


class GovernanceSettingsResponse(GovernancePolicy):
    company_id: str = Field(description="Company identifier.", examples=["cmp_acme"])
    autonomy_description: str = Field(
        description="Tier description derived from the autonomy level.",
        examples=["Moderate: AI can auto-approve medium-risk decisions within guardrails"],
    )
    summary: str = Field(
        description="Human-readable governance summary derived from current values.",
        examples=["Auto-approval enabled for risk ≤60, discounts ≤15%, confidence ≥75%"],
    )
    next_retraining_date: Optional[datetime] = Field(
        default=None, description="Next scheduled retraining when incremental learning is on."
    )
    updated_at: datetime = Field(description="Last time settings were updated.")
    updated_by: Optional[str] = Field(default=None, description="Actor of the last update.")
    status: GovernanceOperationalStatus = Field(description="AI operational status.")


class GovernancePresetDefinition(BaseModel):
    preset: GovernancePresetName = Field(description="Preset name.", examples=["BALANCED"])
    description: str = Field(description="What the preset is for.")
    policy: GovernancePolicy = Field(description="Exact parameter bundle applied by the preset.")


class GovernancePresetCatalogResponse(BaseModel):
    total: int = Field(description="Number of presets.", examples=[4])
    items: List[GovernancePresetDefinition] = Field(description="Available presets.")


class GovernanceAuditRecord(BaseModel):
    audit_id: str = Field(description="Audit entry identifier.", examples=["gau_0001"])
    company_id: str = Field(description="Company whose settings changed.", examples=["cmp_acme"])
    changed_by: Optional[str] = Field(default=None, description="Actor id.", examples=["usr_1"])
    changed_at: datetime = Field(description="Change timestamp.")
    changes: List[str] = Field(
        description="Human-readable field changes.",
        examples=[["Autonomy Level: 50 → 85"]],
    )
    old_settings: Dict[str, Any] = Field(description="Policy before the change.")
    new_settings: Dict[str, Any] = Field(description="Policy after the change.")


class GovernanceAuditResponse(BaseModel):
    company_id: str = Field(description="Company identifier.", examples=["cmp_acme"])
    total: int = Field(description="Number of audit entries.", examples=[1])
    items: List[GovernanceAuditRecord] = Field(description="Audit entries, newest first.")


class AutoApprovalThresholds(BaseModel):
    max_risk_score: Decimal = Field(description="Applied risk score ceiling.", examples=["60"])
    min_confidence: Decimal = Field(description="Applied confidence floor.", examples=["0.75"])
    max_discount_percentage: Decimal = Field(
        description="Applied discount ceiling.", examples=["15"]
    )
    max_order_value: Decimal = Field(
        description="Order value ceiling for auto-approval.", examples=["100000"]
    )
    max_items: int = Field(description="Item count ceiling for auto-approval.", examples=[50])


class AutoApprovalDecision(BaseModel):
    outcome: AutoApprovalOutcome = Field(description="Routing decision.", examples=["HUMAN_REVIEW"])
    reason_code: AutoApprovalReasonCode = Field(
        description="First check that decided the outcome.",
        examples=["RISK_SCORE_ABOVE_THRESHOLD"],
    )
    reason: str = Field(
        description="Human-readable reason.",
        examples=["Risk score (72.00) exceeds auto-approval threshold (60.00)"],
    )
    risk_score: Decimal = Field(description="Risk score evaluated.", examples=["42"])
    ai_confidence: Optional[Decimal] = Field(
        default=None, description="AI confidence evaluated.", examples=["0.82"]
    )
    thresholds: AutoApprovalThresholds = Field(description="Thresholds in force.")
    items: List[DiscountRequestItemPayload] = Field(description="Priced line items.")
    total_base_price: Optional[MoneyPayload] = Field(
        default=None, description="Order total before discount."
    )
    total_final_price: Optional[MoneyPayload] = Field(
        default=None, description="Order total after discount."
    )
    total_discount_amount: Optional[MoneyPayload] = Field(
        default=None, description="Order discount total."
    )
    explanation: List[str] = Field(
        default_factory=list,
        description="Checks evaluated, present when explainability is enabled.",
    )
