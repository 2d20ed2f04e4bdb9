"""Route a discount request to auto-approval or human review.

Checks run in a fixed order and the first failing one decides the outcome.
`require_human_review` is evaluated before any threshold, so a policy that
demands review never auto-approves whatever its thresholds say.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Sequence

from src.core.governance.descriptions import format_percent
from src.core.governance.models import (
    AutoApprovalDecision,
    AutoApprovalReasonCode,
    AutoApprovalThresholds,
    GovernancePolicy,
)
from src.core.pricing import CurrencyMismatchError, DiscountRequestItem, Money

MAX_ORDER_VALUE_FOR_AUTO_APPROVAL = Decimal("100000")
MAX_ITEMS_FOR_AUTO_APPROVAL = 50


@dataclass(frozen=True)
class AutoApprovalFacts:
    items: Sequence[DiscountRequestItem]
    risk_score: Decimal
    ai_confidence: Optional[Decimal] = None
    estimated_margin_percentage: Optional[Decimal] = None
    customer_active: bool = True
    company_active: bool = True


@dataclass
class _Totals:
    base: Optional[Money] = None
    final: Optional[Money] = None
    discount: Optional[Money] = None
    currency_mismatch: bool = False


@dataclass
class _Trace:
    enabled: bool
    lines: list[str] = field(default_factory=list)

    def passed(self, line: str) -> None:
        if self.enabled:
            self.lines.append(line)


def evaluate_auto_approval(
    policy: GovernancePolicy, facts: AutoApprovalFacts
) -> AutoApprovalDecision:
    thresholds = AutoApprovalThresholds(
        max_risk_score=policy.max_risk_score_for_auto_approval,
        min_confidence=policy.min_confidence_for_auto_approval,
        max_discount_percentage=policy.max_auto_approval_discount,
        max_order_value=MAX_ORDER_VALUE_FOR_AUTO_APPROVAL,
        max_items=MAX_ITEMS_FOR_AUTO_APPROVAL,
    )
    totals = _compute_totals(facts.items)
    trace = _Trace(enabled=policy.enable_explainability)

    def decide(code: AutoApprovalReasonCode, reason: str) -> AutoApprovalDecision:
        if trace.enabled:
            trace.lines.append(reason)
        return AutoApprovalDecision(
            outcome="AUTO_APPROVE" if code == "ALL_CRITERIA_MET" else "HUMAN_REVIEW",
            reason_code=code,
            reason=reason,
            risk_score=facts.risk_score,
            ai_confidence=facts.ai_confidence,
            thresholds=thresholds,
            items=[item.to_payload() for item in facts.items],
            total_base_price=totals.base.to_payload() if totals.base else None,
            total_final_price=totals.final.to_payload() if totals.final else None,
            total_discount_amount=totals.discount.to_payload() if totals.discount else None,
            explanation=list(trace.lines),
        )

    if not policy.ai_enabled:
        return decide("AI_DISABLED", "AI is disabled for this company")
    if not facts.company_active:
        return decide("COMPANY_NOT_ACTIVE", "Company is not active")
    if policy.require_human_review:
        return decide("HUMAN_REVIEW_REQUIRED", "All decisions require human review")
    trace.passed("Governance policy allows auto-approval")

    if facts.risk_score > thresholds.max_risk_score:
        return decide(
            "RISK_SCORE_ABOVE_THRESHOLD",
            f"Risk score ({facts.risk_score:.2f}) exceeds auto-approval threshold "
            f"({thresholds.max_risk_score:.2f})",
        )
    trace.passed(
        f"Risk score ({facts.risk_score:.2f}) within threshold ({thresholds.max_risk_score:.2f})"
    )

    if facts.ai_confidence is None:
        return decide("AI_RECOMMENDATION_UNAVAILABLE", "AI recommendation not available")
    if facts.ai_confidence < thresholds.min_confidence:
        return decide(
            "AI_CONFIDENCE_BELOW_THRESHOLD",
            f"AI confidence ({format_percent(facts.ai_confidence)}) is below minimum "
            f"threshold ({format_percent(thresholds.min_confidence)})",
        )
    trace.passed(f"AI confidence ({format_percent(facts.ai_confidence)}) meets threshold")

    over_limit = [
        item
        for item in facts.items
        if item.discount_percentage > thresholds.max_discount_percentage
    ]
    if over_limit:
        worst = max(item.discount_percentage for item in over_limit)
        return decide(
            "DISCOUNT_ABOVE_THRESHOLD",
            f"Discount ({worst:.2f}%) exceeds auto-approval limit "
            f"({thresholds.max_discount_percentage:.2f}%)",
        )
    trace.passed("All discounts within auto-approval limit")

    if not facts.customer_active:
        return decide("CUSTOMER_NOT_ACTIVE", "Customer is not active")
    if totals.currency_mismatch:
        return decide("CURRENCY_MISMATCH", "Items are priced in different currencies")
    if totals.base is not None and totals.base.amount > thresholds.max_order_value:
        return decide(
            "ORDER_VALUE_ABOVE_LIMIT",
            f"Order value ({totals.base}) exceeds auto-approval limit",
        )
    if facts.estimated_margin_percentage is not None and facts.estimated_margin_percentage < 0:
        return decide("NEGATIVE_MARGIN", "Negative margin detected")
    if len(facts.items) > thresholds.max_items:
        return decide("TOO_MANY_ITEMS", "Too many items in request for auto-approval")
    trace.passed("Safety checks passed")

    return decide(
        "ALL_CRITERIA_MET",
        "All auto-approval criteria met: risk score within limits, guardrails validated, "
        "and AI confidence sufficient",
    )


def _compute_totals(items: Sequence[DiscountRequestItem]) -> _Totals:
    if not items:
        return _Totals()
    currency = items[0].unit_base_price.currency
    base = Money.zero(currency)
    final = Money.zero(currency)
    try:
        for item in items:
            base = base + item.total_base_price()
            final = final + item.total_final_price()
    except CurrencyMismatchError:
        return _Totals(currency_mismatch=True)
    return _Totals(base=base, final=final, discount=base - final)
