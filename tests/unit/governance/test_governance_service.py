from datetime import timedelta
from decimal import Decimal

import pytest

from src.core.governance import (
    GovernanceCompanyNotFoundError,
    GovernancePolicy,
    GovernancePreset,
    GovernanceService,
    GovernanceUpdateRequest,
    GovernanceValidationError,
    GovernanceVersionConflictError,
    validate_governance_policy,
)
from src.infrastructure.governance import InMemoryGovernanceRepository
from tests.factories import CREATED_AT


def _request(company_id: str = "cmp_one", **overrides) -> GovernanceUpdateRequest:
    return GovernanceUpdateRequest(company_id=company_id, **overrides)


def test_first_read_initializes_balanced_defaults(governance_service):
    settings = governance_service.get_settings(company_id="cmp_one")

    assert settings.autonomy_level == 50
    assert settings.max_risk_score_for_auto_approval == Decimal("60")
    assert settings.updated_at == CREATED_AT
    assert settings.updated_by is None
    assert settings.summary == (
        "Auto-approval enabled for risk ≤60, discounts ≤15%, confidence ≥75%"
    )
    assert settings.next_retraining_date == CREATED_AT + timedelta(days=30)


def test_first_read_persists_defaults_once(governance_service):
    first = governance_service.load_settings(company_id="cmp_one")
    second = governance_service.load_settings(company_id="cmp_one")

    assert first == second


def test_unknown_company_is_rejected(governance_service):
    with pytest.raises(GovernanceCompanyNotFoundError, match="COMPANY_NOT_FOUND: cmp_missing"):
        governance_service.get_settings(company_id="cmp_missing")


def test_onboard_company_applies_requested_preset(governance_service):
    settings = governance_service.onboard_company(
        company_id="cmp_two",
        preset=GovernancePreset.CONSERVATIVE,
        onboarded_by="usr_admin",
    )

    assert settings.autonomy_level == 10
    assert settings.require_human_review is True
    assert settings.summary == "All decisions require human review"
    assert settings.updated_by == "usr_admin"


def test_onboard_company_can_backdate_settings_to_company_creation(governance_service):
    settings = governance_service.onboard_company(
        company_id="cmp_two", preset=GovernancePreset.AGGRESSIVE, onboarded_at=CREATED_AT
    )

    assert settings.updated_at == CREATED_AT
    assert settings.next_retraining_date == CREATED_AT + timedelta(days=15)
    assert governance_service.get_settings(company_id="cmp_two").autonomy_level == 85


def test_update_replaces_every_field_and_reports_actor(governance_service):
    updated = governance_service.update_settings(
        request=_request(autonomy_level=85, max_auto_approval_discount=Decimal("30")),
        updated_by="usr_1",
    )

    assert updated.autonomy_level == 85
    assert updated.max_auto_approval_discount == Decimal("30")
    assert updated.updated_by == "usr_1"
    assert updated.autonomy_description.startswith("High:")
    assert updated.updated_at > CREATED_AT


def test_update_is_scoped_to_request_company(governance_service):
    governance_service.update_settings(request=_request(autonomy_level=80), updated_by="usr_1")

    assert governance_service.get_settings(company_id="cmp_two").autonomy_level == 50


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"autonomy_level": 101}, "Autonomy level must be between 0 and 100"),
        ({"autonomy_level": -1}, "Autonomy level must be between 0 and 100"),
        (
            {"max_risk_score_for_auto_approval": Decimal("100.5")},
            "Max risk score for auto-approval must be between 0 and 100",
        ),
        (
            {"min_confidence_for_auto_approval": Decimal("1.2")},
            "Min confidence for auto-approval must be between 0 and 1",
        ),
        (
            {"max_auto_approval_discount": Decimal("-1")},
            "Max auto-approval discount must be between 0 and 100",
        ),
        ({"retraining_frequency_days": -5}, "Retraining frequency cannot be negative"),
        (
            {"retraining_frequency_days": 0},
            "Retraining frequency must be greater than 0 when incremental learning is enabled",
        ),
        (
            {"require_human_review": True, "autonomy_level": 60},
            "Autonomy level should be low (≤50) when requiring human review for all decisions",
        ),
        (
            {"ai_enabled": False, "autonomy_level": 10},
            "Autonomy level should be 0 when AI is disabled",
        ),
    ],
)
def test_validation_rejects_invalid_policies(overrides, message):
    with pytest.raises(GovernanceValidationError) as caught:
        validate_governance_policy(GovernancePolicy(**overrides))

    assert str(caught.value).startswith("GOVERNANCE_INVALID_SETTINGS: ")
    assert message in str(caught.value)


def test_validation_reports_every_violation_together():
    with pytest.raises(GovernanceValidationError) as caught:
        validate_governance_policy(
            GovernancePolicy(autonomy_level=150, min_confidence_for_auto_approval=Decimal("2"))
        )

    assert "Autonomy level must be between 0 and 100" in str(caught.value)
    assert "Min confidence for auto-approval must be between 0 and 1" in str(caught.value)


def test_invalid_update_leaves_stored_settings_untouched(governance_service):
    before = governance_service.load_settings(company_id="cmp_one")

    with pytest.raises(GovernanceValidationError):
        governance_service.update_settings(
            request=_request(autonomy_level=85, max_risk_score_for_auto_approval=Decimal("120")),
            updated_by="usr_1",
        )

    assert governance_service.load_settings(company_id="cmp_one") == before
    assert governance_service.list_audit(company_id="cmp_one").total == 0


def test_update_with_stale_expected_updated_at_conflicts(governance_service):
    before = governance_service.load_settings(company_id="cmp_one")
    governance_service.update_settings(request=_request(autonomy_level=70), updated_by="usr_1")

    with pytest.raises(GovernanceVersionConflictError, match="GOVERNANCE_SETTINGS_CHANGED"):
        governance_service.update_settings(
            request=_request(autonomy_level=30),
            updated_by="usr_2",
            expected_updated_at=before.updated_at,
        )


def test_update_with_current_expected_updated_at_succeeds(governance_service):
    current = governance_service.load_settings(company_id="cmp_one")

    updated = governance_service.update_settings(
        request=_request(autonomy_level=30),
        updated_by="usr_1",
        expected_updated_at=current.updated_at,
    )

    assert updated.autonomy_level == 30


def test_expected_updated_at_can_be_mandatory(companies):
    service = GovernanceService(
        repository=InMemoryGovernanceRepository(),
        companies=companies,
        require_expected_updated_at=True,
    )

    with pytest.raises(GovernanceValidationError, match="GOVERNANCE_EXPECTED_UPDATED_AT_REQUIRED"):
        service.update_settings(request=_request(autonomy_level=30), updated_by="usr_1")


def test_apply_preset_records_audit_entry(governance_service):
    governance_service.apply_preset(
        company_id="cmp_one", preset=GovernancePreset.AGGRESSIVE, updated_by="usr_1"
    )

    audit = governance_service.list_audit(company_id="cmp_one")

    assert audit.total == 1
    entry = audit.items[0]
    assert entry.changed_by == "usr_1"
    assert "Autonomy Level: 50 → 85" in entry.changes
    assert entry.old_settings["autonomy_level"] == 50
    assert entry.new_settings["autonomy_level"] == 85


def test_audit_is_newest_first(governance_service):
    governance_service.update_settings(request=_request(autonomy_level=60), updated_by="usr_1")
    governance_service.update_settings(request=_request(autonomy_level=70), updated_by="usr_2")

    items = governance_service.list_audit(company_id="cmp_one").items

    assert [entry.changed_by for entry in items] == ["usr_2", "usr_1"]


def test_unchanged_update_is_not_audited(governance_service):
    governance_service.update_settings(request=_request(), updated_by="usr_1")

    assert governance_service.list_audit(company_id="cmp_one").total == 0


def test_audit_skipped_when_disabled_before_and_after(governance_service):
    governance_service.update_settings(request=_request(enable_audit=False), updated_by="usr_1")
    governance_service.update_settings(
        request=_request(enable_audit=False, autonomy_level=40), updated_by="usr_1"
    )

    entries = governance_service.list_audit(company_id="cmp_one").items

    assert len(entries) == 1
    assert entries[0].changes == ["Enable Audit: True → False"]


def test_operational_status_reports_model_version(companies):
    service = GovernanceService(
        repository=InMemoryGovernanceRepository(),
        companies=companies,
        model_version="pricing-v3",
    )

    status = service.get_settings(company_id="cmp_one").status

    assert status.is_available is True
    assert status.model_version == "pricing-v3"
