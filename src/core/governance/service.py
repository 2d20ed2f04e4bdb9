import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from src.core.governance.descriptions import build_change_log, describe_governance
from src.core.governance.errors import (
    GovernanceCompanyNotFoundError,
    GovernanceValidationError,
    GovernanceVersionConflictError,
)
from src.core.governance.models import (
    GovernanceAuditRecord,
    GovernanceAuditResponse,
    GovernanceOperationalStatus,
    GovernancePolicy,
    GovernanceSettingsRecord,
    GovernanceSettingsResponse,
    GovernanceUpdateRequest,
)
from src.core.governance.presets import DEFAULT_PRESET, GovernancePreset, preset_request
from src.core.governance.repository import GovernanceRepository
from src.core.tenancy import CompanyRecord, CompanyRepository

logger = logging.getLogger(__name__)


class GovernanceService:
    def __init__(
        self,
        *,
        repository: GovernanceRepository,
        companies: CompanyRepository,
        require_expected_updated_at: bool = False,
        model_version: Optional[str] = None,
    ) -> None:
        self._repository = repository
        self._companies = companies
        self._require_expected_updated_at = require_expected_updated_at
        self._model_version = model_version

    def onboard_company(
        self,
        *,
        company_id: str,
        preset: Optional[GovernancePreset] = None,
        onboarded_by: Optional[str] = None,
        onboarded_at: Optional[datetime] = None,
    ) -> GovernanceSettingsResponse:
        self._require_company(company_id)
        request = preset_request(preset or DEFAULT_PRESET, company_id)
        validate_governance_policy(request)
        settings = _to_record(
            request, updated_by=onboarded_by, updated_at=onboarded_at or _utc_now()
        )
        self._repository.save_settings(settings)
        logger.info(
            "Governance settings initialized for company %s with preset %s",
            company_id,
            (preset or DEFAULT_PRESET).value,
        )
        return self._describe(settings)

    def get_settings(self, *, company_id: str) -> GovernanceSettingsResponse:
        return self._describe(self.load_settings(company_id=company_id))

    def load_settings(self, *, company_id: str) -> GovernanceSettingsRecord:
        company = self._require_company(company_id)
        settings = self._repository.get_settings(company_id=company_id)
        if settings is None:
            # Companies created before governance existed get defaults on first read.
            settings = _to_record(
                preset_request(DEFAULT_PRESET, company_id),
                updated_by=None,
                updated_at=company.created_at,
            )
            self._repository.save_settings(settings)
        return settings

    def update_settings(
        self,
        *,
        request: GovernanceUpdateRequest,
        updated_by: Optional[str],
        expected_updated_at: Optional[datetime] = None,
    ) -> GovernanceSettingsResponse:
        self._require_company(request.company_id)
        validate_governance_policy(request)

        current = self.load_settings(company_id=request.company_id)
        if expected_updated_at is None and self._require_expected_updated_at:
            raise GovernanceValidationError(
                "GOVERNANCE_EXPECTED_UPDATED_AT_REQUIRED: expected_updated_at is required"
            )
        if expected_updated_at is not None and expected_updated_at != current.updated_at:
            raise GovernanceVersionConflictError(
                "GOVERNANCE_SETTINGS_CHANGED: stored settings were updated since last read"
            )

        new_settings = _to_record(request, updated_by=updated_by, updated_at=_utc_now())
        self._repository.save_settings(new_settings)
        self._audit_change(current=current, new=new_settings, changed_by=updated_by)
        logger.info(
            "Governance settings updated for company %s by user %s",
            request.company_id,
            updated_by,
        )
        return self._describe(new_settings)

    def apply_preset(
        self,
        *,
        company_id: str,
        preset: GovernancePreset,
        updated_by: Optional[str],
    ) -> GovernanceSettingsResponse:
        return self.update_settings(
            request=preset_request(preset, company_id),
            updated_by=updated_by,
        )

    def list_audit(self, *, company_id: str) -> GovernanceAuditResponse:
        self._require_company(company_id)
        # Stored oldest first, so equal timestamps stay newest first after the stable sort.
        items = sorted(
            reversed(self._repository.list_audit(company_id=company_id)),
            key=lambda record: record.changed_at,
            reverse=True,
        )
        return GovernanceAuditResponse(company_id=company_id, total=len(items), items=items)

    def _audit_change(
        self,
        *,
        current: GovernanceSettingsRecord,
        new: GovernanceSettingsRecord,
        changed_by: Optional[str],
    ) -> None:
        if not (current.enable_audit or new.enable_audit):
            return
        old_policy = current.policy()
        new_policy = new.policy()
        changes = build_change_log(old_policy, new_policy)
        if not changes:
            return
        self._repository.append_audit(
            GovernanceAuditRecord(
                audit_id=f"gau_{uuid.uuid4().hex[:12]}",
                company_id=new.company_id,
                changed_by=changed_by,
                changed_at=new.updated_at,
                changes=changes,
                old_settings=old_policy.model_dump(mode="json"),
                new_settings=new_policy.model_dump(mode="json"),
            )
        )

    def _describe(self, settings: GovernanceSettingsRecord) -> GovernanceSettingsResponse:
        status = GovernanceOperationalStatus(
            is_available=settings.ai_enabled,
            last_checked=_utc_now(),
            model_version=self._model_version,
        )
        return describe_governance(settings, status=status)

    def _require_company(self, company_id: str) -> CompanyRecord:
        company = self._companies.get_company(company_id=company_id)
        if company is None:
            raise GovernanceCompanyNotFoundError(f"COMPANY_NOT_FOUND: {company_id}")
        return company


def validate_governance_policy(policy: GovernancePolicy) -> None:
    errors: list[str] = []
    if not 0 <= policy.autonomy_level <= 100:
        errors.append("Autonomy level must be between 0 and 100")
    if not Decimal("0") <= policy.max_risk_score_for_auto_approval <= Decimal("100"):
        errors.append("Max risk score for auto-approval must be between 0 and 100")
    if not Decimal("0") <= policy.min_confidence_for_auto_approval <= Decimal("1"):
        errors.append("Min confidence for auto-approval must be between 0 and 1")
    if not Decimal("0") <= policy.max_auto_approval_discount <= Decimal("100"):
        errors.append("Max auto-approval discount must be between 0 and 100")
    if policy.retraining_frequency_days < 0:
        errors.append("Retraining frequency cannot be negative")
    if policy.enable_incremental_learning and policy.retraining_frequency_days <= 0:
        errors.append(
            "Retraining frequency must be greater than 0 when incremental learning is enabled"
        )
    if policy.require_human_review and policy.autonomy_level > 50:
        errors.append(
            "Autonomy level should be low (≤50) when requiring human review for all decisions"
        )
    if not policy.ai_enabled and policy.autonomy_level > 0:
        errors.append("Autonomy level should be 0 when AI is disabled")
    if errors:
        raise GovernanceValidationError(f"GOVERNANCE_INVALID_SETTINGS: {'; '.join(errors)}")


def _to_record(
    request: GovernanceUpdateRequest,
    *,
    updated_by: Optional[str],
    updated_at: datetime,
) -> GovernanceSettingsRecord:
    return GovernanceSettingsRecord(
        **request.policy().model_dump(),
        company_id=request.company_id,
        updated_at=updated_at,
        updated_by=updated_by,
    )


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)
