"""Submission-time fraud detection for welfare applications.

`detect_fraud` runs the pattern checks first, then the repository-backed
aggregate score, and never raises: a failed lookup degrades to a neutral
medium-risk result so the application goes to human review instead of being
silently approved or blocked.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
from typing import Any, Awaitable, Dict, List, Optional, TypeVar, Union

from common.fraud_patterns import (
    FraudPatternConfig,
    address_district,
    first_name_token,
    is_duplicate_aadhaar,
    is_ghost_applicant,
    validate_document_quality,
)
from models.enums import ACTIVE_APPLICATION_STATUSES
from models.exceptions import RepositoryError
from models.fraud import FraudCheckInput, FraudCheckResult
from models.repositories import FraudLookupRepository


logger = logging.getLogger(__name__)

T = TypeVar("T")

REASON_DUPLICATE_AADHAAR = "Suspicious Aadhaar number pattern detected"
REASON_MULTIPLE_APPLICATIONS = "Multiple applications detected for the same Aadhaar"
REASON_GHOST_APPLICANT = "Ghost applicant pattern detected"
REASON_HIGH_RISK_SCORE = "High risk score"


@dataclass(frozen=True)
class DuplicateApplicationCheck:
    """Active-application count for the Aadhaar holder."""

    is_duplicate: bool
    application_count: int = 0


class FraudDetector:
    """Combine pattern heuristics and repository lookups into a fraud verdict."""

    def __init__(self, repository: FraudLookupRepository, config: Optional[FraudPatternConfig] = None) -> None:
        """Initialize detector dependencies.

        Args:
            repository: Lookup collaborator over users and applications.
            config: Pattern lists, weights and thresholds.
        """
        self._repository = repository
        self._config = config or FraudPatternConfig()

    @property
    def config(self) -> FraudPatternConfig:
        return self._config

    async def _lookup(self, awaitable: Awaitable[T], query_name: str) -> T:
        """Await one repository query under the configured timeout."""
        try:
            return await asyncio.wait_for(awaitable, timeout=self._config.lookup_timeout_sec)
        except asyncio.TimeoutError as exc:
            logger.warning(
                "Repository lookup timed out query=%s timeout_sec=%s",
                query_name,
                self._config.lookup_timeout_sec,
            )
            raise RepositoryError("Lookup timed out: {0}".format(query_name)) from exc

    @staticmethod
    def _coerce(data: Union[FraudCheckInput, Dict[str, Any]]) -> FraudCheckInput:
        if isinstance(data, FraudCheckInput):
            return data
        return FraudCheckInput.model_validate(data)

    async def detect_fraud(self, data: Union[FraudCheckInput, Dict[str, Any]]) -> FraudCheckResult:
        """Run every check in order and return the verdict with its reasons."""
        try:
            check_input = self._coerce(data)
            is_fraud = False
            reasons: List[str] = []

            if is_duplicate_aadhaar(check_input.aadhaar, self._config):
                is_fraud = True
                reasons.append(REASON_DUPLICATE_AADHAAR)

            duplicate_check = await self.check_duplicate_applications(check_input.aadhaar)
            if duplicate_check.is_duplicate:
                is_fraud = True
                reasons.append(REASON_MULTIPLE_APPLICATIONS)

            if is_ghost_applicant(check_input.name, check_input.address, self._config):
                is_fraud = True
                reasons.append(REASON_GHOST_APPLICANT)

            for document in check_input.documents or []:
                quality = validate_document_quality(document)
                if not quality.valid:
                    is_fraud = True
                    reasons.append(quality.reason)
                    break

            # Runs after the pattern checks so the threshold only catches otherwise clean submissions.
            risk_score = await self.calculate_risk_score(check_input)
            if risk_score > self._config.high_risk_score_threshold and not is_fraud:
                is_fraud = True
                reasons.append(REASON_HIGH_RISK_SCORE)

            result = FraudCheckResult.from_checks(is_fraud=is_fraud, reasons=reasons, risk_score=risk_score)
            logger.info(
                "Fraud check completed is_fraud=%s risk_score=%d reasons=%s",
                result.is_fraud,
                result.risk_score,
                result.reasons,
            )
            return result
        except Exception:
            logger.exception(
                "Fraud detection failed; returning medium-risk fallback. Fraud checks are degraded."
            )
            return FraudCheckResult.internal_error(self._config.fallback_risk_score)

    async def check_duplicate_applications(self, aadhaar: Optional[str]) -> DuplicateApplicationCheck:
        """Report whether the Aadhaar holder already has more than one active application."""
        if not aadhaar:
            return DuplicateApplicationCheck(is_duplicate=False)

        user = await self._lookup(self._repository.find_user_by_aadhaar(aadhaar), "find_user_by_aadhaar")
        if user is None:
            return DuplicateApplicationCheck(is_duplicate=False)

        count = await self._lookup(
            self._repository.count_applications_by_user_and_statuses(user.user_id, ACTIVE_APPLICATION_STATUSES),
            "count_applications_by_user_and_statuses",
        )
        return DuplicateApplicationCheck(is_duplicate=count > 1, application_count=count)

    async def calculate_risk_score(self, data: Union[FraudCheckInput, Dict[str, Any]]) -> int:
        """Return the submission-time aggregate risk score in [0, 100].

        Pattern matches already reported by `detect_fraud` are counted here
        again; any failure yields the fallback medium score.
        """
        cfg = self._config
        try:
            check_input = self._coerce(data)
            score = 0
            address = check_input.structured_address

            district = address_district(check_input.address)
            if district and district in cfg.high_risk_districts:
                score += cfg.district_points

            similar_names = await self.count_similar_names(check_input.name)
            if similar_names > cfg.similar_name_threshold:
                score += cfg.similar_name_points

            location_count = await self.count_location_applications(
                address.district if address else None,
                address.block if address else None,
                address.panchayat if address else None,
            )
            if location_count > cfg.location_application_threshold:
                score += cfg.location_points

            if is_duplicate_aadhaar(check_input.aadhaar, cfg):
                score += cfg.duplicate_aadhaar_points

            if is_ghost_applicant(check_input.name, check_input.address, cfg):
                score += cfg.ghost_applicant_points

            return min(score, cfg.max_score)
        except Exception:
            logger.warning(
                "Risk scoring failed; using default medium risk score=%d",
                cfg.fallback_risk_score,
                exc_info=True,
            )
            return cfg.fallback_risk_score

    async def count_similar_names(self, name: Optional[str]) -> int:
        """Count registered users sharing the applicant's first name token."""
        fragment = first_name_token(name)
        if not fragment:
            return 0
        return await self._lookup(
            self._repository.count_users_by_name_fragment(fragment),
            "count_users_by_name_fragment",
        )

    async def count_location_applications(
        self,
        district: Optional[str],
        block: Optional[str],
        panchayat: Optional[str] = None,
    ) -> int:
        """Count applications already filed from the same district and block."""
        if not district or not block:
            return 0
        return await self._lookup(
            self._repository.count_applications_by_location(district, block, panchayat or None),
            "count_applications_by_location",
        )
