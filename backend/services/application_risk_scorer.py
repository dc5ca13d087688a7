"""Risk score for persisted applications, recomputed on every save."""

import logging
from typing import Optional

from common.scoring_config import RiskScoringConfig
from models.applications import ApplicationModel
from models.base import utc_now
from models.enums import ApplicationStatus


logger = logging.getLogger(__name__)


class ApplicationRiskScorer:
    """Derive the stored 0-100 risk score from an application's own fields."""

    def __init__(self, config: Optional[RiskScoringConfig] = None) -> None:
        self._config = config or RiskScoringConfig()

    @property
    def config(self) -> RiskScoringConfig:
        return self._config

    def compute_risk_score(self, application: ApplicationModel) -> int:
        """Return the additive, clamped risk score for `application`.

        High declared income, past rejections and unverified documents each add
        points. The result depends only on the application's current state.
        """
        cfg = self._config
        score = 0

        if application.application_data.monthly_income > cfg.income_threshold:
            score += cfg.income_points

        rejection_count = sum(
            1 for entry in application.verification_history if entry.status == ApplicationStatus.REJECTED
        )
        score += rejection_count * cfg.rejection_points

        unverified_count = sum(1 for document in application.documents if not document.verified)
        score += unverified_count * cfg.unverified_document_points

        return max(cfg.min_score, min(cfg.max_score, score))

    def before_save(self, application: ApplicationModel) -> ApplicationModel:
        """Overwrite the stored score and touch `last_updated` ahead of a write."""
        score = self.compute_risk_score(application)
        now = utc_now()
        application.risk_score = score
        application.last_updated = now
        application.updated_at = now
        logger.debug(
            "Risk score recomputed application_id=%s score=%d",
            application.application_id,
            score,
        )
        return application


def compute_risk_score(application: ApplicationModel, config: Optional[RiskScoringConfig] = None) -> int:
    """Functional shortcut for `ApplicationRiskScorer(config).compute_risk_score`."""
    return ApplicationRiskScorer(config).compute_risk_score(application)
