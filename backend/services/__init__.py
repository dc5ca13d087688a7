"""Service layer exports."""

from .application_risk_scorer import ApplicationRiskScorer, compute_risk_score
from .application_service import ApplicationService
from .fraud_detector import FraudDetector

__all__ = [
    "ApplicationRiskScorer",
    "ApplicationService",
    "FraudDetector",
    "compute_risk_score",
]
