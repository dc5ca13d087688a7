"""Fraud pattern constants, scoring weights and shared predicates."""

from .fraud_patterns import (
    DEFAULT_FRAUD_PATTERNS,
    DocumentQualityResult,
    FraudPatternConfig,
    flatten_address,
    is_duplicate_aadhaar,
    is_ghost_applicant,
    validate_document_quality,
)
from .scoring_config import RiskScoringConfig

__all__ = [
    "DEFAULT_FRAUD_PATTERNS",
    "DocumentQualityResult",
    "FraudPatternConfig",
    "RiskScoringConfig",
    "flatten_address",
    "is_duplicate_aadhaar",
    "is_ghost_applicant",
    "validate_document_quality",
]
