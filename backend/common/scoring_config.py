"""Weights used to score persisted welfare applications."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RiskScoringConfig:
    """Additive weights for the stored application risk score."""

    income_threshold: int = 10000
    income_points: int = 20
    rejection_points: int = 10
    unverified_document_points: int = 15
    min_score: int = 0
    max_score: int = 100
