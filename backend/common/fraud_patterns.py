"""Fraud pattern constants and the pure predicates shared by fraud checks and scoring.

Both the submission-time verdict and the aggregate risk score call the same
predicates below, so a pattern can never be judged differently by the two.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import re
from typing import Any, Mapping, Optional, Tuple


logger = logging.getLogger(__name__)

SCORE_FLOOR = 0
SCORE_CEILING = 100


@dataclass(frozen=True)
class FraudPatternConfig:
    """Deployment-tunable fraud heuristics. Defaults are the scheme's reference lists."""

    duplicate_aadhaar_pattern: str = r"^\d{11}0$"
    ghost_names: Tuple[str, ...] = ("JAN", "RAM", "RAJ", "KUMAR", "DEVI")
    ghost_address_tokens: Tuple[str, ...] = ("NA", "NOT AVAILABLE", "TEMPORARY")
    high_risk_districts: Tuple[str, ...] = ("Bokaro", "Palamu", "Pakur", "Godda")

    similar_name_threshold: int = 3
    location_application_threshold: int = 100
    high_risk_score_threshold: int = 80

    district_points: int = 20
    similar_name_points: int = 15
    location_points: int = 10
    duplicate_aadhaar_points: int = 40
    ghost_applicant_points: int = 40
    max_score: int = 100
    fallback_risk_score: int = 50

    lookup_timeout_sec: float = 5.0

    def __post_init__(self) -> None:
        for name in ("max_score", "fallback_risk_score"):
            value = getattr(self, name)
            if not SCORE_FLOOR <= value <= SCORE_CEILING:
                raise ValueError(
                    "{0} must be between {1} and {2}, got {3}".format(name, SCORE_FLOOR, SCORE_CEILING, value)
                )


DEFAULT_FRAUD_PATTERNS = FraudPatternConfig()


@dataclass(frozen=True)
class DocumentQualityResult:
    """Outcome of a single document quality check."""

    valid: bool
    reason: str


def _field(source: Any, name: str) -> Any:
    """Read `name` from a mapping or an attribute-style object."""
    if source is None:
        return None
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def is_duplicate_aadhaar(aadhaar: Optional[str], config: FraudPatternConfig = DEFAULT_FRAUD_PATTERNS) -> bool:
    """Return True when the Aadhaar number matches the known fake-ID shape."""
    if not aadhaar:
        return False
    return re.fullmatch(config.duplicate_aadhaar_pattern, str(aadhaar), flags=re.ASCII) is not None


def flatten_address(address: Any) -> str:
    """Collapse a string or structured address into one space-joined string."""
    if address is None:
        return ""
    if isinstance(address, str):
        return address
    if hasattr(address, "model_dump"):
        address = address.model_dump()
    if isinstance(address, Mapping):
        return " ".join(str(value) for value in address.values() if value is not None)
    return str(address)


def address_district(address: Any) -> Optional[str]:
    """Return the district of a structured address; plain strings carry none."""
    if address is None or isinstance(address, str):
        return None
    return _field(address, "district")


def is_ghost_applicant(
    name: Optional[str],
    address: Any,
    config: FraudPatternConfig = DEFAULT_FRAUD_PATTERNS,
) -> bool:
    """Return True when the name or address looks like a placeholder identity."""
    if name:
        upper_name = name.upper()
        if any(token in upper_name for token in config.ghost_names):
            return True

    if address:
        upper_address = flatten_address(address).upper()
        if any(token in upper_address for token in config.ghost_address_tokens):
            return True

    return False


def validate_document_quality(document: Any) -> DocumentQualityResult:
    """Check one submitted document.

    Placeholder: every document passes until a content analyser is wired in.
    """
    logger.debug("Document quality check type=%s", _field(document, "type"))
    return DocumentQualityResult(valid=True, reason="Document quality verified")


def first_name_token(name: Optional[str]) -> Optional[str]:
    """Return the first whitespace-delimited token of a name."""
    if not name:
        return None
    parts = name.split()
    return parts[0] if parts else None
