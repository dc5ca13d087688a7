"""Configuration loading utilities for YAML-based application settings."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Tuple

import yaml

from common.fraud_patterns import SCORE_CEILING, SCORE_FLOOR, FraudPatternConfig
from common.scoring_config import RiskScoringConfig

from .logging_config import get_logger


logger = get_logger(__name__)
_BASE_DIR = Path(__file__).resolve().parent.parent
_CONFIG_PATH = _BASE_DIR / "config.yml"


@dataclass(frozen=True)
class AppSettings:
    """Application settings loaded from YAML configuration file."""

    app_name: str
    debug: bool
    log_level: str
    firebase_enabled: bool
    firebase_project_id: Optional[str]
    firebase_credentials_path: Optional[str]
    users_collection: str
    applications_collection: str
    fraud: FraudPatternConfig = field(default_factory=FraudPatternConfig)
    risk_scoring: RiskScoringConfig = field(default_factory=RiskScoringConfig)


def _to_bool(value: Any, default: bool = False) -> bool:
    """Convert value to bool with a default fallback."""
    try:
        if isinstance(value, bool):
            return value
        return value.strip().lower() in {"1", "true", "yes", "on"}
    except (AttributeError, ValueError):
        logger.warning("Invalid boolean value '%s'. Using default=%s", value, default)
        return default


def _to_int(value: Any, default: int) -> int:
    """Convert value to int with a default fallback."""
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Invalid integer value '%s'. Using default=%s", value, default)
        return default


def _to_score(value: Any, default: int) -> int:
    """Convert value to an int clamped to the 0..100 score range."""
    score = _to_int(value, default)
    clamped = max(SCORE_FLOOR, min(SCORE_CEILING, score))
    if clamped != score:
        logger.warning("Score value %s outside %d..%d. Using %d", score, SCORE_FLOOR, SCORE_CEILING, clamped)
    return clamped


def _to_float(value: Any, default: float) -> float:
    """Convert value to float with a default fallback."""
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning("Invalid float value '%s'. Using default=%s", value, default)
        return default


def _to_tuple(value: Any, default: Tuple[str, ...]) -> Tuple[str, ...]:
    """Convert list-like or comma-separated value to a tuple of strings."""
    if value is None:
        return default
    if isinstance(value, (list, tuple)):
        items = [str(item).strip() for item in value if str(item).strip()]
    else:
        items = [item.strip() for item in str(value).split(",") if item.strip()]
    if not items:
        logger.warning("Empty list value '%s'. Using default=%s", value, default)
        return default
    return tuple(items)


def _read_config(config_path: Path) -> dict:
    """Read and parse YAML configuration."""
    try:
        with config_path.open("r", encoding="utf-8") as config_file:
            config_data = yaml.safe_load(config_file) or {}
        logger.info("Configuration loaded from %s", config_path)
        return config_data
    except FileNotFoundError:
        logger.warning("Config file not found at %s. Falling back to defaults.", config_path)
        return {}
    except Exception:
        logger.exception("Failed to load config file from %s", config_path)
        return {}


def _load_fraud_config(fraud_cfg: dict) -> FraudPatternConfig:
    """Build fraud pattern constants, keeping defaults for missing keys."""
    defaults = FraudPatternConfig()
    return FraudPatternConfig(
        duplicate_aadhaar_pattern=str(
            fraud_cfg.get("duplicate_aadhaar_pattern", defaults.duplicate_aadhaar_pattern)
        ),
        ghost_names=_to_tuple(fraud_cfg.get("ghost_names"), defaults.ghost_names),
        ghost_address_tokens=_to_tuple(fraud_cfg.get("ghost_address_tokens"), defaults.ghost_address_tokens),
        high_risk_districts=_to_tuple(fraud_cfg.get("high_risk_districts"), defaults.high_risk_districts),
        similar_name_threshold=_to_int(
            fraud_cfg.get("similar_name_threshold", defaults.similar_name_threshold),
            defaults.similar_name_threshold,
        ),
        location_application_threshold=_to_int(
            fraud_cfg.get("location_application_threshold", defaults.location_application_threshold),
            defaults.location_application_threshold,
        ),
        high_risk_score_threshold=_to_int(
            fraud_cfg.get("high_risk_score_threshold", defaults.high_risk_score_threshold),
            defaults.high_risk_score_threshold,
        ),
        district_points=_to_int(fraud_cfg.get("district_points", defaults.district_points), defaults.district_points),
        similar_name_points=_to_int(
            fraud_cfg.get("similar_name_points", defaults.similar_name_points), defaults.similar_name_points
        ),
        location_points=_to_int(fraud_cfg.get("location_points", defaults.location_points), defaults.location_points),
        duplicate_aadhaar_points=_to_int(
            fraud_cfg.get("duplicate_aadhaar_points", defaults.duplicate_aadhaar_points),
            defaults.duplicate_aadhaar_points,
        ),
        ghost_applicant_points=_to_int(
            fraud_cfg.get("ghost_applicant_points", defaults.ghost_applicant_points),
            defaults.ghost_applicant_points,
        ),
        max_score=_to_score(fraud_cfg.get("max_score", defaults.max_score), defaults.max_score),
        fallback_risk_score=_to_score(
            fraud_cfg.get("fallback_risk_score", defaults.fallback_risk_score), defaults.fallback_risk_score
        ),
        lookup_timeout_sec=_to_float(
            fraud_cfg.get("lookup_timeout_sec", defaults.lookup_timeout_sec), defaults.lookup_timeout_sec
        ),
    )


def _load_risk_scoring_config(scoring_cfg: dict) -> RiskScoringConfig:
    """Build persisted-application scoring weights, keeping defaults for missing keys."""
    defaults = RiskScoringConfig()
    return RiskScoringConfig(
        income_threshold=_to_int(
            scoring_cfg.get("income_threshold", defaults.income_threshold), defaults.income_threshold
        ),
        income_points=_to_int(scoring_cfg.get("income_points", defaults.income_points), defaults.income_points),
        rejection_points=_to_int(
            scoring_cfg.get("rejection_points", defaults.rejection_points), defaults.rejection_points
        ),
        unverified_document_points=_to_int(
            scoring_cfg.get("unverified_document_points", defaults.unverified_document_points),
            defaults.unverified_document_points,
        ),
    )


def load_settings(config_path: Optional[Path] = None) -> AppSettings:
    """Load and validate application settings from `config.yml`."""
    config = _read_config(Path(config_path) if config_path is not None else _CONFIG_PATH)
    app_cfg = config.get("app") or {}
    firebase_cfg = config.get("firebase") or {}

    return AppSettings(
        app_name=str(app_cfg.get("name", "Maiyya Samman Yojna Risk Service")),
        debug=_to_bool(app_cfg.get("debug", False), False),
        log_level=str(app_cfg.get("log_level", "INFO")).upper(),
        firebase_enabled=_to_bool(firebase_cfg.get("enabled", False), False),
        firebase_project_id=firebase_cfg.get("project_id"),
        firebase_credentials_path=firebase_cfg.get("credentials_path"),
        users_collection=str(firebase_cfg.get("users_collection", "users")),
        applications_collection=str(firebase_cfg.get("applications_collection", "applications")),
        fraud=_load_fraud_config(config.get("fraud") or {}),
        risk_scoring=_load_risk_scoring_config(config.get("risk_scoring") or {}),
    )
