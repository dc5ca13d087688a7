"""Ephemeral submission-time fraud check input and result."""

from collections.abc import Mapping
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .applications import ApplicationDataModel


NO_FRAUD_MESSAGE = "No fraud detected"
INTERNAL_ERROR_MESSAGE = "Error during fraud detection"
INTERNAL_ERROR_REASON = "Internal verification error"


def _scalar_text(value: Any) -> Optional[str]:
    """Numbers become text; containers and other shapes become a missing signal."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


class FraudCheckAddress(BaseModel):
    """Structured address as submitted; every part may be missing.

    Keys beyond the four named ones (street, landmark, ...) are kept so the
    ghost-address check sees every submitted value.
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="allow")

    district: Optional[str] = None
    block: Optional[str] = None
    panchayat: Optional[str] = None
    village: Optional[str] = None

    @field_validator("district", "block", "panchayat", "village", mode="before")
    @classmethod
    def _coerce_part(cls, value: Any) -> Optional[str]:
        return _scalar_text(value)


class FraudCheckInput(BaseModel):
    """Signals gathered for one submission attempt.

    Missing or malformed fields are absent signals: the checks that need them
    are skipped instead of failing the whole verdict.
    """

    aadhaar: Optional[str] = None
    name: Optional[str] = None
    address: Union[FraudCheckAddress, str, None] = None
    documents: Optional[List[Any]] = None

    @field_validator("aadhaar", "name", mode="before")
    @classmethod
    def _coerce_identifier(cls, value: Any) -> Optional[str]:
        return _scalar_text(value)

    @field_validator("address", mode="before")
    @classmethod
    def _coerce_address(cls, value: Any) -> Any:
        if value is None or isinstance(value, (str, Mapping, FraudCheckAddress)):
            return value
        return _scalar_text(value)

    @field_validator("documents", mode="before")
    @classmethod
    def _coerce_documents(cls, value: Any) -> Optional[List[Any]]:
        if isinstance(value, (list, tuple)):
            return list(value)
        return None

    @classmethod
    def from_submission(
        cls,
        aadhaar: Optional[str],
        application_data: ApplicationDataModel,
        documents: Optional[List[Any]] = None,
    ) -> "FraudCheckInput":
        """Build the check input from the applicant's Aadhaar and submitted data."""
        return cls(
            aadhaar=aadhaar,
            name=application_data.full_name,
            address=FraudCheckAddress(
                district=application_data.district,
                block=application_data.block,
                panchayat=application_data.panchayat,
                village=application_data.village,
            ),
            documents=documents,
        )

    @property
    def structured_address(self) -> Optional[FraudCheckAddress]:
        """Return the address when it was given field by field."""
        if isinstance(self.address, FraudCheckAddress):
            return self.address
        return None


class FraudCheckResult(BaseModel):
    """Verdict returned to the submission caller. Never persisted."""

    is_fraud: bool = False
    reasons: List[str] = Field(default_factory=list)
    risk_score: int = Field(default=0, ge=0, le=100)
    message: str = NO_FRAUD_MESSAGE

    @classmethod
    def from_checks(cls, is_fraud: bool, reasons: List[str], risk_score: int) -> "FraudCheckResult":
        """Assemble the final result and its summary message."""
        message = "Fraud detected: {0}".format(", ".join(reasons)) if is_fraud else NO_FRAUD_MESSAGE
        return cls(is_fraud=is_fraud, reasons=list(reasons), risk_score=risk_score, message=message)

    @classmethod
    def internal_error(cls, fallback_score: int) -> "FraudCheckResult":
        """Neutral medium-risk result used when the checks themselves fail."""
        return cls(
            is_fraud=False,
            reasons=[INTERNAL_ERROR_REASON],
            risk_score=fallback_score,
            message=INTERNAL_ERROR_MESSAGE,
        )
