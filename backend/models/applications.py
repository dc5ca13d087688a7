"""Welfare benefit application model and its embedded records."""

from datetime import datetime
import logging
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .base import BaseDocumentModel, utc_now
from .enums import ApplicationStatus, DocumentType


logger = logging.getLogger(__name__)

_EMBEDDED_CONFIG = ConfigDict(str_strip_whitespace=True, validate_assignment=True)


class ApplicationDataModel(BaseModel):
    """Applicant-declared fields submitted with an application."""

    model_config = _EMBEDDED_CONFIG

    full_name: str = Field(..., min_length=1)
    age: int = Field(..., ge=18, le=65)
    district: str = Field(..., min_length=1)
    block: str = Field(..., min_length=1)
    panchayat: str = Field(..., min_length=1)
    village: str = Field(..., min_length=1)
    monthly_income: float = Field(..., ge=0)
    dependents: int = Field(default=0, ge=0)
    bank_account: str = Field(..., min_length=1)
    ifsc_code: str = Field(..., min_length=1)
    bank_name: str = Field(..., min_length=1)

    @field_validator("ifsc_code")
    @classmethod
    def _normalize_ifsc(cls, value: str) -> str:
        """IFSC codes are stored upper-case."""
        return value.upper()


class ApplicationDocumentModel(BaseModel):
    """Uploaded supporting document and its verification state."""

    model_config = _EMBEDDED_CONFIG

    type: DocumentType
    file_url: str = Field(..., min_length=1)
    verified: bool = Field(default=False)
    verification_notes: Optional[str] = Field(default=None)


class VerificationEntryModel(BaseModel):
    """One administrative status transition."""

    model_config = _EMBEDDED_CONFIG

    status: ApplicationStatus
    notes: Optional[str] = Field(default=None)
    verified_by: Optional[str] = Field(default=None)
    timestamp: datetime = Field(default_factory=utc_now)


class LocationCoordinatesModel(BaseModel):
    """Optional GPS fix captured at submission."""

    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)


class ApplicationModel(BaseDocumentModel):
    """A citizen's benefit application.

    `risk_score` is derived: repositories recompute it through
    `ApplicationRiskScorer.before_save` on every write.
    """

    application_id: str = Field(..., min_length=3)
    user_id: str = Field(..., min_length=3)
    status: ApplicationStatus = Field(default=ApplicationStatus.PENDING)
    application_data: ApplicationDataModel
    documents: List[ApplicationDocumentModel] = Field(default_factory=list)
    verification_history: List[VerificationEntryModel] = Field(default_factory=list)
    risk_score: int = Field(default=0, ge=0, le=100)
    submission_date: datetime = Field(default_factory=utc_now)
    last_updated: datetime = Field(default_factory=utc_now)
    location_coordinates: Optional[LocationCoordinatesModel] = Field(default=None)

    @field_validator("documents", "verification_history", mode="before")
    @classmethod
    def _normalize_lists(cls, value: Optional[list]) -> list:
        """Store missing embedded lists as empty arrays."""
        return value or []

    def find_document(self, doc_type: DocumentType) -> Optional[ApplicationDocumentModel]:
        """Return the document of `doc_type`, if one was uploaded."""
        for document in self.documents:
            if document.type == doc_type:
                return document
        return None
