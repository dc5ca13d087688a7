"""Reusable enums for welfare application domain models."""

from enum import Enum


class StringEnum(str, Enum):
    """Base enum class with string behavior for JSON serialization."""


class ApplicationStatus(StringEnum):
    """Application review lifecycle states."""

    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    REJECTED = "rejected"


class DocumentType(StringEnum):
    """Supporting document categories accepted with an application."""

    AADHAAR = "aadhaar"
    BANK_STATEMENT = "bank_statement"
    INCOME_CERTIFICATE = "income_certificate"
    RESIDENT_CERTIFICATE = "resident_certificate"


class UserRole(StringEnum):
    """Account roles."""

    BENEFICIARY = "beneficiary"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


ACTIVE_APPLICATION_STATUSES = frozenset(
    {
        ApplicationStatus.PENDING,
        ApplicationStatus.UNDER_REVIEW,
        ApplicationStatus.APPROVED,
    }
)

MODIFIABLE_APPLICATION_STATUSES = frozenset(
    {
        ApplicationStatus.PENDING,
        ApplicationStatus.UNDER_REVIEW,
    }
)
