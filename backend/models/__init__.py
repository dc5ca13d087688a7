"""Public model package exports for the welfare risk backend."""

from .applications import (
    ApplicationDataModel,
    ApplicationDocumentModel,
    ApplicationModel,
    LocationCoordinatesModel,
    VerificationEntryModel,
)
from .base import BaseDocumentModel
from .enums import (
    ACTIVE_APPLICATION_STATUSES,
    ApplicationStatus,
    DocumentType,
    UserRole,
)
from .exceptions import (
    ActiveApplicationExistsError,
    ApplicationAccessError,
    ApplicationError,
    ApplicationStateError,
    FraudDetectedError,
    ModelError,
    ModelNotFoundError,
    ModelValidationError,
    RepositoryError,
    VersionConflictError,
)
from .fraud import FraudCheckAddress, FraudCheckInput, FraudCheckResult
from .repositories import ApplicationRepository, FraudLookupRepository, UserRepository
from .users import UserAddressModel, UserModel

__all__ = [
    "BaseDocumentModel",
    "ApplicationModel",
    "ApplicationDataModel",
    "ApplicationDocumentModel",
    "VerificationEntryModel",
    "LocationCoordinatesModel",
    "UserModel",
    "UserAddressModel",
    "FraudCheckAddress",
    "FraudCheckInput",
    "FraudCheckResult",
    "ACTIVE_APPLICATION_STATUSES",
    "ApplicationStatus",
    "DocumentType",
    "UserRole",
    "ModelError",
    "ModelValidationError",
    "ModelNotFoundError",
    "VersionConflictError",
    "RepositoryError",
    "ApplicationError",
    "ActiveApplicationExistsError",
    "FraudDetectedError",
    "ApplicationStateError",
    "ApplicationAccessError",
    "ApplicationRepository",
    "FraudLookupRepository",
    "UserRepository",
]
