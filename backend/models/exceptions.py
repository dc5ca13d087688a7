"""Custom exceptions for model, repository, and application workflow layers."""

from typing import List, Optional


class ModelError(Exception):
    """Base class for model-related failures."""


class ModelValidationError(ModelError):
    """Raised when model data fails custom business validation."""


class ModelNotFoundError(ModelError):
    """Raised when a requested document does not exist."""


class VersionConflictError(ModelError):
    """Raised when optimistic concurrency version checks fail."""


class RepositoryError(ModelError):
    """Raised when the storage collaborator cannot answer a query."""


class ApplicationError(Exception):
    """Base class for refused application workflow actions."""


class ActiveApplicationExistsError(ApplicationError):
    """Raised when a user submits while another application is still active."""

    def __init__(self, application_id: Optional[str]) -> None:
        super().__init__("You already have an active application")
        self.application_id = application_id


class FraudDetectedError(ApplicationError):
    """Raised when submission-time fraud checks flag an application."""

    def __init__(self, reasons: List[str]) -> None:
        super().__init__("Fraud detected in application")
        self.reasons = list(reasons)


class ApplicationStateError(ApplicationError):
    """Raised when an application cannot be modified in its current status."""


class ApplicationAccessError(ApplicationError):
    """Raised when a caller acts on an application it does not own."""
