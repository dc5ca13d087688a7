"""Repository interfaces for datastore-agnostic model access.

All methods are coroutines; adapters backed by blocking clients run them in a
worker thread.
"""

from abc import ABC, abstractmethod
import logging
from typing import Collection, List, Optional

from pydantic import ValidationError

from .applications import ApplicationModel
from .enums import ApplicationStatus
from .exceptions import ModelNotFoundError, RepositoryError, VersionConflictError
from .users import UserModel


logger = logging.getLogger(__name__)


class FraudLookupRepository(ABC):
    """Read-only queries consumed by submission-time fraud detection."""

    @abstractmethod
    async def find_user_by_aadhaar(self, aadhaar: str) -> Optional[UserModel]:
        """Return the user registered with `aadhaar`, or None."""

    @abstractmethod
    async def count_applications_by_user_and_statuses(
        self,
        user_id: str,
        statuses: Collection[ApplicationStatus],
    ) -> int:
        """Count a user's applications whose status is in `statuses`."""

    @abstractmethod
    async def count_users_by_name_fragment(self, fragment: str) -> int:
        """Count users whose name contains `fragment`, ignoring case."""

    @abstractmethod
    async def count_applications_by_location(
        self,
        district: str,
        block: str,
        panchayat: Optional[str] = None,
    ) -> int:
        """Count applications filed from a district and block, optionally one panchayat."""


class ApplicationRepository(ABC):
    """Application data access abstraction."""

    @abstractmethod
    async def save(self, model: ApplicationModel) -> ApplicationModel:
        """Recompute the derived risk score and persist the application.

        Raises:
            VersionConflictError: If a stored copy is newer than `model`.
        """

    @abstractmethod
    async def get_by_id(self, model_id: str) -> ApplicationModel:
        """Fetch an application by identifier.

        Raises:
            ModelNotFoundError: If application does not exist.
            ValidationError: If payload is malformed.
        """

    @abstractmethod
    async def find_active_by_user(self, user_id: str) -> Optional[ApplicationModel]:
        """Return one pending, under-review or approved application of the user."""

    @abstractmethod
    async def list_by_user(self, user_id: str) -> List[ApplicationModel]:
        """Return a user's applications, newest submission first."""

    @abstractmethod
    async def list_by_status(
        self,
        status: ApplicationStatus,
        district: Optional[str] = None,
        block: Optional[str] = None,
    ) -> List[ApplicationModel]:
        """Return applications in `status`, optionally within one district and block."""


class UserRepository(ABC):
    """User data access abstraction."""

    @abstractmethod
    async def create(self, model: UserModel) -> UserModel:
        """Persist a new user model."""

    @abstractmethod
    async def get_by_id(self, model_id: str) -> UserModel:
        """Fetch a user by identifier.

        Raises:
            ModelNotFoundError: If user does not exist.
        """


__all__ = [
    "ValidationError",
    "ModelNotFoundError",
    "RepositoryError",
    "VersionConflictError",
    "FraudLookupRepository",
    "ApplicationRepository",
    "UserRepository",
]
