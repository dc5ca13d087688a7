"""Base class for documents stored in the users and applications collections."""

from datetime import datetime, timezone
import logging
from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import ModelValidationError


logger = logging.getLogger(__name__)

DocumentT = TypeVar("DocumentT", bound="BaseDocumentModel")


def utc_now() -> datetime:
    """Return current UTC timestamp."""
    return datetime.now(timezone.utc)


class BaseDocumentModel(BaseModel):
    """Audit fields shared by every stored document.

    `version` backs optimistic concurrency: repositories refuse to write a
    document whose version is older than the stored one.
    """

    id: Optional[str] = Field(default=None, description="Document id in the store.")
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    version: int = Field(default=1, ge=1)
    is_deleted: bool = Field(default=False)

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        use_enum_values=False,
    )

    def to_firestore(self) -> Dict[str, Any]:
        """Dump to JSON-safe types: enums as values, datetimes as ISO strings, no None fields.

        Raises:
            ModelValidationError: If a field cannot be serialized.
        """
        try:
            return self.model_dump(mode="json", exclude_none=True)
        except Exception as exc:
            logger.exception("Could not serialize %s id=%s", type(self).__name__, self.id)
            raise ModelValidationError(str(exc)) from exc

    @classmethod
    def from_firestore(cls: Type[DocumentT], data: Dict[str, Any], doc_id: Optional[str] = None) -> DocumentT:
        """Validate a stored payload, taking `doc_id` as `id` when the payload has none.

        Raises:
            ModelValidationError: If the payload does not validate.
        """
        payload = dict(data)
        if doc_id is not None:
            payload.setdefault("id", doc_id)
        try:
            return cls.model_validate(payload)
        except Exception as exc:
            logger.exception("Stored payload failed validation model=%s doc_id=%s", cls.__name__, doc_id)
            raise ModelValidationError(str(exc)) from exc
