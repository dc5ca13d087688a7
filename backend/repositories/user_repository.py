"""Document-store implementation of the user repository."""

import asyncio
import logging

from pydantic import ValidationError

from models.exceptions import ModelNotFoundError, ModelValidationError
from models.repositories import UserRepository
from models.users import UserModel

from .document_store import DocumentStore


logger = logging.getLogger(__name__)


class DocumentUserRepository(UserRepository):
    """Persist and fetch beneficiary documents."""

    def __init__(self, store: DocumentStore, collection_name: str = "users") -> None:
        """Bind the repository to a document store collection.

        Args:
            store: Firestore manager or in-memory store.
            collection_name: Collection name for users.
        """
        self._store = store
        self._collection_name = collection_name
        logger.info("Initialized DocumentUserRepository collection=%s", collection_name)

    async def create(self, model: UserModel) -> UserModel:
        """Create and persist a user document."""
        try:
            payload = model.to_firestore()
            stored = await asyncio.to_thread(
                self._store.set_document,
                collection_name=self._collection_name,
                document_id=model.user_id,
                payload=payload,
                merge=False,
            )
            return UserModel.from_firestore(stored, doc_id=model.user_id)
        except (ValidationError, ModelValidationError):
            logger.exception("User validation failed while creating user_id=%s", model.user_id)
            raise
        except Exception:
            logger.exception("Failed to create user_id=%s", model.user_id)
            raise

    async def get_by_id(self, model_id: str) -> UserModel:
        """Fetch user by user identifier.

        Raises:
            ModelNotFoundError: If document does not exist.
        """
        try:
            payload = await asyncio.to_thread(self._store.get_document, self._collection_name, model_id)
            if payload is None:
                raise ModelNotFoundError("User not found: {0}".format(model_id))
            return UserModel.from_firestore(payload, doc_id=model_id)
        except ModelNotFoundError:
            raise
        except Exception:
            logger.exception("Failed to get user_id=%s", model_id)
            raise
