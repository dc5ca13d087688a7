"""Document-store implementation of the application repository.

Every write goes through `ApplicationRiskScorer.before_save`, so the stored
risk score always reflects the document being written.
"""

import asyncio
import logging
from typing import List, Optional

from models.applications import ApplicationModel
from models.enums import ACTIVE_APPLICATION_STATUSES, ApplicationStatus
from models.exceptions import ModelNotFoundError, VersionConflictError
from models.repositories import ApplicationRepository
from services.application_risk_scorer import ApplicationRiskScorer

from .document_store import DocumentStore, FilterTuple


logger = logging.getLogger(__name__)


class DocumentApplicationRepository(ApplicationRepository):
    """Persist and fetch application documents."""

    def __init__(
        self,
        store: DocumentStore,
        scorer: Optional[ApplicationRiskScorer] = None,
        collection_name: str = "applications",
    ) -> None:
        self._store = store
        self._scorer = scorer or ApplicationRiskScorer()
        self._collection_name = collection_name
        logger.info("Initialized DocumentApplicationRepository collection=%s", collection_name)

    async def save(self, model: ApplicationModel) -> ApplicationModel:
        """Score and write the application with an optimistic version check.

        Raises:
            VersionConflictError: If the stored version is newer than `model`.
        """
        try:
            current = await asyncio.to_thread(
                self._store.get_document, self._collection_name, model.application_id
            )
            if current is not None:
                stored_version = int(current.get("version", 1))
                if model.version < stored_version:
                    raise VersionConflictError(
                        "Version conflict for application_id={0}".format(model.application_id)
                    )
                model.version = stored_version + 1

            self._scorer.before_save(model)
            payload = model.to_firestore()
            stored = await asyncio.to_thread(
                self._store.set_document,
                collection_name=self._collection_name,
                document_id=model.application_id,
                payload=payload,
                merge=False,
            )
            return ApplicationModel.from_firestore(stored, doc_id=model.application_id)
        except VersionConflictError:
            raise
        except Exception:
            logger.exception("Failed to save application_id=%s", model.application_id)
            raise

    async def get_by_id(self, model_id: str) -> ApplicationModel:
        """Fetch an application by identifier."""
        try:
            payload = await asyncio.to_thread(self._store.get_document, self._collection_name, model_id)
            if payload is None:
                raise ModelNotFoundError("Application not found: {0}".format(model_id))
            return ApplicationModel.from_firestore(payload, doc_id=model_id)
        except ModelNotFoundError:
            raise
        except Exception:
            logger.exception("Failed to get application_id=%s", model_id)
            raise

    async def find_active_by_user(self, user_id: str) -> Optional[ApplicationModel]:
        """Return one active application of the user, if any."""
        try:
            payloads = await asyncio.to_thread(
                self._store.query_documents,
                collection_name=self._collection_name,
                filters=[
                    ("user_id", "==", user_id),
                    ("status", "in", sorted(status.value for status in ACTIVE_APPLICATION_STATUSES)),
                ],
                limit=1,
            )
            if not payloads:
                return None
            return ApplicationModel.from_firestore(payloads[0], doc_id=payloads[0].get("id"))
        except Exception:
            logger.exception("Failed to find active application user_id=%s", user_id)
            raise

    async def list_by_user(self, user_id: str) -> List[ApplicationModel]:
        """Return the user's applications, newest submission first."""
        try:
            payloads = await asyncio.to_thread(
                self._store.query_documents,
                collection_name=self._collection_name,
                filters=[("user_id", "==", user_id)],
            )
            applications = [
                ApplicationModel.from_firestore(payload, doc_id=payload.get("id")) for payload in payloads
            ]
            # Sorted here to avoid a composite Firestore index on (user_id, submission_date).
            applications.sort(key=lambda item: item.submission_date, reverse=True)
            return applications
        except Exception:
            logger.exception("Failed to list applications user_id=%s", user_id)
            raise

    async def list_by_status(
        self,
        status: ApplicationStatus,
        district: Optional[str] = None,
        block: Optional[str] = None,
    ) -> List[ApplicationModel]:
        """Return applications in `status`, optionally within one district and block."""
        filters: List[FilterTuple] = [("status", "==", ApplicationStatus(status).value)]
        if district:
            filters.append(("application_data.district", "==", district))
        if block:
            filters.append(("application_data.block", "==", block))
        try:
            payloads = await asyncio.to_thread(
                self._store.query_documents,
                collection_name=self._collection_name,
                filters=filters,
            )
            return [ApplicationModel.from_firestore(payload, doc_id=payload.get("id")) for payload in payloads]
        except Exception:
            logger.exception("Failed to list applications status=%s district=%s block=%s", status, district, block)
            raise
