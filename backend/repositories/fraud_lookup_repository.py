"""Document-store implementation of the fraud detection lookups."""

import asyncio
import logging
from typing import Collection, List, Optional

from models.enums import ApplicationStatus
from models.repositories import FraudLookupRepository
from models.users import UserModel

from .document_store import DocumentStore, FilterTuple


logger = logging.getLogger(__name__)


class DocumentFraudLookupRepository(FraudLookupRepository):
    """Answer fraud-check count queries over the users and applications collections."""

    def __init__(
        self,
        store: DocumentStore,
        users_collection: str = "users",
        applications_collection: str = "applications",
    ) -> None:
        self._store = store
        self._users_collection = users_collection
        self._applications_collection = applications_collection

    async def find_user_by_aadhaar(self, aadhaar: str) -> Optional[UserModel]:
        try:
            payloads = await asyncio.to_thread(
                self._store.query_documents,
                collection_name=self._users_collection,
                filters=[("aadhaar_number", "==", aadhaar), ("is_deleted", "==", False)],
                limit=1,
            )
            if not payloads:
                return None
            return UserModel.from_firestore(payloads[0], doc_id=payloads[0].get("id"))
        except Exception:
            logger.exception("Failed user lookup by aadhaar")
            raise

    async def count_applications_by_user_and_statuses(
        self,
        user_id: str,
        statuses: Collection[ApplicationStatus],
    ) -> int:
        status_values = sorted(ApplicationStatus(status).value for status in statuses)
        if not status_values:
            return 0
        try:
            payloads = await asyncio.to_thread(
                self._store.query_documents,
                collection_name=self._applications_collection,
                filters=[("user_id", "==", user_id), ("status", "in", status_values)],
            )
            return len(payloads)
        except Exception:
            logger.exception("Failed counting applications user_id=%s statuses=%s", user_id, status_values)
            raise

    async def count_users_by_name_fragment(self, fragment: str) -> int:
        """Count users whose name contains `fragment` as a literal, case-insensitive substring.

        Firestore has no contains query, so names are matched client-side.
        """
        needle = fragment.lower()
        try:
            payloads = await asyncio.to_thread(
                self._store.query_documents,
                collection_name=self._users_collection,
            )
            return sum(1 for payload in payloads if needle in str(payload.get("name") or "").lower())
        except Exception:
            logger.exception("Failed counting users by name fragment")
            raise

    async def count_applications_by_location(
        self,
        district: str,
        block: str,
        panchayat: Optional[str] = None,
    ) -> int:
        filters: List[FilterTuple] = [
            ("application_data.district", "==", district),
            ("application_data.block", "==", block),
        ]
        if panchayat:
            filters.append(("application_data.panchayat", "==", panchayat))
        try:
            payloads = await asyncio.to_thread(
                self._store.query_documents,
                collection_name=self._applications_collection,
                filters=filters,
            )
            return len(payloads)
        except Exception:
            logger.exception(
                "Failed counting applications district=%s block=%s panchayat=%s", district, block, panchayat
            )
            raise
