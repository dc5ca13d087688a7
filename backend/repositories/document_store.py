"""Document store backends shared by the repositories.

`MemoryDocumentStore` mirrors the subset of `FirebaseClientManager` the
repositories use, so the same repository code runs against Firestore in
deployment and against process memory in tests and local runs.
"""

from datetime import datetime, timezone
import logging
from threading import RLock
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from core.config import AppSettings
from core.firebase_client_manager import FirebaseClientManager


logger = logging.getLogger(__name__)

FilterTuple = Tuple[str, str, Any]
DocumentStore = Union[FirebaseClientManager, "MemoryDocumentStore"]

_MISSING = object()


def _utc_now() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(timezone.utc)


def resolve_field(payload: Dict[str, Any], field_path: str) -> Any:
    """Resolve a dotted Firestore-style field path inside a nested payload."""
    current: Any = payload
    for part in field_path.split("."):
        if not isinstance(current, dict) or part not in current:
            return _MISSING
        current = current[part]
    return current


class MemoryDocumentStore:
    """Thread-safe in-process collection store with Firestore-like queries."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}

    def set_document(
        self,
        collection_name: str,
        document_id: str,
        payload: Dict[str, Any],
        merge: bool = False,
    ) -> Dict[str, Any]:
        """Create or replace a document."""
        with self._lock:
            bucket = self._collections.setdefault(collection_name, {})
            safe_payload = dict(payload)
            safe_payload.setdefault("updated_at", _utc_now().isoformat())
            safe_payload.setdefault("created_at", _utc_now().isoformat())
            if merge and document_id in bucket:
                merged = dict(bucket[document_id])
                merged.update(safe_payload)
                bucket[document_id] = merged
            else:
                bucket[document_id] = safe_payload
            return dict(bucket[document_id])

    def get_document(self, collection_name: str, document_id: str) -> Optional[Dict[str, Any]]:
        """Get one document by id."""
        with self._lock:
            payload = self._collections.get(collection_name, {}).get(document_id)
            if payload is None:
                return None
            result = dict(payload)
            result["id"] = document_id
            return result

    def query_documents(
        self,
        collection_name: str,
        filters: Optional[Sequence[FilterTuple]] = None,
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Run a filtered query and return document payloads."""
        with self._lock:
            bucket = self._collections.get(collection_name, {})
            records: List[Dict[str, Any]] = []
            for document_id, payload in bucket.items():
                row = dict(payload)
                row["id"] = document_id
                if self._matches_filters(row, filters or []):
                    records.append(row)
        if order_by:
            records.sort(key=lambda item: str(item.get(order_by, "")))
        if limit is not None:
            records = records[: int(limit)]
        return records

    def _matches_filters(self, payload: Dict[str, Any], filters: Sequence[FilterTuple]) -> bool:
        """Evaluate query-like filters."""
        for field_name, operator, expected_value in filters:
            actual_value = resolve_field(payload, field_name)
            if operator == "==":
                if actual_value is _MISSING or actual_value != expected_value:
                    return False
            elif operator == "!=":
                if actual_value is _MISSING or actual_value == expected_value:
                    return False
            elif operator == "in":
                if actual_value is _MISSING or actual_value not in expected_value:
                    return False
            else:
                raise ValueError("Unsupported filter operator: {0}".format(operator))
        return True


def build_document_store(settings: AppSettings) -> DocumentStore:
    """Return Firestore when enabled in settings, otherwise an in-memory store."""
    if settings.firebase_enabled:
        logger.info("Using Firestore document store project_id=%s", settings.firebase_project_id)
        return FirebaseClientManager(
            project_id=settings.firebase_project_id,
            credentials_path=settings.firebase_credentials_path,
        )
    logger.warning("Firestore disabled; application data is kept in process memory only.")
    return MemoryDocumentStore()
