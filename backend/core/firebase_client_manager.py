"""Firestore access for the user and application collections.

Exposes the same three calls as `repositories.document_store.MemoryDocumentStore`
so repositories do not care which backend they run against.
"""

from datetime import datetime, timezone
import logging
import os
from typing import Any, Dict, List, Optional, Sequence, Tuple

from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter
from google.oauth2 import service_account


logger = logging.getLogger(__name__)

FilterTuple = Tuple[str, str, Any]


def _stamp(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Copy `payload`, filling audit timestamps the model did not set."""
    now = datetime.now(timezone.utc).isoformat()
    stamped = dict(payload)
    stamped.setdefault("created_at", now)
    stamped.setdefault("updated_at", now)
    return stamped


def _with_id(snapshot: Any) -> Dict[str, Any]:
    row = snapshot.to_dict() or {}
    row["id"] = snapshot.id
    return row


class FirebaseClientManager:
    """Thin Firestore client used as the deployed document store."""

    def __init__(self, project_id: Optional[str] = None, credentials_path: Optional[str] = None) -> None:
        """Create the Firestore client.

        Args:
            project_id: Google Cloud project holding the welfare collections.
            credentials_path: Service account json; application default credentials otherwise.
        """
        try:
            kwargs: Dict[str, Any] = {}
            if project_id:
                kwargs["project"] = project_id
            if credentials_path:
                os.environ["GOOGLE_APPLICATION_CREDENTIALS"] = credentials_path
                kwargs["credentials"] = service_account.Credentials.from_service_account_file(credentials_path)
            self._client = firestore.Client(**kwargs)
            logger.info("Firestore client ready project_id=%s", project_id)
        except Exception:
            logger.exception("Could not create Firestore client project_id=%s", project_id)
            raise

    def set_document(
        self,
        collection_name: str,
        document_id: str,
        payload: Dict[str, Any],
        merge: bool = False,
    ) -> Dict[str, Any]:
        """Write one document and return the stored fields with its id."""
        ref = self._client.collection(collection_name).document(document_id)
        try:
            ref.set(_stamp(payload), merge=merge)
            return _with_id(ref.get())
        except Exception:
            logger.exception("Firestore write failed collection=%s document_id=%s", collection_name, document_id)
            raise

    def get_document(self, collection_name: str, document_id: str) -> Optional[Dict[str, Any]]:
        """Return the document with its id, or None when it does not exist."""
        try:
            snapshot = self._client.collection(collection_name).document(document_id).get()
        except Exception:
            logger.exception("Firestore read failed collection=%s document_id=%s", collection_name, document_id)
            raise
        if not snapshot.exists:
            return None
        return _with_id(snapshot)

    def query_documents(
        self,
        collection_name: str,
        filters: Optional[Sequence[FilterTuple]] = None,
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Return documents matching every `(field, op, value)` filter.

        Dotted field paths such as `application_data.district` address
        nested map fields.
        """
        try:
            query = self._client.collection(collection_name)
            for field_path, op_string, value in filters or []:
                query = query.where(filter=FieldFilter(field_path, op_string, value))
            if order_by:
                query = query.order_by(order_by)
            if limit is not None:
                query = query.limit(limit)
            return [_with_id(snapshot) for snapshot in query.stream()]
        except Exception:
            logger.exception("Firestore query failed collection=%s filters=%s", collection_name, filters)
            raise
