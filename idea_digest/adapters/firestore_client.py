"""Firestore access for the digest engine.

The engine only reads: ideas and team preferences are written by the
Submit-Idea app itself.
"""

from typing import Any

from google.cloud import firestore  # type: ignore[attr-defined]
from google.cloud.firestore_v1.base_query import FieldFilter

Filter = tuple[str, str, Any]


class FirestoreClient:
    """Read-only Firestore client.

    Uses the emulator when FIRESTORE_EMULATOR_HOST is set (handled by the SDK).
    """

    def __init__(self, project_id: str) -> None:
        self._db = firestore.Client(project=project_id)

    def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        """Single document as a dict, or None when it does not exist."""
        snapshot = self._db.collection(collection).document(doc_id).get()
        return snapshot.to_dict() if snapshot.exists else None

    def query(
        self,
        collection: str,
        filters: list[Filter],
        limit: int | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        """Documents matching every ``(field, op, value)`` filter.

        ``order_by`` is applied before ``limit`` so the limit keeps the first
        documents in that order. Each result carries the document ID under
        ``id`` unless the stored data already has that field.
        """
        ref = self._db.collection(collection)
        for field_path, op, value in filters:
            ref = ref.where(filter=FieldFilter(field_path, op, value))
        if order_by is not None:
            direction = (
                firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
            )
            ref = ref.order_by(order_by, direction=direction)
        if limit is not None:
            ref = ref.limit(limit)
        return [self._with_id(snapshot) for snapshot in ref.stream()]

    @staticmethod
    def _with_id(snapshot: Any) -> dict[str, Any]:
        data = snapshot.to_dict() or {}
        data.setdefault("id", snapshot.id)
        return data
