"""Base repository for Firestore data access.

Every repository inherits from this class.
"""

from datetime import UTC, date, datetime, time
from typing import Any, ClassVar, Generic, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from idea_digest.adapters.firestore_client import FirestoreClient

logger = structlog.get_logger(__name__)

# Pydantic model type variable
T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T]):
    """Firestore Repository base class.

    Each domain repository subclasses it and defines
    collection_name and model_class.

    Example:
        class IdeaRepository(BaseRepository[Idea]):
            collection_name = "ideas"
            model_class = Idea
    """

    collection_name: ClassVar[str]
    model_class: ClassVar[type[BaseModel]]

    def __init__(self, firestore_client: FirestoreClient) -> None:
        """Initialize repository with Firestore client.

        Args:
            firestore_client: Firestore client instance.
        """
        self._db = firestore_client

    def get_by_id(self, doc_id: str) -> T | None:
        """Get a document by ID.

        Args:
            doc_id: Document ID.

        Returns:
            Model instance or None.
        """
        data = self._db.get(self.collection_name, doc_id)
        if data is None:
            return None
        return self.model_class(**data)  # type: ignore[return-value]

    def find_by(
        self,
        filters: list[tuple[str, str, Any]],
        limit: int | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[T]:
        """Query documents, skipping ones that fail model validation.

        Args:
            filters: List of (field, operator, value) tuples.
            limit: Optional maximum number of documents read.
            order_by: Optional field the limit is applied in order of.
            descending: Sort ``order_by`` newest/highest first.

        Returns:
            Matching model instances.
        """
        results = self._db.query(
            self.collection_name,
            filters,
            limit=limit,
            order_by=order_by,
            descending=descending,
        )
        models: list[T] = []
        for data in results:
            try:
                models.append(self.model_class(**data))  # type: ignore[arg-type]
            except ValidationError as e:
                logger.warning(
                    "invalid_document_skipped",
                    collection=self.collection_name,
                    doc_id=data.get("id"),
                    errors=e.error_count(),
                )
        return models

    @staticmethod
    def _date_to_datetime(value: date) -> datetime:
        """Convert a calendar date to UTC midnight (Firestore has no date type)."""
        return datetime.combine(value, time.min, tzinfo=UTC)
