"""Repository for Idea entities.

Data access layer for the Firestore ideas collection. Also serves as the
digest engine's idea query layer.
"""

import asyncio
from datetime import date

from google.api_core.exceptions import GoogleAPIError

from idea_digest.adapters.firestore_client import FirestoreClient
from idea_digest.errors import QueryError
from idea_digest.models.digest import NotificationWindow
from idea_digest.models.idea import Idea, IdeaStatus
from idea_digest.repositories.base import BaseRepository
from idea_digest.services.interfaces import IdeaQuery

# Upper bound on ideas read per window before category filtering
SEARCH_RESULT_LIMIT = 200


class IdeaRepository(BaseRepository[Idea], IdeaQuery):
    """Idea entity Repository.

    Firestore Collection: ideas
    """

    collection_name = "ideas"
    model_class = Idea

    def __init__(
        self,
        firestore_client: FirestoreClient,
        search_limit: int = SEARCH_RESULT_LIMIT,
    ) -> None:
        """Initialize IdeaRepository.

        Args:
            firestore_client: Firestore client instance.
            search_limit: Maximum ideas read per date range.
        """
        super().__init__(firestore_client)
        self._search_limit = search_limit

    def find_updated_between(self, from_date: date, to_date: date) -> list[Idea]:
        """Ideas updated in ``[from_date, to_date)``.

        Args:
            from_date: First day included.
            to_date: First day excluded.

        Returns:
            The most recently updated ideas, newest first.
        """
        return self.find_by(
            [
                ("updated_at", ">=", self._date_to_datetime(from_date)),
                ("updated_at", "<", self._date_to_datetime(to_date)),
            ],
            limit=self._search_limit,
            order_by="updated_at",
            descending=True,
        )

    def find_for_digest(
        self,
        window: NotificationWindow,
        content_filter: frozenset[str],
    ) -> list[Idea]:
        """Digest candidates for a window, most voted first.

        Rejected ideas are left out. Category/tag matching happens at the
        application level since Firestore cannot OR across two fields.

        Args:
            window: Digest window.
            content_filter: Category IDs and tags (empty = all).

        Returns:
            Matching ideas sorted by votes, then most recently updated.
        """
        ideas = self.find_updated_between(window.from_date, window.to_date)
        matching = [
            idea
            for idea in ideas
            if idea.status != IdeaStatus.REJECTED
            and window.contains(idea.updated_at)
            and idea.matches(content_filter)
        ]
        matching.sort(key=lambda i: (i.total_votes, i.updated_at), reverse=True)
        return matching

    async def query(
        self,
        window: NotificationWindow,
        content_filter: frozenset[str],
    ) -> list[Idea]:
        """IdeaQuery implementation backed by Firestore."""
        try:
            return await asyncio.to_thread(self.find_for_digest, window, content_filter)
        except GoogleAPIError as e:
            raise QueryError(f"Idea query failed: {e}") from e
