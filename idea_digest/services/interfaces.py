"""Collaborator interfaces consumed by the digest engine."""

from abc import ABC, abstractmethod
from typing import Any

from idea_digest.models.digest import NotificationWindow, SendResult
from idea_digest.models.idea import Idea
from idea_digest.models.team_preference import DigestFrequency, TeamPreference


class IdeaQuery(ABC):
    """Search layer returning ideas for a window and filter."""

    @abstractmethod
    async def query(
        self,
        window: NotificationWindow,
        content_filter: frozenset[str],
    ) -> list[Idea]:
        """Ideas updated within ``[from, to)`` matching the filter, most voted first.

        An empty filter means no restriction.

        Raises:
            QueryError: If the search layer fails.
        """


class RecipientDirectory(ABC):
    """Source of recipient groups."""

    @abstractmethod
    async def list_groups(self, cadence: DigestFrequency) -> list[TeamPreference]:
        """Point-in-time snapshot of teams subscribed to a cadence.

        Raises:
            DirectoryError: If the snapshot cannot be read.
        """


class ChatTransport(ABC):
    """Outbound chat channel."""

    @abstractmethod
    async def send(self, destination: str, message: dict[str, Any]) -> SendResult:
        """Post one rendered message to a destination.

        API-level rejections are reported in the result.

        Raises:
            TransportError: If the chat service cannot be reached.
        """
