"""Test utilities shared across test modules.

In-memory collaborators for driving the digest engine without Firestore or
Slack.
"""

import asyncio
from datetime import UTC, date, datetime
from typing import Any

from idea_digest.errors import DirectoryError, QueryError
from idea_digest.models.digest import NotificationWindow, SendResult
from idea_digest.models.idea import Idea, IdeaStatus
from idea_digest.models.team_preference import DigestFrequency, TeamPreference
from idea_digest.services.interfaces import ChatTransport, IdeaQuery, RecipientDirectory


def make_idea(idea_id: str = "idea_001", **overrides: Any) -> Idea:
    """Idea with sensible defaults."""
    data: dict[str, Any] = {
        "id": idea_id,
        "title": f"Idea {idea_id}",
        "created_by_name": "Alex Kim",
        "category_id": "cat_general",
        "category": "General",
        "total_votes": 0,
        "status": IdeaStatus.APPROVED,
        "created_at": datetime(2025, 11, 20, 9, 0, tzinfo=UTC),
        "updated_at": datetime(2025, 12, 3, 10, 0, tzinfo=UTC),
    }
    data.update(overrides)
    return Idea(**data)


def make_team(
    team_id: str = "team_a",
    frequency: DigestFrequency = DigestFrequency.WEEKLY,
    **overrides: Any,
) -> TeamPreference:
    """TeamPreference with sensible defaults."""
    data: dict[str, Any] = {
        "team_id": team_id,
        "channel_id": "C" + team_id.upper().replace("_", "")[:10],
        "frequency": frequency,
    }
    data.update(overrides)
    return TeamPreference(**data)


def make_window(from_date: date, to_date: date) -> NotificationWindow:
    return NotificationWindow(from_date=from_date, to_date=to_date)


class FakeIdeaQuery(IdeaQuery):
    """Idea query over a fixed list, honoring window and filter."""

    def __init__(
        self,
        ideas: list[Idea] | None = None,
        failing_filters: set[frozenset[str]] | None = None,
    ) -> None:
        self.ideas = ideas or []
        self.failing_filters = failing_filters or set()
        self.calls: list[tuple[NotificationWindow, frozenset[str]]] = []

    async def query(
        self,
        window: NotificationWindow,
        content_filter: frozenset[str],
    ) -> list[Idea]:
        self.calls.append((window, content_filter))
        if content_filter in self.failing_filters:
            raise QueryError("search service unavailable")
        return [
            idea
            for idea in self.ideas
            if window.contains(idea.updated_at) and idea.matches(content_filter)
        ]


class FakeDirectory(RecipientDirectory):
    """Recipient directory over a fixed list of teams."""

    def __init__(
        self,
        teams: list[TeamPreference] | None = None,
        fail: bool = False,
    ) -> None:
        self.teams = teams or []
        self.fail = fail
        self.calls: list[DigestFrequency] = []

    async def list_groups(self, cadence: DigestFrequency) -> list[TeamPreference]:
        self.calls.append(cadence)
        if self.fail:
            raise DirectoryError("preference store unavailable")
        return [team for team in self.teams if team.frequency == cadence]


class FakeTransport(ChatTransport):
    """Chat transport that records messages.

    ``results`` maps a destination to the SendResult to return; anything
    else is delivered. ``delay`` makes each send yield to the event loop.
    """

    def __init__(
        self,
        results: dict[str, SendResult] | None = None,
        delay: float = 0.0,
    ) -> None:
        self.results = results or {}
        self.delay = delay
        self.sent: list[tuple[str, dict[str, Any]]] = []

    async def send(self, destination: str, message: dict[str, Any]) -> SendResult:
        if self.delay:
            await asyncio.sleep(self.delay)
        self.sent.append((destination, message))
        if destination in self.results:
            return self.results[destination]
        return SendResult(success=True, message_ts=f"{len(self.sent)}.000100")

    @property
    def destinations(self) -> list[str]:
        return [destination for destination, _ in self.sent]
