"""Digest compiler: ideas for one team over one window."""

import structlog

from idea_digest.config.digest import DEFAULT_DIGEST_CONFIG, DigestConfig
from idea_digest.models.digest import DigestPayload, NotificationWindow
from idea_digest.models.team_preference import DigestFrequency, TeamPreference
from idea_digest.services.interfaces import IdeaQuery

logger = structlog.get_logger(__name__)


class DigestCompiler:
    """Builds a digest payload from the idea query layer."""

    def __init__(
        self,
        idea_query: IdeaQuery,
        config: DigestConfig = DEFAULT_DIGEST_CONFIG,
    ) -> None:
        """Initialize DigestCompiler.

        Args:
            idea_query: Idea search layer.
            config: Digest engine configuration (card size).
        """
        self.idea_query = idea_query
        self.config = config

    async def compile(
        self,
        group: TeamPreference,
        window: NotificationWindow,
        cadence: DigestFrequency | None = None,
    ) -> DigestPayload:
        """Compile the digest for a team.

        The query layer's ordering is kept as-is; the list is only cut to
        the card size. Query errors are not caught here.

        Args:
            group: Team preference (recipient group).
            window: Digest window.
            cadence: Cadence being run, defaults to the team's frequency.

        Returns:
            Digest payload, possibly with no items.
        """
        ideas = await self.idea_query.query(window, group.content_filter)
        items = tuple(ideas[: self.config.max_ideas])

        logger.debug(
            "digest_compiled",
            team_id=group.team_id,
            from_date=window.from_date.isoformat(),
            to_date=window.to_date.isoformat(),
            matched=len(ideas),
            included=len(items),
        )

        return DigestPayload(
            group=group,
            cadence=cadence or group.frequency,
            window=window,
            items=items,
        )
