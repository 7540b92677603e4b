"""Delivery dispatcher: posts a compiled digest to its team channel."""

import structlog

from idea_digest.cards.digest_card import build_digest_card
from idea_digest.errors import ConfigurationError
from idea_digest.models.digest import DeliveryResult, DigestPayload, OutcomeStatus
from idea_digest.services.interfaces import ChatTransport

logger = structlog.get_logger(__name__)


class DeliveryDispatcher:
    """Renders a digest card and sends it once. Never retries."""

    def __init__(
        self,
        transport: ChatTransport,
        app_base_url: str | None = None,
    ) -> None:
        """Initialize DeliveryDispatcher.

        Args:
            transport: Chat transport.
            app_base_url: Ideas tab URL linked from the card.
        """
        self.transport = transport
        self.app_base_url = app_base_url

    async def dispatch(self, payload: DigestPayload) -> DeliveryResult:
        """Send a digest payload.

        Args:
            payload: Compiled digest.

        Returns:
            SKIPPED_EMPTY without sending when there are no ideas, otherwise
            DELIVERED or FAILED as reported by the transport.

        Raises:
            ConfigurationError: If the team has no destination channel.
            TransportError: If the transport cannot be reached.
        """
        team_id = payload.group.team_id
        if payload.is_empty:
            logger.info("digest_skipped_empty", team_id=team_id)
            return DeliveryResult(status=OutcomeStatus.SKIPPED_EMPTY)

        destination = payload.group.channel_id
        if not destination or not destination.strip():
            raise ConfigurationError(f"team {team_id} has no destination channel")

        message = build_digest_card(payload, app_base_url=self.app_base_url)
        logger.info(
            "digest_sending",
            team_id=team_id,
            channel_id=destination,
            idea_count=len(payload.items),
        )
        result = await self.transport.send(destination, message)

        if not result.success:
            return DeliveryResult(
                status=OutcomeStatus.FAILED,
                error=result.error or "Unknown error",
                fatal=result.fatal,
            )

        return DeliveryResult(
            status=OutcomeStatus.DELIVERED,
            message_ts=result.message_ts,
        )
