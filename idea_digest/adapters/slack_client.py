"""Slack API client and chat transport."""

import asyncio
from typing import Any, cast

import structlog
from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError, SlackClientError
from slack_sdk.http_retry.builtin_handlers import (
    RateLimitErrorRetryHandler,
    ServerErrorRetryHandler,
)

from idea_digest.errors import TransportError
from idea_digest.models.digest import SendResult
from idea_digest.services.interfaces import ChatTransport

logger = structlog.get_logger(__name__)

# Errors that will fail for every channel until the bot is reinstalled
FATAL_SLACK_ERRORS = frozenset(
    {
        "account_inactive",
        "invalid_auth",
        "not_authed",
        "token_expired",
        "token_revoked",
    }
)


class SlackClient:
    """Client for Slack API operations."""

    def __init__(self, token: str, max_retries: int = 2) -> None:
        """Initialize Slack client.

        Args:
            token: Slack Bot OAuth token (xoxb-...).
            max_retries: Retries for HTTP 429 and 5xx responses.
        """
        self._client = WebClient(token=token)
        if max_retries:
            self._client.retry_handlers.extend(
                [
                    RateLimitErrorRetryHandler(max_retry_count=max_retries),
                    ServerErrorRetryHandler(max_retry_count=max_retries),
                ]
            )

    def post_message(
        self,
        channel: str,
        text: str,
        blocks: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        """Post a message to a Slack channel.

        Args:
            channel: Channel ID (C...).
            text: Plain text message (used as fallback for blocks).
            blocks: Optional Block Kit blocks.

        Returns:
            Slack API response.

        Raises:
            SlackApiError: If the API call fails.
        """
        response = self._client.chat_postMessage(
            channel=channel,
            text=text,
            blocks=blocks,
        )
        return cast(dict[str, Any], response.data)


class SlackTransport(ChatTransport):
    """ChatTransport posting rendered digest cards to Slack channels."""

    def __init__(self, slack_client: SlackClient) -> None:
        self._slack = slack_client

    async def send(self, destination: str, message: dict[str, Any]) -> SendResult:
        """Post one message; the blocking SDK call runs in a worker thread."""
        try:
            response = await asyncio.to_thread(
                self._slack.post_message,
                channel=destination,
                text=message.get("text", ""),
                blocks=message.get("blocks"),
            )
        except SlackApiError as e:
            error = e.response.get("error") if e.response is not None else None
            error = error or str(e)
            logger.warning("slack_post_rejected", channel_id=destination, error=error)
            return SendResult(
                success=False,
                error=error,
                fatal=error in FATAL_SLACK_ERRORS,
            )
        except (SlackClientError, OSError) as e:
            raise TransportError(f"Slack unreachable: {e}") from e

        return SendResult(success=True, message_ts=response.get("ts"))
