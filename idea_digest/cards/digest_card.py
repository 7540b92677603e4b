"""Digest list card.

Builds the Slack Block Kit message for a weekly or monthly idea digest.
"""

from datetime import timedelta
from typing import Any

from idea_digest.models.digest import DigestPayload
from idea_digest.models.idea import Idea
from idea_digest.models.team_preference import DigestFrequency

CARD_TITLES = {
    DigestFrequency.WEEKLY: "Weekly idea digest",
    DigestFrequency.MONTHLY: "Monthly idea digest",
}


def _escape(text: str) -> str:
    """Escape the characters Slack treats as control sequences in mrkdwn."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def card_title(cadence: DigestFrequency) -> str:
    """Card header for a cadence."""
    return CARD_TITLES[cadence]


def build_idea_blocks(index: int, idea: Idea) -> list[dict[str, Any]]:
    """Two blocks per idea: title with author/votes, then category and tags."""
    subtitle = f"{_escape(idea.created_by_name)} | :thumbsup: {idea.total_votes}"
    blocks: list[dict[str, Any]] = [
        {
            "type": "section",
            "block_id": f"idea_{idea.id}",
            "text": {
                "type": "mrkdwn",
                "text": f"*{index}. {_escape(idea.title)}*\n{subtitle}",
            },
        }
    ]

    labels = [f"`{_escape(tag)}`" for tag in idea.tags]
    if idea.category:
        labels.insert(0, f"*{_escape(idea.category)}*")
    if labels:
        blocks.append(
            {
                "type": "context",
                "elements": [{"type": "mrkdwn", "text": "  ".join(labels)}],
            }
        )
    return blocks


def build_digest_card(
    payload: DigestPayload,
    app_base_url: str | None = None,
) -> dict[str, Any]:
    """Render a digest payload as a Slack message.

    Args:
        payload: Compiled digest.
        app_base_url: Optional link to the ideas tab.

    Returns:
        ``{"text": fallback, "blocks": [...]}``
    """
    title = card_title(payload.cadence)
    window = payload.window
    # to_date is exclusive
    last_day = window.to_date - timedelta(days=1)
    period = f"{window.from_date.isoformat()} to {last_day.isoformat()}"

    blocks: list[dict[str, Any]] = [
        {
            "type": "header",
            "text": {"type": "plain_text", "text": f":bulb: {title}", "emoji": True},
        },
        {
            "type": "context",
            "elements": [
                {
                    "type": "mrkdwn",
                    "text": f"*{len(payload.items)}* ideas updated from {period}",
                }
            ],
        },
        {"type": "divider"},
    ]

    for i, idea in enumerate(payload.items, start=1):
        blocks.extend(build_idea_blocks(i, idea))

    blocks.append({"type": "divider"})
    if app_base_url:
        blocks.append(
            {
                "type": "actions",
                "elements": [
                    {
                        "type": "button",
                        "text": {
                            "type": "plain_text",
                            "text": "View all ideas",
                            "emoji": True,
                        },
                        "url": app_base_url,
                        "action_id": "view_all_ideas",
                    }
                ],
            }
        )

    return {"text": f"{title} ({period})", "blocks": blocks}
