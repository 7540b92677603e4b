"""External service adapters."""

from idea_digest.adapters.firestore_client import FirestoreClient
from idea_digest.adapters.slack_client import SlackClient, SlackTransport

__all__ = [
    "FirestoreClient",
    "SlackClient",
    "SlackTransport",
]
