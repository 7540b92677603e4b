"""Wiring of the digest engine from settings."""

from idea_digest.adapters.firestore_client import FirestoreClient
from idea_digest.adapters.slack_client import SlackClient, SlackTransport
from idea_digest.config.settings import Settings
from idea_digest.repositories.idea_repo import IdeaRepository
from idea_digest.repositories.team_preference_repo import TeamPreferenceRepository
from idea_digest.services.cycle_scheduler import CycleScheduler
from idea_digest.services.delivery_dispatcher import DeliveryDispatcher
from idea_digest.services.digest_compiler import DigestCompiler


def build_scheduler(
    settings: Settings,
    firestore: FirestoreClient,
    slack: SlackClient,
) -> CycleScheduler:
    """Build a CycleScheduler backed by Firestore and Slack.

    Args:
        settings: Application settings.
        firestore: Firestore client.
        slack: Slack client.

    Returns:
        CycleScheduler instance (not started).
    """
    config = settings.digest_config()
    return CycleScheduler(
        directory=TeamPreferenceRepository(firestore),
        compiler=DigestCompiler(IdeaRepository(firestore), config=config),
        dispatcher=DeliveryDispatcher(
            SlackTransport(slack),
            app_base_url=settings.APP_BASE_URL,
        ),
        config=config,
    )
