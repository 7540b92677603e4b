"""Repository for TeamPreference entities.

Data access layer for the Firestore team_preferences collection. Also serves
as the digest engine's recipient directory.
"""

import asyncio

from google.api_core.exceptions import GoogleAPIError

from idea_digest.adapters.firestore_client import FirestoreClient
from idea_digest.errors import DirectoryError
from idea_digest.models.team_preference import DigestFrequency, TeamPreference
from idea_digest.repositories.base import BaseRepository
from idea_digest.services.interfaces import RecipientDirectory


class TeamPreferenceRepository(BaseRepository[TeamPreference], RecipientDirectory):
    """TeamPreference entity Repository.

    Firestore Collection: team_preferences
    """

    collection_name = "team_preferences"
    model_class = TeamPreference

    def __init__(self, firestore_client: FirestoreClient) -> None:
        """Initialize TeamPreferenceRepository.

        Args:
            firestore_client: Firestore client instance.
        """
        super().__init__(firestore_client)

    def find_by_frequency(self, frequency: DigestFrequency) -> list[TeamPreference]:
        """Preferences for a digest frequency.

        Documents with an unusable configuration are skipped and logged.

        Args:
            frequency: Digest frequency.

        Returns:
            Team preferences for that frequency.
        """
        return self.find_by([("frequency", "==", frequency.value)])

    async def list_groups(self, cadence: DigestFrequency) -> list[TeamPreference]:
        """RecipientDirectory implementation backed by Firestore."""
        try:
            return await asyncio.to_thread(self.find_by_frequency, cadence)
        except GoogleAPIError as e:
            raise DirectoryError(f"Team preference lookup failed: {e}") from e
