"""Repository layer for Firestore data access."""

from idea_digest.repositories.base import BaseRepository
from idea_digest.repositories.idea_repo import IdeaRepository
from idea_digest.repositories.team_preference_repo import TeamPreferenceRepository

__all__ = [
    "BaseRepository",
    "IdeaRepository",
    "TeamPreferenceRepository",
]
