"""Domain models for the idea digest engine.

This module exports all models used across the application.
"""

from idea_digest.models.digest import (
    CycleOutcome,
    CycleReport,
    DeliveryResult,
    DigestPayload,
    FatalFailure,
    GroupResult,
    NotificationWindow,
    Ok,
    OutcomeStatus,
    SendResult,
    TransientFailure,
)
from idea_digest.models.idea import Idea, IdeaStatus
from idea_digest.models.team_preference import DigestFrequency, TeamPreference

__all__ = [
    "CycleOutcome",
    "CycleReport",
    "DeliveryResult",
    "DigestFrequency",
    "DigestPayload",
    "FatalFailure",
    "GroupResult",
    "Idea",
    "IdeaStatus",
    "NotificationWindow",
    "Ok",
    "OutcomeStatus",
    "SendResult",
    "TeamPreference",
    "TransientFailure",
]
