"""Digest models.

Windows, payloads and outcomes exist for one scheduler cycle only; none of
them is persisted.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from idea_digest.models.idea import Idea
from idea_digest.models.team_preference import DigestFrequency, TeamPreference


class NotificationWindow(BaseModel):
    """Half-open date range ``[from_date, to_date)`` a digest covers."""

    model_config = ConfigDict(frozen=True)

    from_date: date = Field(..., description="First day included")
    to_date: date = Field(..., description="First day excluded")

    @model_validator(mode="after")
    def validate_range(self) -> "NotificationWindow":
        """from_date must be strictly before to_date."""
        if self.from_date >= self.to_date:
            raise ValueError(
                f"from_date ({self.from_date}) must be before to_date ({self.to_date})"
            )
        return self

    @property
    def days(self) -> int:
        """Window length in days."""
        return (self.to_date - self.from_date).days

    def contains(self, moment: datetime | date) -> bool:
        """Check whether a timestamp falls inside the window."""
        day = moment.date() if isinstance(moment, datetime) else moment
        return self.from_date <= day < self.to_date


class DigestPayload(BaseModel):
    """Ideas compiled for one team over one window."""

    model_config = ConfigDict(frozen=True)

    group: TeamPreference
    cadence: DigestFrequency
    window: NotificationWindow
    items: tuple[Idea, ...] = ()

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to send."""
        return not self.items


class OutcomeStatus(str, Enum):
    """Per-group outcome of a cycle."""

    DELIVERED = "delivered"
    SKIPPED_EMPTY = "skipped_empty"
    FAILED = "failed"


@dataclass(frozen=True)
class SendResult:
    """Chat transport send result."""

    success: bool
    message_ts: str | None = None
    error: str | None = None
    fatal: bool = False


@dataclass(frozen=True)
class DeliveryResult:
    """Delivery dispatcher result."""

    status: OutcomeStatus
    message_ts: str | None = None
    error: str | None = None
    fatal: bool = False


@dataclass(frozen=True)
class CycleOutcome:
    """What happened to one team in one cadence cycle."""

    group_id: str
    cadence: DigestFrequency
    status: OutcomeStatus
    reason: str | None = None


# Tagged results of the per-group step


@dataclass(frozen=True)
class Ok:
    """The group was delivered or had nothing to send."""

    outcome: CycleOutcome


@dataclass(frozen=True)
class TransientFailure:
    """The group failed; the next due tick retries it."""

    group_id: str
    reason: str


@dataclass(frozen=True)
class FatalFailure:
    """The failure affects every group; the rest of the cadence is abandoned."""

    group_id: str
    reason: str


GroupResult = Ok | TransientFailure | FatalFailure


@dataclass
class CycleReport:
    """Summary of one scheduler tick."""

    tick_at: datetime
    cadences: list[DigestFrequency] = field(default_factory=list)
    outcomes: list[CycleOutcome] = field(default_factory=list)
    interrupted: int = 0

    def count(self, status: OutcomeStatus) -> int:
        """Number of outcomes with the given status."""
        return sum(1 for o in self.outcomes if o.status == status)

    def summary(self) -> dict[str, int]:
        """Counts for logging and the status endpoint."""
        return {
            "total": len(self.outcomes),
            "delivered": self.count(OutcomeStatus.DELIVERED),
            "skipped": self.count(OutcomeStatus.SKIPPED_EMPTY),
            "failed": self.count(OutcomeStatus.FAILED),
            "interrupted": self.interrupted,
        }
