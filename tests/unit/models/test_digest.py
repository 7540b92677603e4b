"""Tests for digest models."""

from datetime import UTC, date, datetime

import pytest
from pydantic import ValidationError

from idea_digest.models.digest import (
    CycleOutcome,
    CycleReport,
    DigestPayload,
    NotificationWindow,
    OutcomeStatus,
)
from idea_digest.models.team_preference import DigestFrequency
from tests.utils import make_idea, make_team


class TestNotificationWindow:
    """Tests for NotificationWindow."""

    def test_days(self) -> None:
        """days should be the window length."""
        window = NotificationWindow(from_date=date(2025, 12, 1), to_date=date(2025, 12, 8))

        assert window.days == 7

    def test_from_must_precede_to(self) -> None:
        """Empty or inverted windows should be rejected."""
        with pytest.raises(ValidationError):
            NotificationWindow(from_date=date(2025, 12, 8), to_date=date(2025, 12, 8))
        with pytest.raises(ValidationError):
            NotificationWindow(from_date=date(2025, 12, 9), to_date=date(2025, 12, 8))

    def test_contains_is_half_open(self) -> None:
        """from_date is included, to_date is not."""
        window = NotificationWindow(from_date=date(2025, 12, 1), to_date=date(2025, 12, 8))

        assert window.contains(date(2025, 12, 1)) is True
        assert window.contains(datetime(2025, 12, 7, 23, 59, tzinfo=UTC)) is True
        assert window.contains(datetime(2025, 12, 8, 0, 0, tzinfo=UTC)) is False
        assert window.contains(date(2025, 11, 30)) is False

    def test_is_frozen(self) -> None:
        """Windows should be immutable."""
        window = NotificationWindow(from_date=date(2025, 12, 1), to_date=date(2025, 12, 8))

        with pytest.raises(ValidationError):
            window.from_date = date(2025, 11, 1)  # type: ignore[misc]


class TestDigestPayload:
    """Tests for DigestPayload."""

    def test_is_empty(self) -> None:
        """A payload without items should be empty."""
        window = NotificationWindow(from_date=date(2025, 12, 1), to_date=date(2025, 12, 8))
        payload = DigestPayload(
            group=make_team(), cadence=DigestFrequency.WEEKLY, window=window
        )

        assert payload.is_empty is True

    def test_items_kept_in_order(self) -> None:
        """Items should be stored in the given order."""
        window = NotificationWindow(from_date=date(2025, 12, 1), to_date=date(2025, 12, 8))
        ideas = [make_idea("idea_b"), make_idea("idea_a")]
        payload = DigestPayload(
            group=make_team(),
            cadence=DigestFrequency.WEEKLY,
            window=window,
            items=ideas,
        )

        assert payload.is_empty is False
        assert [i.id for i in payload.items] == ["idea_b", "idea_a"]


class TestCycleReport:
    """Tests for CycleReport."""

    def test_summary(self) -> None:
        """summary should count outcomes by status."""
        report = CycleReport(tick_at=datetime(2025, 12, 1, tzinfo=UTC))
        weekly = DigestFrequency.WEEKLY
        report.outcomes.extend(
            [
                CycleOutcome("team_a", weekly, OutcomeStatus.DELIVERED),
                CycleOutcome("team_b", weekly, OutcomeStatus.DELIVERED),
                CycleOutcome("team_c", weekly, OutcomeStatus.SKIPPED_EMPTY),
                CycleOutcome("team_d", weekly, OutcomeStatus.FAILED, "channel_not_found"),
            ]
        )
        report.interrupted = 1

        assert report.summary() == {
            "total": 4,
            "delivered": 2,
            "skipped": 1,
            "failed": 1,
            "interrupted": 1,
        }

    def test_empty_summary(self) -> None:
        """A tick with nothing due should report zeros."""
        report = CycleReport(tick_at=datetime(2025, 12, 2, tzinfo=UTC))

        assert report.summary()["total"] == 0
        assert report.cadences == []
