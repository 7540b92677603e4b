"""Digest window calculation and due-date checks.

Pure functions of ``now`` and the cadence so the scheduler's decisions can be
tested without a clock.
"""

import calendar
from datetime import date, datetime, timedelta

from idea_digest.config.digest import DEFAULT_DIGEST_CONFIG, DigestConfig
from idea_digest.models.digest import NotificationWindow
from idea_digest.models.team_preference import DigestFrequency


def subtract_months(day: date, months: int) -> date:
    """Go back whole calendar months, clamping to the target month's last day.

    Jan 31 minus one month is Dec 31; Mar 31 minus one month is Feb 28 (29).
    """
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def compute_window(
    cadence: DigestFrequency,
    now: datetime,
    config: DigestConfig = DEFAULT_DIGEST_CONFIG,
) -> NotificationWindow:
    """Window ending at ``date(now)`` (exclusive) for the given cadence."""
    to_date = now.date()
    if cadence == DigestFrequency.WEEKLY:
        from_date = to_date - timedelta(days=config.weekly_window_days)
    else:
        from_date = subtract_months(to_date, config.monthly_window_months)
    return NotificationWindow(from_date=from_date, to_date=to_date)


def is_due(cadence: DigestFrequency, now: datetime) -> bool:
    """Weekly digests go out on Mondays, monthly digests on the 1st."""
    if cadence == DigestFrequency.WEEKLY:
        return now.weekday() == calendar.MONDAY
    return now.day == 1


def due_cadences(now: datetime) -> list[DigestFrequency]:
    """Cadences due at ``now``, weekly first."""
    return [cadence for cadence in DigestFrequency if is_due(cadence, now)]
