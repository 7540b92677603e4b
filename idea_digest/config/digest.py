"""Digest engine configuration passed to the window calculator, compiler and scheduler."""

from datetime import timedelta

from pydantic import BaseModel, ConfigDict, Field


class DigestConfig(BaseModel):
    """Immutable digest engine configuration.

    Built from ``Settings.digest_config()`` in the application, or directly
    in tests.
    """

    model_config = ConfigDict(frozen=True)

    tick_interval: timedelta = Field(
        timedelta(days=1), description="Sleep between scheduler ticks"
    )
    weekly_window_days: int = Field(7, ge=1, description="Weekly window length")
    monthly_window_months: int = Field(
        1, ge=1, description="Monthly window length in calendar months"
    )
    max_ideas: int = Field(
        15, ge=1, le=20, description="Ideas per digest card (one Slack message)"
    )
    max_concurrent_deliveries: int = Field(
        4, ge=1, description="Recipient groups processed at once per cadence"
    )

    @classmethod
    def from_hours(cls, tick_interval_hours: float, **kwargs: int) -> "DigestConfig":
        """Create a config with the tick interval given in hours."""
        return cls(tick_interval=timedelta(hours=tick_interval_hours), **kwargs)


DEFAULT_DIGEST_CONFIG = DigestConfig()
