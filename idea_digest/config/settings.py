"""Environment configuration for the digest service."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from idea_digest.config.digest import DigestConfig


class Settings(BaseSettings):
    """Settings read from the environment (or a local .env file).

    Only the GCP project and the Slack bot token are required; the digest
    schedule defaults to a daily tick with Monday weekly and 1st-of-month
    monthly digests.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Google Cloud Platform
    # -------------------------------------------------------------------------
    GCP_PROJECT_ID: str

    # Set for local runs against the emulator
    FIRESTORE_EMULATOR_HOST: str | None = None

    # -------------------------------------------------------------------------
    # Slack
    # -------------------------------------------------------------------------
    SLACK_BOT_TOKEN: str
    SLACK_RATE_LIMIT_RETRIES: int = Field(2, ge=0)
    """429 / 5xx retries handled inside the Slack SDK"""

    APP_BASE_URL: str | None = None
    """Ideas tab URL linked from the digest card"""

    # -------------------------------------------------------------------------
    # Digest notifications
    # -------------------------------------------------------------------------
    DIGEST_SCHEDULER_ENABLED: bool = True
    DIGEST_TICK_INTERVAL_HOURS: float = Field(24.0, gt=0)
    DIGEST_WEEKLY_WINDOW_DAYS: int = Field(7, ge=1)
    DIGEST_MONTHLY_WINDOW_MONTHS: int = Field(1, ge=1)

    DIGEST_MAX_IDEAS: int = Field(15, ge=1, le=20)
    """Ideas per card. 20 still fits in a single Slack message."""

    DIGEST_MAX_CONCURRENT_DELIVERIES: int = Field(4, ge=1)

    # -------------------------------------------------------------------------
    # Application
    # -------------------------------------------------------------------------
    LOG_JSON: bool = True

    @property
    def is_local(self) -> bool:
        """Check if running in local development mode."""
        return self.FIRESTORE_EMULATOR_HOST is not None

    def digest_config(self) -> DigestConfig:
        """Build the digest engine configuration from these settings."""
        return DigestConfig.from_hours(
            tick_interval_hours=self.DIGEST_TICK_INTERVAL_HOURS,
            weekly_window_days=self.DIGEST_WEEKLY_WINDOW_DAYS,
            monthly_window_months=self.DIGEST_MONTHLY_WINDOW_MONTHS,
            max_ideas=self.DIGEST_MAX_IDEAS,
            max_concurrent_deliveries=self.DIGEST_MAX_CONCURRENT_DELIVERIES,
        )


# Singleton instance (lazy initialization)
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the application settings (singleton)."""
    global _settings
    if _settings is None:
        _settings = Settings()  # type: ignore[call-arg]
    return _settings
