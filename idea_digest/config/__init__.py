"""Configuration module."""

from idea_digest.config.digest import DEFAULT_DIGEST_CONFIG, DigestConfig
from idea_digest.config.logging import configure_logging, get_logger
from idea_digest.config.settings import Settings, get_settings

__all__ = [
    "DEFAULT_DIGEST_CONFIG",
    "DigestConfig",
    "Settings",
    "configure_logging",
    "get_logger",
    "get_settings",
]
