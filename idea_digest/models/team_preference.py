"""Team preference model.

Each team channel picks a digest frequency and the categories/tags it wants
to hear about. A preference is a recipient group for the digest engine.
"""

import re
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class DigestFrequency(str, Enum):
    """Digest cadence."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"


class TeamPreference(BaseModel):
    """Digest preference configured for a team channel.

    Firestore Collection: team_preferences
    """

    team_id: str = Field(..., min_length=1, description="Team ID (document ID)")
    channel_id: str = Field(..., description="Slack channel the digest is posted to")
    frequency: DigestFrequency = Field(..., description="Digest cadence")
    categories: list[str] = Field(
        default_factory=list, description="Subscribed category IDs"
    )
    tags: list[str] = Field(default_factory=list, description="Subscribed tags")

    updated_at: datetime | None = Field(None, description="Last updated at")
    updated_by_name: str | None = Field(None, description="Last editor")

    @field_validator("categories", "tags", mode="before")
    @classmethod
    def split_identifiers(cls, v: object) -> object:
        """Accept the semicolon separated strings written by the config tab."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(";") if item.strip()]
        return v

    @field_validator("channel_id")
    @classmethod
    def validate_channel_id(cls, v: str) -> str:
        """channel_id must look like a Slack conversation ID."""
        if not re.match(r"^[CG][A-Z0-9]{2,}$", v):
            raise ValueError("channel_id must be a Slack channel ID (C... or G...)")
        return v

    @property
    def id(self) -> str:
        """Recipient group identifier."""
        return self.team_id

    @property
    def content_filter(self) -> frozenset[str]:
        """Categories and tags this team subscribed to."""
        return frozenset([*self.categories, *self.tags])

    model_config = {
        "json_schema_extra": {
            "example": {
                "team_id": "19:abc@thread.skype",
                "channel_id": "C12345678",
                "frequency": "weekly",
                "categories": ["cat_design"],
                "tags": ["infra"],
            }
        }
    }
