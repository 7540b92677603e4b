"""Idea model for submitted ideas.

Ideas are owned by the idea storage/search layer; the digest engine only
reads them.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class IdeaStatus(str, Enum):
    """Curator review status."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Idea(BaseModel):
    """A submitted idea.

    Firestore Collection: ideas
    """

    id: str = Field(..., description="Unique ID")
    title: str = Field(..., min_length=1, max_length=200, description="Idea title")
    description: str = Field("", max_length=500, description="Idea description")

    created_by_name: str = Field(..., description="Author display name")
    created_by_object_id: str | None = Field(None, description="Author AAD object ID")

    category_id: str = Field(..., description="Category reference")
    category: str = Field("", description="Category display name")
    tags: list[str] = Field(default_factory=list, description="Free-form tags")

    total_votes: int = Field(0, ge=0, description="Upvotes (popularity)")
    status: IdeaStatus = Field(IdeaStatus.PENDING, description="Review status")

    created_at: datetime = Field(..., description="Created at")
    updated_at: datetime = Field(..., description="Last updated at")

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v: object) -> object:
        """Accept the semicolon separated tag string stored by older clients."""
        if isinstance(v, str):
            return [tag.strip() for tag in v.split(";") if tag.strip()]
        return v

    @property
    def labels(self) -> frozenset[str]:
        """Category ID and tags, the identifiers a digest filter matches on."""
        return frozenset([self.category_id, *self.tags])

    def matches(self, content_filter: frozenset[str]) -> bool:
        """Check the idea against a recipient filter (empty = no restriction)."""
        if not content_filter:
            return True
        return not self.labels.isdisjoint(content_filter)

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "idea_001",
                "title": "Self-service design review slots",
                "created_by_name": "Alex Kim",
                "category_id": "cat_design",
                "category": "Design",
                "tags": ["design", "process"],
                "total_votes": 12,
                "status": "approved",
                "created_at": "2025-12-01T08:00:00Z",
                "updated_at": "2025-12-03T10:00:00Z",
            }
        }
    }
