"""Vote-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from ideabox.models import VoteDirection


class VoteCreate(BaseModel):
    """Schema for casting a vote on an idea."""

    direction: VoteDirection = Field(..., description="'up' or 'down'")


class VoteResponse(BaseModel):
    """A persisted vote row."""

    id: int
    idea_id: int
    user_id: str
    direction: VoteDirection
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class VoteOutcome(BaseModel):
    """Result of a vote request, including the row when one remains."""

    outcome: Literal["created", "changed", "removed"]
    direction: VoteDirection | None = None
    vote: VoteResponse | None = None


class MyVote(BaseModel):
    """The caller's current vote on an idea, if any."""

    direction: VoteDirection | None = None


class VoteCounts(BaseModel):
    """Aggregate vote counts for one idea."""

    idea_id: int
    upvotes: int = Field(0, ge=0)
    downvotes: int = Field(0, ge=0)
