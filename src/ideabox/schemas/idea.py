"""Idea-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ideabox.models import IdeaCategory, IdeaStatus, VoteDirection


class IdeaCreate(BaseModel):
    """Schema for submitting a new idea."""

    title: str = Field(..., min_length=1, max_length=200, description="Short idea title")
    description: str = Field(..., min_length=1, description="Full description of the idea")
    category: IdeaCategory = Field(..., description="Category tag")

    model_config = ConfigDict(str_strip_whitespace=True)


class StatusUpdate(BaseModel):
    """Schema for approving or rejecting an idea."""

    status: IdeaStatus = Field(..., description="Target status: approved or rejected")

    @field_validator("status")
    @classmethod
    def _must_be_decision(cls, value: IdeaStatus) -> IdeaStatus:
        if value not in (IdeaStatus.APPROVED, IdeaStatus.REJECTED):
            raise ValueError("status must be 'approved' or 'rejected'")
        return value


class AuthorSummary(BaseModel):
    """Public author fields shown alongside an idea."""

    id: str
    username: str | None = None
    display_name: str | None = None

    model_config = ConfigDict(from_attributes=True)


class IdeaResponse(BaseModel):
    """Idea as stored, without vote information."""

    id: int
    title: str
    description: str
    category: str
    status: IdeaStatus
    author_id: str
    message_id: str | None = None
    channel_id: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class IdeaWithVotes(IdeaResponse):
    """Idea with its derived vote counts and the viewer's own vote."""

    author: AuthorSummary
    upvotes: int = Field(0, ge=0)
    downvotes: int = Field(0, ge=0)
    user_vote: VoteDirection | None = None


class IdeaStats(BaseModel):
    """Number of ideas in each review state."""

    pending: int
    approved: int
    rejected: int
