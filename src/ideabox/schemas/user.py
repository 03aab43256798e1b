"""Actor-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ideabox.models import ActorOrigin, Role


class ActorResponse(BaseModel):
    """Actor details returned to the dashboard."""

    id: str
    origin: ActorOrigin
    username: str | None = None
    display_name: str | None = None
    email: str | None = None
    role: Role
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RoleAssignment(BaseModel):
    """Schema for assigning a role to another actor."""

    username: str = Field(..., min_length=1, description="Email or username of the target")
    role: Role = Field(..., description="Role to assign")
