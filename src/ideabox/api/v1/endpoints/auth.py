"""Authentication endpoints for the IdeaBox API.

Sign-in itself is handled by the identity provider in front of the
dashboard; this router only exposes the resolved actor.
"""

from __future__ import annotations

from fastapi import APIRouter

from ideabox.api.v1.dependencies import CurrentActorDep
from ideabox.models import Actor
from ideabox.schemas import ActorResponse

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.get("/me", response_model=ActorResponse)
async def read_current_actor(current_actor: CurrentActorDep) -> Actor:
    """Return the authenticated actor."""
    return current_actor
