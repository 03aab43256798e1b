"""Actor administration endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from ideabox.api.v1.dependencies import ActorRepoDep, CurrentActorDep
from ideabox.models import Actor
from ideabox.schemas import ActorResponse, RoleAssignment
from ideabox.services.actors import assign_role, find_actor
from ideabox.services.errors import ForbiddenError
from ideabox.services.permissions import can_assign_role

router = APIRouter(prefix="/users", tags=["users"])


@router.patch("/role", response_model=ActorResponse)
async def update_user_role(
    assignment: RoleAssignment,
    current_actor: CurrentActorDep,
    actors: ActorRepoDep,
) -> Actor:
    """Assign a role to another user (super admins only).

    ``username`` is matched against email first, then username, then id.
    """
    # Checked before the lookup so non-admins cannot probe for users.
    if not can_assign_role(current_actor):
        raise ForbiddenError("Only super admins can assign roles")
    target = find_actor(actors, assignment.username)
    return assign_role(actors, current_actor, target, assignment.role)
