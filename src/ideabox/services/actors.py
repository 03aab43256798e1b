"""Actor provisioning and role assignment."""
from __future__ import annotations

import logging

from ideabox.models import Actor, ActorOrigin, Role
from ideabox.repositories import ActorRepository

from .errors import ActorNotFoundError, ForbiddenError, InvalidRoleError
from .permissions import can_assign_role

logger = logging.getLogger(__name__)


def parse_role(value: str) -> Role:
    """Return the :class:`Role` named by ``value``."""
    try:
        return Role(value)
    except ValueError as err:
        raise InvalidRoleError(f"Unknown role: {value!r}") from err


def find_actor(repo: ActorRepository, reference: str) -> Actor:
    """Resolve an actor by email, then username, then id."""
    actor = (
        repo.get_actor_by_email(reference)
        or repo.get_actor_by_username(reference)
        or repo.get_actor(reference)
    )
    if actor is None:
        raise ActorNotFoundError(reference)
    return actor


def assign_role(repo: ActorRepository, actor: Actor, target: Actor, role: Role | str) -> Actor:
    """Set ``target``'s role on behalf of ``actor``.

    Only a super admin may assign roles, and never to themselves.

    Raises:
        ForbiddenError: If ``actor`` is not a super admin or targets itself.
        InvalidRoleError: If ``role`` is not a known role.
    """
    if not can_assign_role(actor):
        raise ForbiddenError("Only super admins can assign roles")
    if target.id == actor.id:
        raise ForbiddenError("You cannot change your own role")

    new_role = parse_role(role)
    repo.set_role(target.id, new_role)
    repo.commit()
    logger.info("Role of %s set to %s by %s", target.id, new_role, actor.id)
    return target


def ensure_discord_actor(
    repo: ActorRepository,
    user_id: str,
    *,
    username: str | None = None,
    display_name: str | None = None,
    avatar: str | None = None,
) -> Actor:
    """Return the actor for a Discord user, creating it on first contact."""
    actor = repo.get_actor(user_id)
    if actor is not None:
        return actor
    actor = repo.upsert_actor(
        user_id,
        origin=ActorOrigin.DISCORD,
        username=username,
        display_name=display_name,
        avatar=avatar,
    )
    repo.commit()
    logger.info("Registered Discord user %s (%s)", user_id, username)
    return actor
