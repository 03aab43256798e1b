"""Role and permission resolution shared by both surfaces."""
from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable

from ideabox.models import Actor, Role
from ideabox.repositories import ActorRepository

logger = logging.getLogger(__name__)

MODERATION_ROLES = frozenset({Role.MODERATOR, Role.ADMIN, Role.SUPER_ADMIN})
# Bot-side approval and guild configuration use the stricter internal set.
BOT_ADMIN_ROLES = frozenset({Role.ADMIN, Role.SUPER_ADMIN})

MemberRoleLookup = Callable[[str, str], Awaitable[Iterable[str]]]


def _role_of(actor: Actor | None) -> str:
    if actor is None:
        return ""
    return actor.role or Role.USER


def can_moderate(actor: Actor | None) -> bool:
    """Return True if the actor may approve or reject ideas from the dashboard."""
    return _role_of(actor) in MODERATION_ROLES


def can_assign_role(actor: Actor | None) -> bool:
    """Return True if the actor may change other actors' roles."""
    return _role_of(actor) == Role.SUPER_ADMIN


def can_manage_bot_config(actor: Actor | None) -> bool:
    """Return True if the actor may change a guild's bot configuration."""
    return _role_of(actor) in BOT_ADMIN_ROLES


async def can_approve(
    user_id: str,
    guild_id: str | None,
    *,
    repo: ActorRepository,
    fetch_member_role_ids: MemberRoleLookup,
) -> bool:
    """Return True if a Discord user may approve or reject ideas in a guild.

    The stored bot role is checked first; only when it is insufficient is the
    member's live role set fetched and intersected with the guild's
    configured approval roles.

    Args:
        user_id: Discord user id.
        guild_id: Guild the interaction happened in, or None for DMs.
        repo: Actor repository for stored roles and guild configuration.
        fetch_member_role_ids: Coroutine returning the member's Discord role ids.
    """
    if _role_of(repo.get_actor(user_id)) in BOT_ADMIN_ROLES:
        return True

    if guild_id is None:
        return False

    approval_roles = repo.get_guild_approval_roles(guild_id)
    if not approval_roles:
        return False

    try:
        member_roles = set(await fetch_member_role_ids(guild_id, user_id))
    except LookupError:
        logger.info("Member %s not found in guild %s", user_id, guild_id)
        return False
    return bool(member_roles & approval_roles)
