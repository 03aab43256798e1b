"""Role-gated idea status transitions."""
from __future__ import annotations

import logging

from ideabox.models import Actor, Idea, IdeaStatus
from ideabox.repositories import IdeaRepository

from .errors import ForbiddenError, IdeaNotFoundError, InvalidTransitionError
from .permissions import can_moderate

logger = logging.getLogger(__name__)

DECISION_STATUSES = frozenset({IdeaStatus.APPROVED, IdeaStatus.REJECTED})


def set_status(
    repo: IdeaRepository,
    idea_id: int,
    requested: IdeaStatus | str,
    actor: Actor | None,
    *,
    authorized: bool | None = None,
) -> Idea:
    """Approve or reject a pending idea.

    Args:
        repo: Idea repository bound to the caller's session.
        idea_id: Idea to update.
        requested: ``approved`` or ``rejected``.
        actor: Actor performing the change.
        authorized: Pre-resolved permission from a surface with its own rules
            (the bot's guild approval roles). When None the dashboard rule
            :func:`can_moderate` applies.

    Raises:
        ForbiddenError: If the actor may not moderate.
        IdeaNotFoundError: If the idea does not exist.
        InvalidTransitionError: If the idea is not pending. Nothing is written.
        ValueError: If ``requested`` is not a decision status.
    """
    requested = IdeaStatus(requested)
    if requested not in DECISION_STATUSES:
        raise ValueError(f"Cannot set status to {requested}")

    allowed = can_moderate(actor) if authorized is None else authorized
    if not allowed:
        raise ForbiddenError("Insufficient permissions")

    idea = repo.get_idea(idea_id)
    if idea is None:
        raise IdeaNotFoundError(idea_id)
    if idea.status != IdeaStatus.PENDING:
        raise InvalidTransitionError(idea_id, idea.status, requested)

    repo.set_idea_status(idea_id, requested)
    repo.commit()
    logger.info(
        "Idea %s %s by %s", idea_id, requested, actor.id if actor is not None else "unknown"
    )
    return idea
