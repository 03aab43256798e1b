"""Vote reconciliation: at most one vote per (idea, user), whichever surface writes it."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from sqlalchemy.exc import IntegrityError

from ideabox.models import Vote, VoteDirection
from ideabox.repositories import IdeaRepository

from .errors import IdeaNotFoundError, VotingClosedError

logger = logging.getLogger(__name__)

# One retry is enough: after a lost insert race the competing row is visible.
MAX_ATTEMPTS = 2


class VoteOutcome(StrEnum):
    CREATED = "created"
    CHANGED = "changed"
    REMOVED = "removed"


@dataclass(frozen=True)
class VoteResult:
    """Transition applied by :func:`apply_vote`.

    ``vote`` is the surviving row for created/changed outcomes and None when
    the vote was toggled off.
    """

    outcome: VoteOutcome
    direction: VoteDirection | None = None
    vote: Vote | None = None


def _toggle(
    repo: IdeaRepository,
    idea_id: int,
    user_id: str,
    direction: VoteDirection,
) -> VoteResult:
    existing = repo.get_vote(idea_id, user_id)
    if existing is None:
        vote = repo.insert_vote(idea_id, user_id, direction)
        return VoteResult(VoteOutcome.CREATED, direction, vote)

    if existing.direction == direction:
        repo.delete_vote(idea_id, user_id)
        return VoteResult(VoteOutcome.REMOVED)

    # Flip as delete + insert inside the same transaction.
    repo.delete_vote(idea_id, user_id)
    vote = repo.insert_vote(idea_id, user_id, direction)
    return VoteResult(VoteOutcome.CHANGED, direction, vote)


def apply_vote(
    repo: IdeaRepository,
    idea_id: int,
    user_id: str,
    direction: VoteDirection | str,
) -> VoteResult:
    """Apply the three-way vote toggle and commit it.

    - no vote yet: insert one (``created``)
    - same direction again: delete it (``removed``)
    - opposite direction: replace it (``changed``)

    Args:
        repo: Idea repository bound to the caller's session.
        idea_id: Idea being voted on.
        user_id: Actor casting the vote.
        direction: ``up`` or ``down``.

    Raises:
        IdeaNotFoundError: If the idea does not exist.
        VotingClosedError: If the idea is rejected. Nothing is written.
        ValueError: If ``direction`` is not a valid vote direction.
    """
    direction = VoteDirection(direction)
    idea = repo.get_idea(idea_id)
    if idea is None:
        raise IdeaNotFoundError(idea_id)
    if not idea.voting_open:
        logger.info("Vote by %s on idea %s refused: status %s", user_id, idea_id, idea.status)
        raise VotingClosedError(idea_id, idea.status)

    attempt = 1
    while True:
        try:
            result = _toggle(repo, idea_id, user_id, direction)
            repo.commit()
        except IntegrityError:
            # A concurrent writer inserted the row between our read and insert.
            repo.rollback()
            if attempt == MAX_ATTEMPTS:
                raise
            logger.info(
                "Concurrent vote on idea %s by %s; retrying against the stored row",
                idea_id,
                user_id,
            )
            attempt += 1
            continue
        logger.debug(
            "Vote %s on idea %s by %s (%s)", result.outcome, idea_id, user_id, direction
        )
        return result


def retract_vote(repo: IdeaRepository, idea_id: int, user_id: str) -> bool:
    """Delete a user's vote on an idea unconditionally.

    This is what a withdrawn reaction means; it never toggles. Retracting is
    allowed on closed ideas so a user can always clear their own vote.

    Returns:
        True if a vote row was deleted.
    """
    removed = repo.delete_vote(idea_id, user_id)
    repo.commit()
    if removed:
        logger.debug("Vote on idea %s retracted by %s", idea_id, user_id)
    return removed
