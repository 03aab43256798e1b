"""Maps Discord reaction events onto the vote reconciliation core.

Nothing here touches the Discord client; listeners build a
:class:`ReactionEvent` from the gateway payload and hand it over with a
database session.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from ideabox.models import VoteDirection
from ideabox.repositories import ActorRepository, IdeaRepository
from ideabox.services.actors import ensure_discord_actor
from ideabox.services.errors import VotingClosedError
from ideabox.services.voting import VoteResult, apply_vote, retract_vote

logger = logging.getLogger(__name__)

UPVOTE_EMOJI = "👍"
DOWNVOTE_EMOJI = "👎"

EMOJI_DIRECTIONS: dict[str, VoteDirection] = {
    UPVOTE_EMOJI: VoteDirection.UP,
    DOWNVOTE_EMOJI: VoteDirection.DOWN,
}


@dataclass(frozen=True)
class ReactionEvent:
    """A reaction added to or removed from a message."""

    message_id: str
    user_id: str
    emoji: str
    is_bot: bool = False
    username: str | None = None
    display_name: str | None = None
    avatar: str | None = None


def direction_for_emoji(emoji: str) -> VoteDirection | None:
    """Return the vote direction an emoji stands for, or None to ignore it."""
    return EMOJI_DIRECTIONS.get(emoji)


def handle_reaction_add(db: Session, event: ReactionEvent) -> VoteResult | None:
    """Apply a 👍/👎 reaction as a vote.

    Returns None when the event is ignored: bot reactions, other emoji,
    messages that are not ideas, and ideas closed to voting.
    """
    if event.is_bot:
        return None
    direction = direction_for_emoji(event.emoji)
    if direction is None:
        return None

    ideas = IdeaRepository(db)
    idea = ideas.get_idea_by_message(event.message_id)
    if idea is None:
        return None
    idea_id = idea.id

    ensure_discord_actor(
        ActorRepository(db),
        event.user_id,
        username=event.username,
        display_name=event.display_name,
        avatar=event.avatar,
    )
    try:
        return apply_vote(ideas, idea_id, event.user_id, direction)
    except VotingClosedError:
        return None


def handle_reaction_remove(db: Session, event: ReactionEvent) -> bool:
    """Delete the user's vote when they withdraw a 👍/👎 reaction.

    Returns:
        True if a vote row was deleted.
    """
    if event.is_bot or direction_for_emoji(event.emoji) is None:
        return False

    ideas = IdeaRepository(db)
    idea = ideas.get_idea_by_message(event.message_id)
    if idea is None:
        return False
    return retract_vote(ideas, idea.id, event.user_id)
