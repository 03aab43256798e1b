"""Service-level helpers for submitting and listing ideas."""
from __future__ import annotations

import logging
from typing import Any

from ideabox.models import Actor, Idea, IdeaCategory, IdeaStatus
from ideabox.repositories import IdeaRepository

from .aggregates import VoteTally, counts_for_many
from .errors import IdeaNotFoundError

logger = logging.getLogger(__name__)


def submit_idea(
    repo: IdeaRepository,
    *,
    author: Actor,
    title: str,
    description: str,
    category: IdeaCategory | str = IdeaCategory.GENERAL,
) -> Idea:
    """Create a pending idea authored by ``author`` and commit it.

    Raises:
        ValueError: If the title or description is blank or the category is unknown.
    """
    title = title.strip()
    description = description.strip()
    if not title or not description:
        raise ValueError("Title and description are required")
    category = IdeaCategory(category)

    idea = repo.create_idea(
        title=title,
        description=description,
        category=category,
        author_id=author.id,
    )
    repo.commit()
    logger.info("Idea %s submitted by %s", idea.id, author.id)
    return idea


def _with_votes(idea: Idea, tally: VoteTally, user_vote: str | None) -> dict[str, Any]:
    return {
        "id": idea.id,
        "title": idea.title,
        "description": idea.description,
        "category": idea.category,
        "status": idea.status,
        "author_id": idea.author_id,
        "author": {
            "id": idea.author.id,
            "username": idea.author.username,
            "display_name": idea.author.display_name,
        },
        "message_id": idea.message_id,
        "channel_id": idea.channel_id,
        "created_at": idea.created_at,
        "updated_at": idea.updated_at,
        "upvotes": tally.upvotes,
        "downvotes": tally.downvotes,
        "user_vote": user_vote,
    }


def list_ideas_for(
    repo: IdeaRepository,
    viewer_id: str | None,
    status: IdeaStatus | None = None,
) -> list[dict[str, Any]]:
    """Return ideas newest first with counts and the viewer's own vote.

    Counts and the viewer's votes are each fetched in one query for the
    whole page rather than per idea.
    """
    ideas = repo.list_ideas(status)
    ids = [idea.id for idea in ideas]
    tallies = counts_for_many(repo, ids)
    own_votes = repo.get_votes_for_user(ids, viewer_id) if viewer_id else {}
    return [
        _with_votes(
            idea,
            tallies[idea.id],
            own_votes[idea.id].direction if idea.id in own_votes else None,
        )
        for idea in ideas
    ]


def get_idea_for(repo: IdeaRepository, idea_id: int, viewer_id: str | None) -> dict[str, Any]:
    """Return one idea with counts and the viewer's own vote."""
    idea = repo.get_idea(idea_id)
    if idea is None:
        raise IdeaNotFoundError(idea_id)
    tally = counts_for_many(repo, [idea_id])[idea_id]
    own_vote = repo.get_vote(idea_id, viewer_id) if viewer_id else None
    return _with_votes(idea, tally, own_vote.direction if own_vote else None)


def idea_stats(repo: IdeaRepository) -> dict[str, int]:
    """Return the number of pending, approved and rejected ideas."""
    return repo.count_by_status()
