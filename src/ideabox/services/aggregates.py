"""Vote counts derived from vote rows on every read."""
from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple

from ideabox.models import VoteDirection
from ideabox.repositories import IdeaRepository


class VoteTally(NamedTuple):
    upvotes: int
    downvotes: int


def counts_for_many(repo: IdeaRepository, idea_ids: Iterable[int]) -> dict[int, VoteTally]:
    """Return vote counts for every idea in ``idea_ids`` using one grouped query."""
    grouped = repo.count_votes_grouped_by_idea(idea_ids)
    return {
        idea_id: VoteTally(
            upvotes=counts[VoteDirection.UP.value],
            downvotes=counts[VoteDirection.DOWN.value],
        )
        for idea_id, counts in grouped.items()
    }


def counts_for(repo: IdeaRepository, idea_id: int) -> VoteTally:
    """Return vote counts for a single idea."""
    return counts_for_many(repo, [idea_id])[idea_id]
