"""Data access helpers for ideas and their votes."""
from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from ideabox.db.time import utcnow
from ideabox.models import Idea, IdeaStatus, Vote, VoteDirection

__all__ = ["IdeaRepository"]


class IdeaRepository:
    """Thin wrapper around database access for ideas and votes.

    Methods flush but never commit; callers own the transaction boundary.
    """

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    # Ideas

    def get_idea(self, idea_id: int) -> Idea | None:
        """Return an idea by identifier."""
        return self.session.get(Idea, idea_id)

    def get_idea_by_message(self, message_id: str) -> Idea | None:
        """Return the idea posted as the given Discord message."""
        result = self.session.execute(select(Idea).where(Idea.message_id == message_id))
        return result.scalars().first()

    def list_ideas(self, status: IdeaStatus | None = None) -> list[Idea]:
        """Return ideas newest first, optionally filtered by status."""
        stmt = select(Idea)
        if status is not None:
            stmt = stmt.where(Idea.status == status)
        stmt = stmt.order_by(Idea.created_at.desc(), Idea.id.desc())
        return list(self.session.execute(stmt).scalars())

    def create_idea(
        self,
        *,
        title: str,
        description: str,
        category: str,
        author_id: str,
    ) -> Idea:
        """Insert a new pending idea and return the persisted ORM instance."""
        idea = Idea(
            title=title,
            description=description,
            category=category,
            author_id=author_id,
            status=IdeaStatus.PENDING,
        )
        self.session.add(idea)
        self.session.flush()
        return idea

    def attach_message(self, idea_id: int, *, message_id: str, channel_id: str) -> Idea | None:
        """Record the Discord message an idea was posted as."""
        idea = self.get_idea(idea_id)
        if idea is None:
            return None
        idea.message_id = message_id
        idea.channel_id = channel_id
        self.session.flush()
        return idea

    def set_idea_status(self, idea_id: int, status: IdeaStatus) -> Idea | None:
        """Set the status of an idea and bump its update timestamp."""
        idea = self.get_idea(idea_id)
        if idea is None:
            return None
        idea.status = status
        idea.updated_at = utcnow()
        self.session.flush()
        return idea

    def count_by_status(self) -> dict[str, int]:
        """Return the number of ideas in each status."""
        rows = self.session.execute(
            select(Idea.status, func.count(Idea.id)).group_by(Idea.status)
        ).all()
        counts = {status.value: 0 for status in IdeaStatus}
        for status, total in rows:
            counts[status] = int(total)
        return counts

    # Votes

    def get_vote(self, idea_id: int, user_id: str) -> Vote | None:
        """Return the vote a user holds on an idea, if any."""
        result = self.session.execute(
            select(Vote).where(Vote.idea_id == idea_id, Vote.user_id == user_id)
        )
        return result.scalars().first()

    def get_votes_for_user(self, idea_ids: Iterable[int], user_id: str) -> dict[int, Vote]:
        """Return a user's votes on the given ideas keyed by idea id."""
        ids = list(idea_ids)
        if not ids:
            return {}
        result = self.session.execute(
            select(Vote).where(Vote.idea_id.in_(ids), Vote.user_id == user_id)
        )
        return {vote.idea_id: vote for vote in result.scalars()}

    def insert_vote(self, idea_id: int, user_id: str, direction: VoteDirection) -> Vote:
        """Insert a vote row.

        Raises:
            sqlalchemy.exc.IntegrityError: If the user already holds a vote on the idea.
        """
        vote = Vote(idea_id=idea_id, user_id=user_id, direction=direction)
        self.session.add(vote)
        self.session.flush()
        return vote

    def delete_vote(self, idea_id: int, user_id: str) -> bool:
        """Delete a user's vote on an idea. Returns False if there was none."""
        result = self.session.execute(
            delete(Vote)
            .where(Vote.idea_id == idea_id, Vote.user_id == user_id)
            .execution_options(synchronize_session="evaluate")
        )
        return bool(result.rowcount)

    def count_votes_grouped_by_idea(self, idea_ids: Iterable[int]) -> dict[int, dict[str, int]]:
        """Count votes per direction for many ideas in a single grouped query.

        Every requested id is present in the result, with zeros when it has no votes.
        """
        ids = list(dict.fromkeys(idea_ids))
        counts: dict[int, dict[str, int]] = {
            idea_id: {VoteDirection.UP.value: 0, VoteDirection.DOWN.value: 0} for idea_id in ids
        }
        if not ids:
            return counts
        rows = self.session.execute(
            select(Vote.idea_id, Vote.direction, func.count(Vote.id))
            .where(Vote.idea_id.in_(ids))
            .group_by(Vote.idea_id, Vote.direction)
        ).all()
        for idea_id, direction, total in rows:
            counts[idea_id][direction] = int(total)
        return counts

    # Transactions

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
