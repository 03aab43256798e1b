"""Models capturing voting interactions on ideas."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from ideabox.db.session import Base
from ideabox.db.time import utcnow


class VoteDirection(StrEnum):
    """Direction of a single vote."""

    UP = "up"
    DOWN = "down"


class Vote(Base):
    """Per-user vote on an idea.

    The unique constraint on (idea_id, user_id) is what keeps concurrent
    writers from both surfaces from creating a second row for the same pair.
    """

    __tablename__ = "vote"
    __table_args__ = (
        UniqueConstraint("idea_id", "user_id", name="uq_vote_idea_user"),
        CheckConstraint("direction IN ('up', 'down')", name="ck_vote_direction"),
        Index("ix_vote_idea_id", "idea_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    idea_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("idea.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("actor.id", ondelete="CASCADE"),
        nullable=False,
    )
    direction: Mapped[str] = mapped_column(String(8), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
