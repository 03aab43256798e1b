"""SQLAlchemy models for submitted ideas."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ideabox.db.session import Base
from ideabox.db.time import utcnow

from .user import Actor


class IdeaStatus(StrEnum):
    """Review state of an idea. ``approved`` and ``rejected`` are terminal."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class IdeaCategory(StrEnum):
    """Tags an idea can be filed under."""

    TECHNOLOGY = "technology"
    MARKETING = "marketing"
    PRODUCT = "product"
    PROCESS = "process"
    OTHER = "other"
    # Ideas submitted through the bot carry no category picker.
    GENERAL = "general"


# Statuses on which new votes are accepted.
OPEN_STATUSES = frozenset({IdeaStatus.PENDING, IdeaStatus.APPROVED})


class Idea(Base):
    """A user-submitted proposal subject to voting and review."""

    __tablename__ = "idea"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name="ck_idea_status",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(32), nullable=False)
    author_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("actor.id"),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=IdeaStatus.PENDING
    )

    # Set once the bot has posted the idea to a channel.
    message_id: Mapped[str | None] = mapped_column(String(64), nullable=True, unique=True)
    channel_id: Mapped[str | None] = mapped_column(String(64), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    author: Mapped[Actor] = relationship("Actor", lazy="joined")

    @property
    def voting_open(self) -> bool:
        """Return True if the idea still accepts votes."""
        return self.status in OPEN_STATUSES
