"""SQLAlchemy models for actors (web and Discord users)."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from sqlalchemy import CheckConstraint, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ideabox.db.session import Base
from ideabox.db.time import utcnow


class Role(StrEnum):
    """Roles gating administrative actions, lowest privilege first."""

    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


class ActorOrigin(StrEnum):
    """Surface an actor was first seen on."""

    WEB = "web"
    DISCORD = "discord"


class Actor(Base):
    """A web-authenticated or Discord-originated user with a role.

    Both surfaces share this table; ``origin`` only decides how the identity
    was established; permission checks treat every actor the same way.
    """

    __tablename__ = "actor"
    __table_args__ = (
        CheckConstraint(
            "role IN ('user', 'moderator', 'admin', 'super_admin')",
            name="ck_actor_role",
        ),
        CheckConstraint("origin IN ('web', 'discord')", name="ck_actor_origin"),
    )

    # Discord snowflake or the web identity provider's subject.
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    origin: Mapped[str] = mapped_column(String(16), nullable=False, default=ActorOrigin.WEB)
    username: Mapped[str | None] = mapped_column(String(100), nullable=True)
    display_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Web-origin only.
    email: Mapped[str | None] = mapped_column(String(320), unique=True, nullable=True)
    avatar: Mapped[str | None] = mapped_column(Text, nullable=True)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default=Role.USER)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    @property
    def label(self) -> str:
        """Return the friendliest available name for display."""
        return self.display_name or self.username or self.email or self.id
