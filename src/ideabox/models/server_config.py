"""Per-guild settings for the Discord bot."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ideabox.db.session import Base
from ideabox.db.time import utcnow


class ServerConfig(Base):
    """Suggestions channel and approval roles configured for one guild."""

    __tablename__ = "server_config"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    guild_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    suggestions_channel_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    # Discord role ids whose members may approve or reject ideas.
    approval_role_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
