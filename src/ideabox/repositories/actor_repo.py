"""Data access helpers for actors and per-guild bot configuration."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from ideabox.db.time import utcnow
from ideabox.models import Actor, ActorOrigin, Role, ServerConfig

__all__ = ["ActorRepository"]


class ActorRepository:
    """Thin wrapper around database access for actors and guild settings."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_actor(self, actor_id: str) -> Actor | None:
        """Return an actor by identifier."""
        return self.session.get(Actor, actor_id)

    def get_actor_by_email(self, email: str) -> Actor | None:
        result = self.session.execute(select(Actor).where(Actor.email == email))
        return result.scalars().first()

    def get_actor_by_username(self, username: str) -> Actor | None:
        result = self.session.execute(select(Actor).where(Actor.username == username))
        return result.scalars().first()

    def upsert_actor(
        self,
        actor_id: str,
        *,
        origin: ActorOrigin,
        username: str | None = None,
        display_name: str | None = None,
        email: str | None = None,
        avatar: str | None = None,
    ) -> Actor:
        """Create an actor with role ``user`` or refresh its profile fields.

        The role of an existing actor is never touched here.
        """
        actor = self.get_actor(actor_id)
        if actor is None:
            actor = Actor(
                id=actor_id,
                origin=origin,
                username=username,
                display_name=display_name,
                email=email,
                avatar=avatar,
                role=Role.USER,
            )
            self.session.add(actor)
        else:
            for field, value in (
                ("username", username),
                ("display_name", display_name),
                ("email", email),
                ("avatar", avatar),
            ):
                if value is not None:
                    setattr(actor, field, value)
        self.session.flush()
        return actor

    def set_role(self, actor_id: str, role: Role) -> Actor | None:
        """Set an actor's role."""
        actor = self.get_actor(actor_id)
        if actor is None:
            return None
        actor.role = role
        actor.updated_at = utcnow()
        self.session.flush()
        return actor

    # Guild configuration

    def get_server_config(self, guild_id: str) -> ServerConfig | None:
        result = self.session.execute(
            select(ServerConfig).where(ServerConfig.guild_id == guild_id)
        )
        return result.scalars().first()

    def get_guild_approval_roles(self, guild_id: str) -> set[str] | None:
        """Return the role ids allowed to approve ideas, or None if the guild is unconfigured."""
        config = self.get_server_config(guild_id)
        if config is None:
            return None
        return set(config.approval_role_ids or [])

    def _get_or_create_config(self, guild_id: str) -> ServerConfig:
        config = self.get_server_config(guild_id)
        if config is None:
            config = ServerConfig(guild_id=guild_id, approval_role_ids=[])
            self.session.add(config)
        return config

    def set_suggestions_channel(self, guild_id: str, channel_id: str) -> ServerConfig:
        """Set the channel new suggestions are posted to."""
        config = self._get_or_create_config(guild_id)
        config.suggestions_channel_id = channel_id
        config.updated_at = utcnow()
        self.session.flush()
        return config

    def toggle_approval_role(self, guild_id: str, role_id: str) -> bool:
        """Add or remove a role from the guild's approval list.

        Returns:
            True if the role is now authorised, False if it was removed.
        """
        config = self._get_or_create_config(guild_id)
        current = list(config.approval_role_ids or [])
        if role_id in current:
            current.remove(role_id)
            granted = False
        else:
            current.append(role_id)
            granted = True
        # Reassign so the JSON column is detected as modified.
        config.approval_role_ids = current
        config.updated_at = utcnow()
        self.session.flush()
        return granted

    def commit(self) -> None:
        self.session.commit()
