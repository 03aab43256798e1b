"""Repository layer wrapping SQLAlchemy access for the services."""

from .actor_repo import ActorRepository
from .idea_repo import IdeaRepository

__all__ = ["ActorRepository", "IdeaRepository"]
