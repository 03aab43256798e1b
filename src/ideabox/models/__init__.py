"""SQLAlchemy models for the IdeaBox application."""

from .idea import OPEN_STATUSES, Idea, IdeaCategory, IdeaStatus
from .server_config import ServerConfig
from .user import Actor, ActorOrigin, Role
from .vote import Vote, VoteDirection

__all__ = [
    "Actor", "ActorOrigin", "Role",
    "Idea", "IdeaCategory", "IdeaStatus", "OPEN_STATUSES",
    "ServerConfig",
    "Vote", "VoteDirection",
]
