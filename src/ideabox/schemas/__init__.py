"""Pydantic schemas for the IdeaBox API."""

from .idea import AuthorSummary, IdeaCreate, IdeaResponse, IdeaStats, IdeaWithVotes, StatusUpdate
from .user import ActorResponse, RoleAssignment
from .vote import MyVote, VoteCounts, VoteCreate, VoteOutcome, VoteResponse

__all__ = [
    "ActorResponse",
    "AuthorSummary",
    "IdeaCreate",
    "IdeaResponse",
    "IdeaStats",
    "IdeaWithVotes",
    "MyVote",
    "RoleAssignment",
    "StatusUpdate",
    "VoteCounts",
    "VoteCreate",
    "VoteOutcome",
    "VoteResponse",
]
