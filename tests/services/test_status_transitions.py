# mypy: ignore-errors
"""Tests for role-gated status transitions."""

import pytest

from ideabox.models import IdeaStatus, Role
from ideabox.services.errors import (
    ForbiddenError,
    IdeaNotFoundError,
    InvalidTransitionError,
    VotingClosedError,
)
from ideabox.services.status import set_status
from ideabox.services.voting import apply_vote


@pytest.mark.parametrize("role", [Role.MODERATOR, Role.ADMIN, Role.SUPER_ADMIN])
def test_moderation_roles_can_approve_pending(idea_repo, make_actor, pending_idea, role) -> None:
    actor = make_actor(role)
    idea = set_status(idea_repo, pending_idea.id, IdeaStatus.APPROVED, actor)
    assert idea.status == IdeaStatus.APPROVED


def test_plain_user_is_forbidden_and_status_unchanged(idea_repo, member, pending_idea) -> None:
    with pytest.raises(ForbiddenError):
        set_status(idea_repo, pending_idea.id, IdeaStatus.REJECTED, member)
    assert idea_repo.get_idea(pending_idea.id).status == IdeaStatus.PENDING


def test_missing_actor_is_forbidden(idea_repo, pending_idea) -> None:
    with pytest.raises(ForbiddenError):
        set_status(idea_repo, pending_idea.id, IdeaStatus.APPROVED, None)


def test_status_change_bumps_updated_at(idea_repo, moderator, pending_idea) -> None:
    before = pending_idea.updated_at
    idea = set_status(idea_repo, pending_idea.id, "rejected", moderator)
    assert idea.updated_at >= before


@pytest.mark.parametrize("terminal", [IdeaStatus.APPROVED, IdeaStatus.REJECTED])
@pytest.mark.parametrize("requested", [IdeaStatus.APPROVED, IdeaStatus.REJECTED])
def test_terminal_states_cannot_change(idea_repo, make_idea, moderator, terminal, requested) -> None:
    idea = make_idea(terminal)
    with pytest.raises(InvalidTransitionError):
        set_status(idea_repo, idea.id, requested, moderator)
    assert idea_repo.get_idea(idea.id).status == terminal


def test_cannot_request_pending(idea_repo, moderator, pending_idea) -> None:
    with pytest.raises(ValueError):
        set_status(idea_repo, pending_idea.id, IdeaStatus.PENDING, moderator)


def test_unknown_idea(idea_repo, moderator) -> None:
    with pytest.raises(IdeaNotFoundError):
        set_status(idea_repo, 999_999, IdeaStatus.APPROVED, moderator)


def test_pre_resolved_permission_overrides_role(idea_repo, member, pending_idea) -> None:
    """The bot resolves guild approval roles itself and passes the verdict in."""
    idea = set_status(idea_repo, pending_idea.id, IdeaStatus.APPROVED, member, authorized=True)
    assert idea.status == IdeaStatus.APPROVED


def test_denied_pre_resolved_permission(idea_repo, moderator, pending_idea) -> None:
    with pytest.raises(ForbiddenError):
        set_status(idea_repo, pending_idea.id, IdeaStatus.APPROVED, moderator, authorized=False)


def test_rejection_closes_voting(idea_repo, moderator, other_member, pending_idea) -> None:
    set_status(idea_repo, pending_idea.id, IdeaStatus.REJECTED, moderator)
    with pytest.raises(VotingClosedError):
        apply_vote(idea_repo, pending_idea.id, other_member.id, "up")


def test_rejection_keeps_existing_votes(idea_repo, moderator, member, pending_idea) -> None:
    apply_vote(idea_repo, pending_idea.id, member.id, "up")
    set_status(idea_repo, pending_idea.id, IdeaStatus.REJECTED, moderator)
    assert idea_repo.get_vote(pending_idea.id, member.id) is not None
