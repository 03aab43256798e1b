# mypy: ignore-errors
"""Tests for the vote reconciliation core."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from ideabox.models import IdeaStatus, Vote, VoteDirection
from ideabox.services.aggregates import counts_for
from ideabox.services.errors import IdeaNotFoundError, VotingClosedError
from ideabox.services.voting import VoteOutcome, apply_vote, retract_vote


def _rows(db_session, idea_id, user_id):
    return db_session.execute(
        select(Vote).where(Vote.idea_id == idea_id, Vote.user_id == user_id)
    ).scalars().all()


def test_first_vote_creates_row(idea_repo, db_session, pending_idea, member) -> None:
    result = apply_vote(idea_repo, pending_idea.id, member.id, VoteDirection.UP)

    assert result.outcome is VoteOutcome.CREATED
    assert result.direction is VoteDirection.UP
    rows = _rows(db_session, pending_idea.id, member.id)
    assert len(rows) == 1
    assert rows[0].direction == "up"


def test_same_direction_twice_removes_vote(idea_repo, db_session, pending_idea, member) -> None:
    apply_vote(idea_repo, pending_idea.id, member.id, "up")
    result = apply_vote(idea_repo, pending_idea.id, member.id, "up")

    assert result.outcome is VoteOutcome.REMOVED
    assert result.vote is None
    assert _rows(db_session, pending_idea.id, member.id) == []


def test_opposite_direction_replaces_vote(idea_repo, db_session, pending_idea, member) -> None:
    apply_vote(idea_repo, pending_idea.id, member.id, "up")
    result = apply_vote(idea_repo, pending_idea.id, member.id, "down")

    assert result.outcome is VoteOutcome.CHANGED
    assert result.direction is VoteDirection.DOWN
    rows = _rows(db_session, pending_idea.id, member.id)
    assert len(rows) == 1
    assert rows[0].direction == "down"


def test_scenario_up_down_down(idea_repo, pending_idea, member) -> None:
    """Up, then down, then down again ends with no vote and zero counts."""
    apply_vote(idea_repo, pending_idea.id, member.id, "up")
    assert counts_for(idea_repo, pending_idea.id) == (1, 0)

    apply_vote(idea_repo, pending_idea.id, member.id, "down")
    assert counts_for(idea_repo, pending_idea.id) == (0, 1)

    apply_vote(idea_repo, pending_idea.id, member.id, "down")
    assert counts_for(idea_repo, pending_idea.id) == (0, 0)


def test_at_most_one_row_per_pair_after_any_sequence(
    idea_repo, db_session, pending_idea, member
) -> None:
    sequence = ["up", "down", "down", "up", "up", "up", "down", "up"]
    for direction in sequence:
        apply_vote(idea_repo, pending_idea.id, member.id, direction)
        assert len(_rows(db_session, pending_idea.id, member.id)) <= 1


def test_votes_on_approved_idea_are_accepted(idea_repo, make_idea, member) -> None:
    idea = make_idea(IdeaStatus.APPROVED)
    result = apply_vote(idea_repo, idea.id, member.id, "down")
    assert result.outcome is VoteOutcome.CREATED


def test_rejected_idea_refuses_votes_without_writing(
    idea_repo, db_session, rejected_idea, member
) -> None:
    with pytest.raises(VotingClosedError) as exc_info:
        apply_vote(idea_repo, rejected_idea.id, member.id, "up")

    assert exc_info.value.status == IdeaStatus.REJECTED
    total = db_session.execute(select(func.count(Vote.id))).scalar_one()
    assert total == 0


def test_unknown_idea_raises_not_found(idea_repo, member) -> None:
    with pytest.raises(IdeaNotFoundError):
        apply_vote(idea_repo, 424242, member.id, "up")


def test_invalid_direction_is_rejected(idea_repo, pending_idea, member) -> None:
    with pytest.raises(ValueError):
        apply_vote(idea_repo, pending_idea.id, member.id, "sideways")


def test_retract_vote_deletes_whatever_direction(idea_repo, db_session, pending_idea, member) -> None:
    apply_vote(idea_repo, pending_idea.id, member.id, "down")

    assert retract_vote(idea_repo, pending_idea.id, member.id) is True
    assert _rows(db_session, pending_idea.id, member.id) == []
    # Retracting again is a no-op, never a toggle back on.
    assert retract_vote(idea_repo, pending_idea.id, member.id) is False
    assert _rows(db_session, pending_idea.id, member.id) == []


def _racing_repo(idea, existing_after_race):
    """A repository whose first insert loses a race to a concurrent writer."""
    repo = MagicMock()
    repo.get_idea.return_value = idea
    repo.get_vote.side_effect = [None, existing_after_race]
    repo.insert_vote.side_effect = [IntegrityError("INSERT", {}, Exception("unique")), MagicMock()]
    return repo


def test_lost_insert_race_is_retried_as_toggle(pending_idea) -> None:
    winner = MagicMock(direction="up")
    repo = _racing_repo(pending_idea, winner)

    result = apply_vote(repo, pending_idea.id, "racer", "up")

    # The concurrent row holds the same direction, so the retry toggles it off.
    assert result.outcome is VoteOutcome.REMOVED
    repo.rollback.assert_called_once()
    repo.delete_vote.assert_called_once_with(pending_idea.id, "racer")
    repo.commit.assert_called_once()


def test_lost_insert_race_with_opposite_direction_flips(pending_idea) -> None:
    winner = MagicMock(direction="down")
    repo = _racing_repo(pending_idea, winner)

    result = apply_vote(repo, pending_idea.id, "racer", "up")

    assert result.outcome is VoteOutcome.CHANGED
    assert repo.insert_vote.call_count == 2


def test_repeated_integrity_errors_propagate(pending_idea) -> None:
    repo = MagicMock()
    repo.get_idea.return_value = pending_idea
    repo.get_vote.return_value = None
    repo.insert_vote.side_effect = IntegrityError("INSERT", {}, Exception("unique"))

    with pytest.raises(IntegrityError):
        apply_vote(repo, pending_idea.id, "racer", "up")
    assert repo.rollback.call_count == 2
