"""Idea, vote and review endpoints for the IdeaBox API."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Query, Response, status
from fastapi.responses import JSONResponse

from ideabox.api.v1.dependencies import CurrentActorDep, IdeaRepoDep
from ideabox.models import Idea, IdeaStatus
from ideabox.schemas import (
    IdeaCreate,
    IdeaResponse,
    IdeaWithVotes,
    MyVote,
    StatusUpdate,
    VoteCounts,
    VoteCreate,
    VoteOutcome,
    VoteResponse,
)
from ideabox.services import ideas as idea_service
from ideabox.services import status as status_service
from ideabox.services import voting
from ideabox.services.aggregates import counts_for
from ideabox.services.errors import IdeaNotFoundError

router = APIRouter(prefix="/ideas", tags=["ideas"])


@router.get("/", response_model=list[IdeaWithVotes])
async def list_ideas(
    current_actor: CurrentActorDep,
    repo: IdeaRepoDep,
    status_filter: IdeaStatus | None = Query(None, alias="status"),
) -> list[dict[str, Any]]:
    """List ideas newest first with vote counts and the caller's own vote."""
    return idea_service.list_ideas_for(repo, current_actor.id, status_filter)


@router.post("/", response_model=IdeaResponse, status_code=status.HTTP_201_CREATED)
async def create_idea(
    idea_data: IdeaCreate,
    current_actor: CurrentActorDep,
    repo: IdeaRepoDep,
) -> Idea:
    """Submit a new idea; it starts out pending."""
    return idea_service.submit_idea(
        repo,
        author=current_actor,
        title=idea_data.title,
        description=idea_data.description,
        category=idea_data.category,
    )


@router.get("/{idea_id}", response_model=IdeaWithVotes)
async def get_idea(
    idea_id: int,
    current_actor: CurrentActorDep,
    repo: IdeaRepoDep,
) -> dict[str, Any]:
    """Return one idea with vote counts and the caller's own vote."""
    return idea_service.get_idea_for(repo, idea_id, current_actor.id)


@router.get("/{idea_id}/votes", response_model=VoteCounts)
async def get_vote_counts(
    idea_id: int,
    current_actor: CurrentActorDep,
    repo: IdeaRepoDep,
) -> VoteCounts:
    """Return the current up/down counts for an idea."""
    if repo.get_idea(idea_id) is None:
        raise IdeaNotFoundError(idea_id)
    tally = counts_for(repo, idea_id)
    return VoteCounts(idea_id=idea_id, upvotes=tally.upvotes, downvotes=tally.downvotes)


@router.post(
    "/{idea_id}/vote",
    response_model=VoteOutcome,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_200_OK: {"model": VoteOutcome}},
)
async def cast_vote(
    idea_id: int,
    vote_data: VoteCreate,
    current_actor: CurrentActorDep,
    repo: IdeaRepoDep,
) -> Any:
    """Vote on an idea. Repeating the same direction removes the vote."""
    result = voting.apply_vote(repo, idea_id, current_actor.id, vote_data.direction)
    if result.vote is None:
        body = VoteOutcome(outcome=result.outcome.value)
        return JSONResponse(status_code=status.HTTP_200_OK, content=body.model_dump(mode="json"))
    return VoteOutcome(
        outcome=result.outcome.value,
        direction=result.direction,
        vote=VoteResponse.model_validate(result.vote),
    )


@router.delete("/{idea_id}/vote", status_code=status.HTTP_204_NO_CONTENT)
async def retract_vote(
    idea_id: int,
    current_actor: CurrentActorDep,
    repo: IdeaRepoDep,
) -> Response:
    """Withdraw the caller's vote on an idea, whatever its direction."""
    if repo.get_idea(idea_id) is None:
        raise IdeaNotFoundError(idea_id)
    voting.retract_vote(repo, idea_id, current_actor.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{idea_id}/my-vote", response_model=MyVote)
async def get_my_vote(
    idea_id: int,
    current_actor: CurrentActorDep,
    repo: IdeaRepoDep,
) -> MyVote:
    """Get the current actor's vote on a specific idea."""
    vote = repo.get_vote(idea_id, current_actor.id)
    return MyVote(direction=vote.direction if vote else None)


@router.patch("/{idea_id}/status", response_model=IdeaResponse)
async def update_idea_status(
    idea_id: int,
    update: StatusUpdate,
    current_actor: CurrentActorDep,
    repo: IdeaRepoDep,
) -> Idea:
    """Approve or reject a pending idea (moderators and above)."""
    return status_service.set_status(repo, idea_id, update.status, current_actor)
