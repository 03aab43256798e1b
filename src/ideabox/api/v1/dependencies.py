"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from ideabox.core.security import decode_access_token
from ideabox.db.session import get_db
from ideabox.models import Actor
from ideabox.repositories import ActorRepository, IdeaRepository
from ideabox.services.permissions import can_moderate

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_idea_repository(db: SessionDep) -> IdeaRepository:
    return IdeaRepository(db)


def get_actor_repository(db: SessionDep) -> ActorRepository:
    return ActorRepository(db)


IdeaRepoDep = Annotated[IdeaRepository, Depends(get_idea_repository)]
ActorRepoDep = Annotated[ActorRepository, Depends(get_actor_repository)]


def _credentials_error(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_actor(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    actors: ActorRepoDep,
) -> Actor:
    """Get the current authenticated actor from the JWT subject.

    Raises:
        HTTPException: 401 if the token is invalid or the actor is unknown.
    """
    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError as err:
        raise _credentials_error() from err

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise _credentials_error()

    actor = actors.get_actor(subject)
    if actor is None:
        raise _credentials_error("User not found")
    return actor


# Type alias for current actor dependency
CurrentActorDep = Annotated[Actor, Depends(get_current_actor)]


def require_moderator(actor: CurrentActorDep) -> Actor:
    """Dependency: the current actor must hold a moderation role."""
    if not can_moderate(actor):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions",
        )
    return actor


ModeratorDep = Annotated[Actor, Depends(require_moderator)]
