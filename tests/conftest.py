# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from contextlib import contextmanager
from itertools import count

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DISCORD_ENABLED", "false")

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ideabox.core.security import create_access_token
from ideabox.db.session import Base
from ideabox.db.session import get_db as app_get_session
from ideabox.main import app as fastapi_app
from ideabox.models import Actor, ActorOrigin, Idea, IdeaCategory, IdeaStatus, Role
from ideabox.repositories import ActorRepository, IdeaRepository

TEST_DB_URL = "sqlite://"

_ACTOR_COUNTER = count(1)
_MESSAGE_COUNTER = count(900_000_000_000_000_001)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    session.begin_nested()

    @event.listens_for(session, "after_transaction_end")
    def restart_savepoint(sess: Session, trans) -> None:  # pragma: no cover - SQLAlchemy internals
        if trans.nested and not getattr(trans._parent, "nested", False):
            session.begin_nested()

    try:
        yield session
    finally:
        event.remove(session, "after_transaction_end", restart_savepoint)
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def session_factory(db_session: Session) -> Callable[[], object]:
    """Stand-in for ``SessionLocal`` that hands out the test session without closing it."""

    @contextmanager
    def _factory() -> Iterator[Session]:
        yield db_session

    return _factory


@pytest.fixture()
def idea_repo(db_session: Session) -> IdeaRepository:
    return IdeaRepository(db_session)


@pytest.fixture()
def actor_repo(db_session: Session) -> ActorRepository:
    return ActorRepository(db_session)


@pytest.fixture()
def make_actor(db_session: Session) -> Callable[..., Actor]:
    """Factory persisting an actor with the given role."""

    def _make(
        role: Role = Role.USER,
        *,
        origin: ActorOrigin = ActorOrigin.WEB,
        actor_id: str | None = None,
        email: str | None = None,
        username: str | None = None,
    ) -> Actor:
        n = next(_ACTOR_COUNTER)
        actor = Actor(
            id=actor_id or f"actor-{n}",
            origin=origin,
            username=username or f"user{n}",
            display_name=f"User {n}",
            email=email if email is not None else (f"user{n}@example.com" if origin == ActorOrigin.WEB else None),
            role=role,
        )
        db_session.add(actor)
        db_session.flush()
        return actor

    return _make


@pytest.fixture()
def member(make_actor) -> Actor:
    return make_actor(Role.USER)


@pytest.fixture()
def other_member(make_actor) -> Actor:
    return make_actor(Role.USER)


@pytest.fixture()
def moderator(make_actor) -> Actor:
    return make_actor(Role.MODERATOR)


@pytest.fixture()
def super_admin(make_actor) -> Actor:
    return make_actor(Role.SUPER_ADMIN)


def auth_headers(actor: Actor) -> dict[str, str]:
    """Return authorization headers for ``actor``."""
    return {"Authorization": f"Bearer {create_access_token(actor.id)}"}


@pytest.fixture()
def auth_token(member: Actor) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return auth_headers(member)


@pytest.fixture()
def other_auth_token(other_member: Actor) -> dict[str, str]:
    return auth_headers(other_member)


@pytest.fixture()
def moderator_token(moderator: Actor) -> dict[str, str]:
    return auth_headers(moderator)


@pytest.fixture()
def super_admin_token(super_admin: Actor) -> dict[str, str]:
    return auth_headers(super_admin)


@pytest.fixture()
def make_idea(db_session: Session, member: Actor) -> Callable[..., Idea]:
    """Factory persisting an idea, by default pending and authored by ``member``."""

    def _make(
        status: IdeaStatus = IdeaStatus.PENDING,
        *,
        author: Actor | None = None,
        title: str = "Dark mode",
        with_message: bool = False,
    ) -> Idea:
        idea = Idea(
            title=title,
            description="Add a dark theme to the dashboard",
            category=IdeaCategory.PRODUCT,
            author_id=(author or member).id,
            status=status,
        )
        if with_message:
            idea.message_id = str(next(_MESSAGE_COUNTER))
            idea.channel_id = "111"
        db_session.add(idea)
        db_session.flush()
        return idea

    return _make


@pytest.fixture()
def pending_idea(make_idea) -> Idea:
    return make_idea()


@pytest.fixture()
def rejected_idea(make_idea) -> Idea:
    return make_idea(IdeaStatus.REJECTED, title="Rejected idea")
