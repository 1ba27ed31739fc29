"""
Shared pytest fixtures for the userapi test suite.

Uses FastAPI TestClient with an isolated temporary database so tests
never touch the real database. Controller-only tests use an in-memory
fake store instead, so they exercise routing, validation and error
translation without SQLAlchemy at all.
"""

import os
import tempfile
from typing import AsyncIterator, Dict, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from userapi.database import Base, build_sessionmaker, get_db
from userapi.main import app
from userapi.mappers.user import user_mapper
from userapi.models.user import User, new_document_id
from userapi.routers.user import get_user_service
from userapi.services.user import UserService

NAME = "Usuário Teste"
EMAIL = "emailteste@mail.com"
PASSWORD = "abcd1234"


class InMemoryUserRepository:
    """
    Dict-backed stand-in for UserRepository with the same async surface.
    """

    def __init__(self, users: Optional[Dict[str, User]] = None):
        self.users: Dict[str, User] = dict(users or {})

    async def save(self, user: User) -> User:
        if user.id is None:
            user.id = new_document_id()
        self.users[user.id] = user
        return user

    async def find_by_id(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    async def find_all(self) -> AsyncIterator[User]:
        for user in list(self.users.values()):
            yield user

    async def find_and_remove(self, user_id: str) -> Optional[User]:
        return self.users.pop(user_id, None)


@pytest.fixture
def test_engine():
    """Create a temporary SQLite database for a single test."""
    tmp = tempfile.NamedTemporaryFile(suffix=".db", delete=False)
    tmp.close()
    sync_engine = create_engine(f"sqlite:///{tmp.name}")
    Base.metadata.create_all(bind=sync_engine)
    sync_engine.dispose()

    # NullPool: TestClient and pytest-asyncio each run their own event loop,
    # so connections must not outlive the loop that opened them.
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp.name}", poolclass=NullPool)
    yield engine
    engine.sync_engine.dispose()
    os.unlink(tmp.name)


@pytest.fixture
def session_factory(test_engine):
    return build_sessionmaker(test_engine)


@pytest.fixture
async def db_session(session_factory):
    """Direct AsyncSession for tests that need DB access."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def client(session_factory):
    """TestClient wired to the temporary database."""

    async def override_get_db():
        async with session_factory() as db:
            yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def fake_repository():
    return InMemoryUserRepository()


@pytest.fixture
def fake_client(fake_repository):
    """TestClient whose service is backed by the in-memory store."""
    app.dependency_overrides[get_user_service] = lambda: UserService(fake_repository, user_mapper)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def valid_payload():
    return {"name": NAME, "email": EMAIL, "password": PASSWORD}
