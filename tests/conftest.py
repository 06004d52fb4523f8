import os
import sys

# Settings are read at import time, so configure the environment first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
import pytest_asyncio
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from connect_db import Base
import models.models  # noqa: F401
from services.auth_service import AuthService
from services.chat_service import ChatService
from services.friend_service import FriendService
from services.user_service import UserService


@pytest.fixture
def engine():
    """A fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user_service(db_session):
    return UserService(db_session)


@pytest.fixture
def auth_service(db_session, user_service):
    return AuthService(db_session, user_service)


@pytest.fixture
def friend_service(db_session, user_service):
    return FriendService(db_session, user_service)


@pytest.fixture
def chat_service(db_session):
    return ChatService(db_session, require_friendship=False)


@pytest_asyncio.fixture
async def alice(auth_service):
    return await auth_service.create_user("Alice", "alice@example.com", "alice-password")


@pytest_asyncio.fixture
async def bob(auth_service):
    return await auth_service.create_user("Bob", "bob@example.com", "bob-password")


@pytest_asyncio.fixture
async def carol(auth_service):
    return await auth_service.create_user("Carol", "carol@example.com", "carol-password")
