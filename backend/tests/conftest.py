"""
Bookshelf API — Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   A file-backed SQLite database (aiosqlite) replaces PostgreSQL; tables
       are created before and dropped after every test that asks for them.

Fixture Hierarchy (all function-scoped):
    ├── database:       creates/drops all tables
    ├── sync_database:  the same, for synchronous (CLI) tests
    ├── empty_database: drops whatever a migration test created
    ├── test_client:    HTTPX AsyncClient wired to the FastAPI app
    ├── api_token:      plaintext bearer token for a fresh test user
    ├── auth_headers:   JSON:API + Authorization headers
    ├── author_factory: inserts authors and commits them
    └── mock_store:     AsyncMock standing in for AuthorStore
"""

import asyncio
import os
import tempfile

# Override settings BEFORE any bookshelf import builds the engine
_TEST_DB_DIR = tempfile.mkdtemp(prefix="bookshelf_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_DIR}/test.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["API_PREFIX"] = "/api/v1"
os.environ["TOKEN_TTL_DAYS"] = "30"

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text

import bookshelf.models  # noqa: F401
from bookshelf.database import Base, engine, session_scope
from bookshelf.repositories.author_repository import SQLAlchemyAuthorStore
from bookshelf.responses import JSONAPI_MEDIA_TYPE
from bookshelf.services.token_service import get_or_create_user, issue_personal_access_token

async def create_tables() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_tables() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.execute(text("DROP TABLE IF EXISTS alembic_version"))


@pytest_asyncio.fixture
async def database():
    await create_tables()
    yield
    await drop_tables()


@pytest.fixture
def sync_database():
    """Same as `database`, for synchronous tests that drive their own event loop."""
    asyncio.run(create_tables())
    yield
    asyncio.run(drop_tables())


@pytest.fixture
def empty_database():
    """No tables up front; whatever the test creates is dropped afterwards."""
    yield
    asyncio.run(drop_tables())


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    Usage:
        async def test_list(test_client, auth_headers):
            response = await test_client.get("/api/v1/authors", headers=auth_headers)
    """
    from bookshelf.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def api_token(database) -> str:
    async with session_scope() as session:
        user, _ = await get_or_create_user(session, "Test User", "test@example.com")
        _, token = await issue_personal_access_token(session, user, "Test Token")
    return token


@pytest.fixture
def jsonapi_headers():
    return {"Accept": JSONAPI_MEDIA_TYPE, "Content-Type": JSONAPI_MEDIA_TYPE}


@pytest.fixture
def auth_headers(api_token, jsonapi_headers):
    return {**jsonapi_headers, "Authorization": f"Bearer {api_token}"}


@pytest.fixture
def author_factory(database):
    """
    Insert committed authors.

    Usage:
        author = await author_factory("Jane Austen")
    """
    async def create(name: str):
        async with session_scope() as session:
            return await SQLAlchemyAuthorStore(session).create({"name": name})
    return create


@pytest.fixture
def mock_store():
    store = AsyncMock()
    store.create = AsyncMock()
    store.find = AsyncMock()
    store.list = AsyncMock()
    store.update = AsyncMock()
    store.delete = AsyncMock()
    return store
