"""
pytest Fixtures for Bookstore API Tests

Every HTTP test runs twice: once against the in-memory store and once
against the SQL store on an in-memory SQLite database. The application is
built with create_app(settings, store=...), so no environment variables or
.env file are involved.

For SQL tests each test gets a fresh engine and schema. StaticPool keeps
the single SQLite connection alive for the whole test, otherwise the
in-memory database would disappear between sessions.
"""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from bookstore.config import Settings
from bookstore.database import (
    create_db_engine,
    create_session_factory,
    create_tables,
    drop_tables,
)
from bookstore.main import create_app
from bookstore.schemas import BookCreate, BookResponse
from bookstore.storage import BookStore, InMemoryBookStore, SqlBookStore

SQLITE_MEMORY_URL = "sqlite:///:memory:"


# =============================================================================
# SETTINGS
# =============================================================================
@pytest.fixture
def settings() -> Settings:
    """Settings for tests; nothing is read from the environment file."""
    return Settings(
        _env_file=None,
        storage_backend="memory",
        database_url=SQLITE_MEMORY_URL,
        log_level="WARNING",
    )


# =============================================================================
# DATABASE FIXTURES
# =============================================================================
@pytest.fixture
def engine(settings: Settings) -> Generator[Engine, None, None]:
    """SQLite in-memory engine with the books table created."""
    engine = create_db_engine(settings)
    create_tables(engine)

    yield engine

    drop_tables(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return create_session_factory(engine)


# =============================================================================
# STORE FIXTURES
# =============================================================================
@pytest.fixture
def memory_store() -> InMemoryBookStore:
    return InMemoryBookStore()


@pytest.fixture
def sql_store(session_factory: sessionmaker[Session]) -> SqlBookStore:
    return SqlBookStore(session_factory, soft_delete=True)


@pytest.fixture(params=["memory", "sql"])
def store(request: pytest.FixtureRequest) -> BookStore:
    """Each test using this fixture runs once per storage backend."""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def client(settings: Settings, store: BookStore) -> Generator[TestClient, None, None]:
    """Test client for an app wired to the parametrized store."""
    app = create_app(settings, store=store)

    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================
@pytest.fixture
def sample_book(store: BookStore) -> BookResponse:
    """A single stored book."""
    return store.create(
        BookCreate(title="Dune", author="Frank Herbert", year=1965)
    )


@pytest.fixture
def multiple_books(store: BookStore) -> list[BookResponse]:
    """Several stored books with distinct titles."""
    return store.create_many(
        [
            BookCreate(title="1984", author="George Orwell", year=1949),
            BookCreate(title="Animal Farm", author="George Orwell", year=1945),
            BookCreate(title="Foundation", author="Isaac Asimov", year=1951),
        ]
    )
