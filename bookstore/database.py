"""
Database Configuration Module

SQLAlchemy 2.0 setup for the SQL storage backend.

Nothing here is created at import time. The engine and the session
factory are built from Settings by whoever owns the storage handle
(the application lifespan, the seed script, or a test fixture), so
there is no module-level connection state.

Session Management Pattern
==========================
The SQL store opens one short-lived session per storage call:
1. Open a session from the factory
2. Run the statement(s) for that single operation
3. Commit on success, roll back on failure
4. Close the session
"""

from sqlalchemy import URL, Engine, create_engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bookstore.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic and create_tables() discover the schema through
    Base.metadata.
    """
    pass


def build_database_url(settings: Settings) -> URL:
    """
    Build the SQLAlchemy URL from settings.

    DATABASE_URL wins when it is set; otherwise the URL is assembled from
    the DB_* parts. URL.create escapes special characters in the password.
    """
    if settings.database_url:
        return make_url(settings.database_url)

    return URL.create(
        drivername=settings.db_driver,
        username=settings.db_user,
        password=settings.db_pass,
        host=settings.db_host,
        port=settings.db_port,
        database=settings.db_name,
    )


def create_db_engine(settings: Settings) -> Engine:
    """
    Create the engine shared by every request.

    Key parameters:
    - pool_size / max_overflow: connection pool sizing (server databases)
    - pool_pre_ping: test connections before use
    - echo: log SQL statements in debug mode

    SQLite gets check_same_thread=False because FastAPI runs sync handlers
    in a thread pool, and an in-memory SQLite database is pinned to one
    connection with StaticPool so it survives between sessions.
    """
    url = build_database_url(settings)

    if url.get_backend_name() == "sqlite":
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=settings.debug, **kwargs)

    return create_engine(
        url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        echo=settings.debug,
    )


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """
    Create the session factory bound to an engine.

    expire_on_commit=False keeps loaded attributes readable after commit,
    so rows can be converted to response schemas once the transaction
    has ended.
    """
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


def create_tables(engine: Engine) -> None:
    """
    Create all tables that do not exist yet.

    Used for AUTO_MIGRATE at startup, by the seed script and by tests.
    Alembic remains the tool for evolving an existing schema.
    """
    # Register the models with Base.metadata before creating
    import bookstore.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def drop_tables(engine: Engine) -> None:
    """
    Drop all tables.

    Deletes all data. Only meant for tests and local resets.
    """
    Base.metadata.drop_all(bind=engine)
