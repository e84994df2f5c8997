"""
SQL Book Store

Persists books in the `books` table through SQLAlchemy.

Each public method runs in its own session and transaction:
- IntegrityError (duplicate title) becomes Conflict
- any other SQLAlchemyError becomes StorageError
- the transaction is rolled back on any failure

Soft delete
===========
With soft_delete enabled (the default) a delete stamps deleted_at instead
of removing the row. Every read, update and delete only sees rows whose
deleted_at is NULL, so a soft-deleted book behaves exactly like a removed
one, except that its title stays reserved by the unique index.

Ids always come from the database. A client-supplied id is ignored,
since an explicit id does not advance a PostgreSQL sequence and the next
generated id would collide with it.
"""

import logging
from collections.abc import Generator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Sequence

from sqlalchemy import Engine, select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from bookstore.config import Settings
from bookstore.database import create_db_engine, create_session_factory, create_tables
from bookstore.models import Book
from bookstore.schemas.book import BookBase, BookCreate, BookResponse
from bookstore.storage.errors import Conflict, NotFound, StorageError

logger = logging.getLogger(__name__)


class SqlBookStore:
    """BookStore backed by a relational table."""

    backend = "sql"

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        soft_delete: bool = True,
        engine: Engine | None = None,
    ) -> None:
        """
        Args:
            session_factory: Factory for per-operation sessions
            soft_delete: Stamp deleted_at instead of deleting rows
            engine: Engine owned by this store; disposed by close()
        """
        self._session_factory = session_factory
        self._soft_delete = soft_delete
        self._engine = engine

    @classmethod
    def from_settings(cls, settings: Settings) -> "SqlBookStore":
        """
        Build a store that owns its engine.

        Connects once to fail fast on an unreachable database, then creates
        the schema when AUTO_MIGRATE is on. Errors propagate to the caller;
        at startup they are fatal.
        """
        engine = create_db_engine(settings)
        try:
            with engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            if settings.auto_migrate:
                create_tables(engine)
        except SQLAlchemyError:
            engine.dispose()
            raise

        logger.info(f"Connected to {engine.url.render_as_string(hide_password=True)}")
        return cls(
            create_session_factory(engine),
            soft_delete=settings.soft_delete,
            engine=engine,
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------
    @contextmanager
    def _session(self) -> Generator[Session, None, None]:
        """
        One session per storage call, translating database errors.

        StorageError subclasses raised inside the block (NotFound) pass
        through untouched.
        """
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as exc:
            session.rollback()
            logger.warning(f"Constraint violation: {exc.orig}")
            raise Conflict("Book conflicts with an existing record") from exc
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error(f"Database error: {exc}")
            raise StorageError() from exc
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    @staticmethod
    def _get_live(session: Session, book_id: int) -> Book:
        stmt = select(Book).where(Book.id == book_id, Book.deleted_at.is_(None))
        book = session.execute(stmt).scalar_one_or_none()
        if book is None:
            raise NotFound(book_id)
        return book

    # -------------------------------------------------------------------------
    # BookStore
    # -------------------------------------------------------------------------
    def list_all(self) -> list[BookResponse]:
        with self._session() as session:
            stmt = select(Book).where(Book.deleted_at.is_(None)).order_by(Book.id)
            books = session.execute(stmt).scalars().all()
            return [BookResponse.model_validate(book) for book in books]

    def get(self, book_id: int) -> BookResponse:
        with self._session() as session:
            return BookResponse.model_validate(self._get_live(session, book_id))

    def create(self, book: BookCreate) -> BookResponse:
        with self._session() as session:
            row = Book(title=book.title, author=book.author, year=book.year)
            session.add(row)
            session.commit()
            session.refresh(row)
            return BookResponse.model_validate(row)

    def create_many(self, books: Sequence[BookCreate]) -> list[BookResponse]:
        with self._session() as session:
            rows = [
                Book(title=book.title, author=book.author, year=book.year)
                for book in books
            ]
            session.add_all(rows)
            # A single commit: either every row lands or none does
            session.commit()
            for row in rows:
                session.refresh(row)

            logger.info(f"Inserted {len(rows)} books")
            return [BookResponse.model_validate(row) for row in rows]

    def update(self, book_id: int, book: BookBase) -> BookResponse:
        with self._session() as session:
            row = self._get_live(session, book_id)
            row.title = book.title
            row.author = book.author
            row.year = book.year
            session.commit()
            session.refresh(row)
            return BookResponse.model_validate(row)

    def delete(self, book_id: int) -> None:
        with self._session() as session:
            row = self._get_live(session, book_id)
            if self._soft_delete:
                row.deleted_at = datetime.now(timezone.utc)
            else:
                session.delete(row)
            session.commit()

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
