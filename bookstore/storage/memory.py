"""
In-Memory Book Store

Keeps books in a dict in process memory. Useful for development and tests;
everything is lost when the process exits.

Differences from the SQL store:
- titles are not required to be unique
- ids are client-suppliable and otherwise allocated as "highest seen + 1"
- deletes remove the entry (there is no deletion timestamp)
- books carry no timestamps

FastAPI runs sync handlers in a thread pool, so every method holds a lock
for its whole body.
"""

import logging
import threading
from typing import Sequence

from bookstore.schemas.book import BookBase, BookCreate, BookResponse
from bookstore.storage.errors import Conflict, NotFound

logger = logging.getLogger(__name__)


class InMemoryBookStore:
    """BookStore backed by an insertion-ordered dict."""

    backend = "memory"

    def __init__(self, books: Sequence[BookCreate] = ()) -> None:
        self._books: dict[int, BookResponse] = {}
        self._next_id = 1
        self._lock = threading.Lock()
        if books:
            self.create_many(books)

    # -------------------------------------------------------------------------
    # Helpers (caller holds the lock)
    # -------------------------------------------------------------------------
    def _allocate_id(self, reserved: set[int]) -> int:
        while self._next_id in self._books or self._next_id in reserved:
            self._next_id += 1
        return self._next_id

    def _insert(self, book_id: int, book: BookBase) -> BookResponse:
        stored = BookResponse(
            id=book_id,
            title=book.title,
            author=book.author,
            year=book.year,
        )
        self._books[book_id] = stored
        self._next_id = max(self._next_id, book_id + 1)
        return stored.model_copy()

    # -------------------------------------------------------------------------
    # BookStore
    # -------------------------------------------------------------------------
    def list_all(self) -> list[BookResponse]:
        with self._lock:
            return [book.model_copy() for book in self._books.values()]

    def get(self, book_id: int) -> BookResponse:
        with self._lock:
            book = self._books.get(book_id)
            if book is None:
                raise NotFound(book_id)
            return book.model_copy()

    def create(self, book: BookCreate) -> BookResponse:
        with self._lock:
            if book.id is not None and book.id in self._books:
                raise Conflict(f"Book with id {book.id} already exists")

            book_id = book.id if book.id is not None else self._allocate_id(set())
            return self._insert(book_id, book)

    def create_many(self, books: Sequence[BookCreate]) -> list[BookResponse]:
        with self._lock:
            # Check the whole batch before writing any of it
            explicit = [book.id for book in books if book.id is not None]
            clashes = sorted(
                {
                    book_id
                    for book_id in explicit
                    if book_id in self._books or explicit.count(book_id) > 1
                }
            )
            if clashes:
                raise Conflict(
                    "Books with these ids already exist or repeat in the batch: "
                    + ", ".join(str(book_id) for book_id in clashes)
                )

            reserved = set(explicit)
            created = []
            for book in books:
                book_id = (
                    book.id if book.id is not None else self._allocate_id(reserved)
                )
                created.append(self._insert(book_id, book))

            logger.debug(f"Stored {len(created)} books in memory")
            return created

    def update(self, book_id: int, book: BookBase) -> BookResponse:
        with self._lock:
            if book_id not in self._books:
                raise NotFound(book_id)
            return self._insert(book_id, book)

    def delete(self, book_id: int) -> None:
        with self._lock:
            if self._books.pop(book_id, None) is None:
                raise NotFound(book_id)

    def close(self) -> None:
        pass
