"""
Storage Protocol

The boundary between request handlers and the place book records live.
Handlers only ever talk to a BookStore; which implementation sits behind
it is decided once at startup.

Every method is a single unit of work. Nothing spans two calls, so an
update or delete that first looks a book up and then writes it can race
with a concurrent request on the same id.
"""

from typing import Protocol, Sequence

from bookstore.schemas.book import BookBase, BookCreate, BookResponse


class BookStore(Protocol):
    """Single-table persistence for books."""

    #: Short name reported by the health endpoint
    backend: str

    def list_all(self) -> list[BookResponse]:
        """Return every live book."""
        ...

    def get(self, book_id: int) -> BookResponse:
        """Return one book. Raises NotFound."""
        ...

    def create(self, book: BookCreate) -> BookResponse:
        """Persist a new book, assigning an id if it has none. Raises Conflict."""
        ...

    def create_many(self, books: Sequence[BookCreate]) -> list[BookResponse]:
        """
        Persist several books as one all-or-nothing unit.

        Returns the persisted books; their count is the number of rows
        written. Raises Conflict and writes nothing if any book conflicts.
        """
        ...

    def update(self, book_id: int, book: BookBase) -> BookResponse:
        """
        Replace the mutable fields of a live book.

        The stored id is always book_id. Raises NotFound, Conflict.
        """
        ...

    def delete(self, book_id: int) -> None:
        """Remove a live book. Raises NotFound."""
        ...

    def close(self) -> None:
        """Release any resources held by the store."""
        ...
