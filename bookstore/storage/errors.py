"""
Storage Errors

Exceptions raised by every BookStore implementation. The application
maps them to HTTP responses:

- NotFound -> 404
- Conflict -> 409
- StorageError (anything else) -> 500
"""


class StorageError(Exception):
    """The store could not complete the operation."""

    def __init__(self, message: str = "storage operation failed") -> None:
        self.message = message
        super().__init__(message)


class NotFound(StorageError):
    """No live book has the requested id."""

    def __init__(self, book_id: int) -> None:
        self.book_id = book_id
        super().__init__(f"Book with id {book_id} not found")


class Conflict(StorageError):
    """A write would violate a uniqueness constraint."""
