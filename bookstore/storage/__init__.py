"""
Storage Package

Storage adapters for book records.

- base.py: the BookStore protocol handlers depend on
- errors.py: StorageError, NotFound, Conflict
- memory.py: InMemoryBookStore (dict in process memory)
- sql.py: SqlBookStore (SQLAlchemy table)

open_store() picks the implementation named by STORAGE_BACKEND.
"""

from bookstore.config import Settings
from bookstore.storage.base import BookStore
from bookstore.storage.errors import Conflict, NotFound, StorageError
from bookstore.storage.memory import InMemoryBookStore
from bookstore.storage.sql import SqlBookStore


def open_store(settings: Settings) -> BookStore:
    """Build the storage handle selected by settings."""
    if settings.storage_backend == "memory":
        return InMemoryBookStore()
    return SqlBookStore.from_settings(settings)


__all__ = [
    "BookStore",
    "Conflict",
    "InMemoryBookStore",
    "NotFound",
    "SqlBookStore",
    "StorageError",
    "open_store",
]
