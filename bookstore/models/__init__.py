"""
SQLAlchemy Models Package

Database models for the Bookstore API. Importing this package registers
every table with Base.metadata, which Alembic and create_tables() rely on.
"""

from bookstore.models.book import Book

__all__ = [
    "Book",
]
