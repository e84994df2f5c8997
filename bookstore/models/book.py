"""
Book Model

The single table of the Bookstore API.

Besides the book fields, each row carries store-managed timestamps:
- created_at / updated_at: maintained by the database
- deleted_at: set when the row is soft-deleted; live rows have NULL here

The unique index on title covers every row, soft-deleted ones included.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from bookstore.database import Base


class Book(Base):
    """
    Book model representing one record in the collection.

    Table: books

    Example:
        book = Book(title="Dune", author="Frank Herbert", year=1965)
    """

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True)

    title: Mapped[str] = mapped_column(
        String(256),
        unique=True,
        index=True,
        nullable=False,
        comment="Book title",
    )

    author: Mapped[str] = mapped_column(
        String(256),
        nullable=False,
        comment="Author name",
    )

    year: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Publication year",
    )

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        index=True,
        nullable=True,
        comment="Soft-delete timestamp; NULL for live rows",
    )

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', author='{self.author}')"
