"""
Book Pydantic Schemas

Request and response shapes for book records:
- BookBase: the mutable fields (title, author, year)
- BookCreate: body of POST /books and each item of POST /books/batch
- BookPatch: body of PUT /books/{id}, applied as a merge patch
- BookResponse: what the API returns and what every store hands back

Only the structure is checked. Empty titles or negative years are
accepted as-is, but types are strict: "1965" or 1965.0 is not a year.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Range of the INTEGER id column
MIN_BOOK_ID = -(2**31)
MAX_BOOK_ID = 2**31 - 1


class BookBase(BaseModel):
    """Fields every book has and every write replaces."""

    model_config = ConfigDict(strict=True)

    title: str = Field(
        ...,
        description="Book title",
        examples=["Dune", "1984"],
    )

    author: str = Field(
        ...,
        description="Author name",
        examples=["Frank Herbert", "George Orwell"],
    )

    year: int = Field(
        ...,
        description="Publication year",
        examples=[1965, 1949],
    )


class BookCreate(BookBase):
    """
    Schema for creating a new book.

    The id is optional. The in-memory store uses a given id and answers
    with a conflict if it is already taken; the SQL store always assigns
    its own.

    Example request body:
    {
        "title": "Dune",
        "author": "Frank Herbert",
        "year": 1965
    }
    """

    id: int | None = Field(
        default=None,
        ge=MIN_BOOK_ID,
        le=MAX_BOOK_ID,
        description="Client-chosen identifier (optional, in-memory store only)",
    )


class BookPatch(BaseModel):
    """
    Schema for updating an existing book.

    Every field is optional and only the keys present in the request body
    are applied. An explicit null is rejected, so a client cannot blank a
    field by accident. Any "id" in the body is ignored.
    """

    model_config = ConfigDict(strict=True)

    title: str | None = Field(default=None, description="Book title")
    author: str | None = Field(default=None, description="Author name")
    year: int | None = Field(default=None, description="Publication year")

    @field_validator("title", "author", "year", mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("field may be omitted but not null")
        return v

    def merge_into(self, book: BookBase) -> BookBase:
        """
        Apply the fields present in the request onto an existing book.

        model_dump(exclude_unset=True) returns only the keys the client
        actually sent; everything else keeps its current value.
        """
        current = BookBase(title=book.title, author=book.author, year=book.year)
        return current.model_copy(update=self.model_dump(exclude_unset=True))


class BookResponse(BookBase):
    """
    Schema for book responses.

    The timestamps are filled by the SQL store and stay null for books
    kept in memory.
    """

    id: int = Field(..., description="Unique identifier")
    created_at: datetime | None = Field(
        default=None,
        description="When the book was created",
    )
    updated_at: datetime | None = Field(
        default=None,
        description="When the book was last updated",
    )

    # Lax again: responses are re-validated from JSON-mode dicts, where
    # timestamps are strings
    model_config = ConfigDict(
        strict=False,
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Dune",
                "author": "Frank Herbert",
                "year": 1965,
                "created_at": "2024-01-15T10:30:00Z",
                "updated_at": "2024-01-15T10:30:00Z",
            }
        },
    )
