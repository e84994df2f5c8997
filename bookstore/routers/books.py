"""
Books Router

CRUD endpoints for books, plus batch creation.

Each handler makes one storage call (update makes two: load, then write),
wraps the result in the response envelope and sets the status code.
Storage errors are not caught here; the exception handlers registered in
main.py turn them into error envelopes:

- NotFound -> 404
- Conflict -> 409
- StorageError -> 500
- malformed JSON, wrong shape or a non-integer id -> 400
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Path, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from bookstore.dependencies import RawBody, Store
from bookstore.schemas import (
    BookCreate,
    BookPatch,
    BookResponse,
    Envelope,
    single_page,
    success,
)
from bookstore.schemas.book import MAX_BOOK_ID, MIN_BOOK_ID

logger = logging.getLogger(__name__)

# Ids outside the column's range can never exist; reject them as 400
BookId = Annotated[
    int,
    Path(ge=MIN_BOOK_ID, le=MAX_BOOK_ID, description="Book identifier"),
]

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        400: {"model": Envelope[None], "description": "Malformed request"},
        404: {"model": Envelope[None], "description": "Book not found"},
        409: {"model": Envelope[None], "description": "Conflicting book"},
        500: {"model": Envelope[None], "description": "Storage failure"},
    },
)


@router.get(
    "",
    response_model=Envelope[list[BookResponse]],
    summary="List all books",
    description="Get every book. The list is always reported as one page.",
)
def list_books(store: Store) -> Envelope:
    books = store.list_all()
    return success(status.HTTP_200_OK, books, pagination=single_page(len(books)))


@router.get(
    "/{book_id}",
    response_model=Envelope[BookResponse],
    summary="Get a book by ID",
)
def get_book(book_id: BookId, store: Store) -> Envelope:
    return success(status.HTTP_200_OK, store.get(book_id))


@router.post(
    "",
    response_model=Envelope[BookResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a new book",
    description=(
        "Create a book. The SQL store always assigns the id; the in-memory "
        "store uses a given id."
    ),
)
def create_book(book_data: BookCreate, store: Store) -> Envelope:
    book = store.create(book_data)
    logger.info(f"Created book {book.id}")
    return success(status.HTTP_201_CREATED, book)


@router.post(
    "/batch",
    response_model=Envelope[list[BookResponse]],
    status_code=status.HTTP_201_CREATED,
    summary="Create several books",
    description=(
        "Create a list of books in one all-or-nothing operation. "
        "The pagination block carries the number of books created."
    ),
)
def create_books(books_data: list[BookCreate], store: Store) -> Envelope:
    books = store.create_many(books_data)
    logger.info(f"Created {len(books)} books in batch")
    return success(
        status.HTTP_201_CREATED,
        books,
        pagination=single_page(len(books)),
    )


@router.put(
    "/{book_id}",
    response_model=Envelope[BookResponse],
    summary="Update a book",
    description=(
        "Apply the fields present in the body onto the stored book. "
        "Omitted fields keep their values; the id never changes."
    ),
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": BookPatch.model_json_schema()}},
        }
    },
)
def update_book(book_id: BookId, body: RawBody, store: Store) -> Envelope:
    """
    Update an existing book.

    Checks run in this order: the path id (400), the stored book (404),
    then the body (400). The body is therefore taken raw and decoded here
    rather than by FastAPI. The patch is merged onto the stored book and
    written back under the path id, whatever id the body carried.
    """
    current = store.get(book_id)

    try:
        book_data = BookPatch.model_validate_json(body)
    except ValidationError as exc:
        raise RequestValidationError(
            [
                {**error, "loc": ("body", *error["loc"])}
                for error in exc.errors(include_url=False)
            ]
        ) from exc

    book = store.update(book_id, book_data.merge_into(current))
    logger.info(f"Updated book {book_id}")
    return success(status.HTTP_200_OK, book)


@router.delete(
    "/{book_id}",
    response_model=Envelope[None],
    summary="Delete a book",
)
def delete_book(book_id: BookId, store: Store) -> Envelope:
    store.delete(book_id)
    logger.info(f"Deleted book {book_id}")
    return success(status.HTTP_200_OK)
