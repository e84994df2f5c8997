"""
Response Envelope

Every response body, successful or not, has the same shape:

    {
        "status": {"code": 200, "message": "success"},
        "data": <book | list of books | null>,
        "errors": ["..."],
        "pagination": {...} | null
    }

Pagination is reported for list-shaped payloads only, and always as a
single page holding every item.
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

DataT = TypeVar("DataT")

SUCCESS = "success"
ERROR = "error"


class StatusResponse(BaseModel):
    """HTTP status code repeated in the body, plus a one-word verdict."""

    code: int = Field(..., description="HTTP status code", examples=[200])
    message: str = Field(
        ...,
        description="'success' or 'error'",
        examples=[SUCCESS],
    )


class PaginationResponse(BaseModel):
    """Pagination metadata for list payloads."""

    total_records: int = Field(..., ge=0, description="Number of records")
    current_page: int = Field(..., ge=1, description="Current page number")
    total_pages: int = Field(..., ge=1, description="Total number of pages")
    next_page: int | None = Field(default=None, description="Next page, if any")
    prev_page: int | None = Field(default=None, description="Previous page, if any")
    page_size: int = Field(..., ge=0, description="Number of records on this page")


class Envelope(BaseModel, Generic[DataT]):
    """Uniform JSON wrapper for every response."""

    status: StatusResponse
    data: DataT | None = None
    errors: list[str] = Field(default_factory=list)
    pagination: PaginationResponse | None = None


def single_page(count: int) -> PaginationResponse:
    """Pagination block for a list returned in full."""
    return PaginationResponse(
        total_records=count,
        current_page=1,
        total_pages=1,
        next_page=None,
        prev_page=None,
        page_size=count,
    )


def success(
    code: int,
    data: Any = None,
    pagination: PaginationResponse | None = None,
) -> Envelope:
    """Build a success envelope around a payload."""
    return Envelope(
        status=StatusResponse(code=code, message=SUCCESS),
        data=data,
        pagination=pagination,
    )


def failure(code: int, errors: list[str]) -> Envelope:
    """Build an error envelope carrying one or more messages."""
    return Envelope(
        status=StatusResponse(code=code, message=ERROR),
        errors=errors,
    )
