"""
Pydantic Schemas Package

Request/response validation models and the response envelope.

Schema Naming Convention:
- XxxBase: Shared fields
- XxxCreate: Fields accepted when creating a record
- XxxPatch: Fields accepted when updating (all optional, merge semantics)
- XxxResponse: Fields returned in API responses
"""

from bookstore.schemas.book import (
    BookBase,
    BookCreate,
    BookPatch,
    BookResponse,
)
from bookstore.schemas.envelope import (
    Envelope,
    PaginationResponse,
    StatusResponse,
    failure,
    single_page,
    success,
)

__all__ = [
    # Book schemas
    "BookBase",
    "BookCreate",
    "BookPatch",
    "BookResponse",
    # Envelope
    "Envelope",
    "PaginationResponse",
    "StatusResponse",
    "failure",
    "single_page",
    "success",
]
